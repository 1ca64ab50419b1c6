from docanalyzer.analysis.base import BaseAnalysisService
from docanalyzer.analysis.factory import AnalysisServiceFactory
from docanalyzer.analysis.service import LlmAnalysisService

__all__ = ["AnalysisServiceFactory", "BaseAnalysisService", "LlmAnalysisService"]
