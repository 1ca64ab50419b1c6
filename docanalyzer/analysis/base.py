from abc import ABC, abstractmethod

from docanalyzer.analysis.models import AnalysisContent, Clause, Risk


class BaseAnalysisService(ABC):
    """Contract for the clause-extraction and risk-assessment services."""

    @abstractmethod
    def extract_clauses(self, content: AnalysisContent) -> list[Clause]:
        """Find the key clauses in a document.

        Args:
            content: Resolved document text or base64 payload.

        Returns:
            Clauses in document order.

        Raises:
            AnalysisError: on any failure.
        """

    @abstractmethod
    def assess_risks(self, content: AnalysisContent) -> list[Risk]:
        """Assess the risks a document creates.

        Args:
            content: Resolved document text or base64 payload.

        Returns:
            Risks in the order the service reports them.

        Raises:
            AnalysisError: on any failure.
        """
