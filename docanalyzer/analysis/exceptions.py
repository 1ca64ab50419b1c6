class AnalysisError(Exception):
    """Raised when a clause or risk analysis call fails."""


class AnalysisValidationError(AnalysisError):
    """Raised when the analysis response fails domain validation."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
