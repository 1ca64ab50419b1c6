class PipelineError(Exception):
    """Base exception for all pipeline-related errors."""


class InvalidTransitionError(PipelineError):
    """Raised when a file record is moved to a status its current status does not allow."""


class OrchestrationError(PipelineError):
    """Raised when analysis of a file fails outside the wrapped service calls."""


class RecordNotFoundError(PipelineError):
    """Raised when a batch index or file name does not match any record."""
