from abc import ABC, abstractmethod

from docanalyzer.analysis.models import AnalysisContent


class BaseAnalysisClient(ABC):
    """Contract for provider-specific analysis AI clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        schema_name: str,
        json_schema: dict[str, object],
        attachment: AnalysisContent | None = None,
    ) -> str:
        """Return provider response as plain text.

        ``attachment`` carries a base64 file payload when the document is sent
        as binary instead of inline text.
        """
