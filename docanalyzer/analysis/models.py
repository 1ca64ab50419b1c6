from dataclasses import dataclass, field
from enum import Enum


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Clause:
    """A contractual provision flagged in the document."""

    title: str
    snippet: str
    reason: str


@dataclass(frozen=True)
class Risk:
    """A flagged concern with a remediation suggestion."""

    risk: str
    severity: Severity
    explanation: str
    recommended_action: str


@dataclass(frozen=True)
class AnalysisContent:
    """What is sent for analysis: either text or a base64 file payload, never both."""

    text: str | None = None
    file_base64: str | None = None
    file_name: str = ""
    mime_type: str = ""

    def __post_init__(self) -> None:
        if (self.text is None) == (self.file_base64 is None):
            raise ValueError("AnalysisContent needs exactly one of text or file_base64")

    @property
    def is_text(self) -> bool:
        return self.text is not None


@dataclass(frozen=True)
class AnalysisResult:
    """Merged clause and risk output for one file.

    The degraded flags mark sections that hold the fallback value because the
    corresponding remote call failed.
    """

    clauses: list[Clause] = field(default_factory=list)
    risks: list[Risk] = field(default_factory=list)
    clauses_degraded: bool = False
    risks_degraded: bool = False

    @property
    def degraded(self) -> bool:
        return self.clauses_degraded or self.risks_degraded
