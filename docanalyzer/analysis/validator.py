"""Validates parsed clause/risk JSON and builds domain objects."""

from typing import Any

from docanalyzer.analysis.exceptions import AnalysisValidationError
from docanalyzer.analysis.models import Clause, Risk, Severity

_MAX_ITEMS = 100
_VALID_SEVERITIES = frozenset(s.value for s in Severity)


def build_clauses(data: dict[str, Any]) -> list[Clause]:
    """Validate a ``{"clauses": [...]}`` payload.

    Raises:
        AnalysisValidationError: on any validation failure.
    """
    items = _require_list(data, "clauses")
    return [_build_clause(item, i) for i, item in enumerate(items)]


def build_risks(data: dict[str, Any]) -> list[Risk]:
    """Validate a ``{"risks": [...]}`` payload.

    Raises:
        AnalysisValidationError: on any validation failure.
    """
    items = _require_list(data, "risks")
    return [_build_risk(item, i) for i, item in enumerate(items)]


def _require_list(data: dict[str, Any], key: str) -> list[Any]:
    if key not in data:
        raise AnalysisValidationError(f"Missing required top-level field: {key}")
    raw = data[key]
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise AnalysisValidationError(f"'{key}' must be a list")
    if len(raw) > _MAX_ITEMS:
        raise AnalysisValidationError(f"Too many {key}: {len(raw)} (max {_MAX_ITEMS})")
    return raw


def _build_clause(raw: Any, index: int) -> Clause:
    if not isinstance(raw, dict):
        raise AnalysisValidationError(f"Clause at index {index} must be an object")
    return Clause(
        title=_required_str(raw, "title", f"Clause at index {index}"),
        snippet=_optional_str(raw, "snippet", f"Clause at index {index}"),
        reason=_optional_str(raw, "reason", f"Clause at index {index}"),
    )


def _build_risk(raw: Any, index: int) -> Risk:
    where = f"Risk at index {index}"
    if not isinstance(raw, dict):
        raise AnalysisValidationError(f"{where} must be an object")
    severity = raw.get("severity")
    if not isinstance(severity, str) or severity.strip().lower() not in _VALID_SEVERITIES:
        raise AnalysisValidationError(
            f"{where}: 'severity' must be one of {sorted(_VALID_SEVERITIES)}, got {severity!r}"
        )
    action_key = "recommendedAction" if "recommendedAction" in raw else "recommended_action"
    return Risk(
        risk=_required_str(raw, "risk", where),
        severity=Severity(severity.strip().lower()),
        explanation=_optional_str(raw, "explanation", where),
        recommended_action=_optional_str(raw, action_key, where),
    )


def _required_str(raw: dict[str, Any], key: str, where: str) -> str:
    value = raw.get(key)
    if not value or not isinstance(value, str) or not value.strip():
        raise AnalysisValidationError(f"{where}: '{key}' must be a non-empty string")
    return value.strip()


def _optional_str(raw: dict[str, Any], key: str, where: str) -> str:
    value = raw.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise AnalysisValidationError(f"{where}: '{key}' must be a string")
    return value.strip()
