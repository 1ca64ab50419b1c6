"""Copy/export formatting for stored analysis results."""

from docanalyzer.analysis.models import AnalysisResult

_RULE = "=" * 60
_DEGRADED_NOTE = "(analysis service unavailable, no results)"


def format_result(file_name: str, result: AnalysisResult) -> str:
    """Render one file's clauses and risks as plain text."""
    lines = [_RULE, f"Analysis: {file_name}", _RULE, "", "KEY CLAUSES"]
    if result.clauses_degraded:
        lines.append(_DEGRADED_NOTE)
    elif not result.clauses:
        lines.append("None identified.")
    for number, clause in enumerate(result.clauses, start=1):
        lines.append(f"{number}. {clause.title}")
        if clause.snippet:
            lines.append(f'   "{clause.snippet}"')
        if clause.reason:
            lines.append(f"   Why it matters: {clause.reason}")

    lines.extend(["", "RISKS"])
    if result.risks_degraded:
        lines.append(_DEGRADED_NOTE)
    elif not result.risks:
        lines.append("None identified.")
    for number, risk in enumerate(result.risks, start=1):
        lines.append(f"{number}. [{risk.severity.value.upper()}] {risk.risk}")
        if risk.explanation:
            lines.append(f"   {risk.explanation}")
        if risk.recommended_action:
            lines.append(f"   Recommended action: {risk.recommended_action}")
    return "\n".join(lines)


def format_batch(results: dict[str, AnalysisResult]) -> str:
    return "\n\n".join(format_result(name, result) for name, result in results.items())


def to_export_dict(file_name: str, result: AnalysisResult) -> dict[str, object]:
    """JSON-serializable form using the analysis services' field names."""
    return {
        "fileName": file_name,
        "clauses": [
            {"title": c.title, "snippet": c.snippet, "reason": c.reason} for c in result.clauses
        ],
        "risks": [
            {
                "risk": r.risk,
                "severity": r.severity.value,
                "explanation": r.explanation,
                "recommendedAction": r.recommended_action,
            }
            for r in result.risks
        ],
        "degraded": {"clauses": result.clauses_degraded, "risks": result.risks_degraded},
    }
