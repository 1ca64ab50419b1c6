"""AI-powered clause extraction and risk assessment."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from docanalyzer.analysis.base import BaseAnalysisService
from docanalyzer.analysis.client_base import BaseAnalysisClient
from docanalyzer.analysis.exceptions import AnalysisError
from docanalyzer.analysis.models import AnalysisContent, Clause, Risk
from docanalyzer.analysis.prompt_loader import load_json_schema, load_prompt_template
from docanalyzer.analysis.validator import build_clauses, build_risks
from docanalyzer.logging.logger import Log

DEFAULT_SYSTEM_PROMPT = (
    "You are a careful legal document reviewer. "
    "Base every answer strictly on the supplied document and answer in JSON only."
)


@dataclass(frozen=True)
class _Task:
    schema_name: str
    template: str
    json_schema: str
    json_schema_dict: dict[str, object]


class LlmAnalysisService(BaseAnalysisService):
    """Runs the clause and risk prompts against an AI provider."""

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        temperature: float = 0.0,
        prompt_dir: Path | None = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._system_prompt = system_prompt
        self._clause_task = self._load_task(
            "clause_analysis", "clause_prompt.txt", "clause_schema.json", prompt_dir
        )
        self._risk_task = self._load_task(
            "risk_assessment", "risk_prompt.txt", "risk_schema.json", prompt_dir
        )

    def extract_clauses(self, content: AnalysisContent) -> list[Clause]:
        parsed = self._run(self._clause_task, content)
        clauses = build_clauses(parsed)
        Log.info(f"Clause extraction complete: {len(clauses)} clauses", file_name=content.file_name)
        return clauses

    def assess_risks(self, content: AnalysisContent) -> list[Risk]:
        parsed = self._run(self._risk_task, content)
        risks = build_risks(parsed)
        Log.info(f"Risk assessment complete: {len(risks)} risks", file_name=content.file_name)
        return risks

    def _run(self, task: _Task, content: AnalysisContent) -> dict[str, Any]:
        prompt = self._build_prompt(task, content)
        Log.debug(f"{task.schema_name} prompt:\n{prompt}", file_name=content.file_name)

        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            schema_name=task.schema_name,
            json_schema=task.json_schema_dict,
            attachment=None if content.is_text else content,
        )
        Log.debug(f"AI raw response:\n{raw_response}", file_name=content.file_name)
        return self._parse_json(raw_response)

    @staticmethod
    def _build_prompt(task: _Task, content: AnalysisContent) -> str:
        if content.is_text:
            document = content.text
        else:
            document = f"The document is attached as the file '{content.file_name}'."
        return task.template.format(document=document, json_schema=task.json_schema)

    @staticmethod
    def _load_task(
        schema_name: str,
        template_name: str,
        schema_file: str,
        prompt_dir: Path | None,
    ) -> _Task:
        schema_str = load_json_schema(schema_file, prompt_dir)
        return _Task(
            schema_name=schema_name,
            template=load_prompt_template(template_name, prompt_dir),
            json_schema=schema_str,
            json_schema_dict=json.loads(schema_str),
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise AnalysisError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise AnalysisError("JSON response must be an object")
        return parsed
