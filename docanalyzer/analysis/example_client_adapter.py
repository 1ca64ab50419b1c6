"""Example analysis client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalysisClient and register the provider in AnalysisServiceFactory.
"""

import json
from typing import ClassVar

from docanalyzer.analysis.client_base import BaseAnalysisClient
from docanalyzer.analysis.models import AnalysisContent


class ExampleClientAdapter(BaseAnalysisClient):
    """Example adapter that returns fixed valid clause and risk JSON.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters.
    """

    RESPONSES: ClassVar[dict[str, dict[str, object]]] = {
        "clause_analysis": {
            "clauses": [
                {
                    "title": "Governing Law",
                    "snippet": "This agreement is governed by the laws of the stated jurisdiction.",
                    "reason": "Determines which courts and statutes apply to disputes.",
                }
            ]
        },
        "risk_assessment": {
            "risks": [
                {
                    "risk": "Unlimited liability",
                    "severity": "medium",
                    "explanation": "No cap on damages was found in the document.",
                    "recommendedAction": "Negotiate a liability cap tied to contract value.",
                }
            ]
        },
    }

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
        _ = model, temperature, system_prompt, user_prompt, json_schema, attachment
        return json.dumps(self.RESPONSES.get(schema_name, {}))
