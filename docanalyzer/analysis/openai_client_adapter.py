from typing import Any

import httpx
import openai

from docanalyzer.analysis.client_base import BaseAnalysisClient
from docanalyzer.analysis.exceptions import AnalysisError, AnalysisNetworkError
from docanalyzer.analysis.models import AnalysisContent


class OpenAIClientAdapter(BaseAnalysisClient):
    """Analysis AI client adapter built on OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": schema_name,
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": self._user_content(user_prompt, attachment)},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise AnalysisNetworkError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise AnalysisError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise AnalysisError("AI returned empty response")
        return content

    @staticmethod
    def _user_content(
        user_prompt: str,
        attachment: AnalysisContent | None,
    ) -> str | list[dict[str, Any]]:
        if attachment is None or attachment.file_base64 is None:
            return user_prompt
        data_url = f"data:{attachment.mime_type};base64,{attachment.file_base64}"
        if attachment.mime_type.startswith("image/"):
            part: dict[str, Any] = {"type": "image_url", "image_url": {"url": data_url}}
        else:
            part = {
                "type": "file",
                "file": {"filename": attachment.file_name, "file_data": data_url},
            }
        return [{"type": "text", "text": user_prompt}, part]
