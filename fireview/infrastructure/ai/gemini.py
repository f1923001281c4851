"""Prompt service backed by the Gemini generateContent REST API.

Renders a named template, asks the model for JSON matching the template's
output schema, and returns the parsed object. Uses httpx.AsyncClient so
the call does not block the event loop.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from fireview.core.config import Settings, get_settings
from fireview.domain.exceptions import PromptServiceException
from fireview.infrastructure.ai.prompt_templates import PromptTemplateRenderer
from fireview.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)

_BASE = "https://generativelanguage.googleapis.com/v1beta"


def _extract_text(body: dict[str, Any]) -> str:
    """Return the first candidate's text, or raise if the model returned none."""
    candidates = body.get("candidates") or []
    if not candidates:
        feedback = body.get("promptFeedback") or {}
        reason = feedback.get("blockReason")
        raise PromptServiceException(
            f"Model returned no candidates{f' (blocked: {reason})' if reason else ''}."
        )
    parts = (candidates[0].get("content") or {}).get("parts") or []
    text = "".join(part.get("text", "") for part in parts)
    if not text.strip():
        raise PromptServiceException("Model returned an empty completion.")
    return text


class GeminiPromptService:
    """IPromptService implementation for Gemini models."""

    def __init__(
        self,
        api_key: str | None,
        model: str,
        *,
        renderer: PromptTemplateRenderer | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 60.0,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._renderer = renderer or PromptTemplateRenderer()
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> GeminiPromptService:
        settings = settings or get_settings()
        key = settings.gemini_api_key.get_secret_value() if settings.gemini_api_key else None
        return cls(key, settings.summary_model, timeout=settings.prompt_timeout_seconds)

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it."""
        if self._owns_http:
            await self._http.aclose()

    @traced("prompt.complete")
    async def complete(self, template_name: str, variables: dict[str, str]) -> dict[str, Any]:
        """Render template_name, call the model and return its JSON output."""
        if not self._api_key:
            raise PromptServiceException(
                "GEMINI_API_KEY is not configured; summaries are unavailable."
            )
        prompt = self._renderer.render(template_name, variables)
        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": self._renderer.output_schema(template_name),
            },
        }
        add_span_attributes(model=self._model, prompt_chars=len(prompt))
        url = f"{_BASE}/models/{self._model}:generateContent"
        try:
            resp = await self._http.post(
                url,
                params={"key": self._api_key},
                json=body,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise PromptServiceException(f"Could not reach the prompt service: {e}") from e
        if resp.status_code >= 400:
            raise PromptServiceException(self._error_message(resp))
        text = _extract_text(resp.json())
        try:
            output = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("Prompt %s returned non-JSON output; using raw text", template_name)
            output = {"summary": text.strip()}
        if not isinstance(output, dict):
            raise PromptServiceException("Model output is not a JSON object.")
        return output

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            body = None
        error = body.get("error") if isinstance(body, dict) else None
        message = error.get("message") if isinstance(error, dict) else None
        return message or f"Prompt service request failed with HTTP {resp.status_code}"
