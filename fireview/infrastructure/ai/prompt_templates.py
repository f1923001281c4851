"""Prompt templates: template name → prompt text (Jinja) plus output schema."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from jinja2 import Environment, StrictUndefined, Template
from jinja2.exceptions import UndefinedError

from fireview.core.constants import SUMMARY_TEMPLATE_NAME
from fireview.domain.exceptions import PromptServiceException


@dataclass(frozen=True)
class PromptTemplate:
    """Prompt text with named placeholders and the JSON schema of its output."""

    text: str
    output_schema: dict[str, Any]


# Context: collectionName, documentContent
_DEFAULT_TEMPLATES: dict[str, PromptTemplate] = {
    SUMMARY_TEMPLATE_NAME: PromptTemplate(
        text=(
            "You are an AI assistant tasked with summarizing data from a Firestore collection.\n\n"
            "Analyze the following document content and provide a concise summary of the key "
            "trends and insights.\n\n"
            "Collection Name: {{ collectionName }}\n"
            "Document Content: {{ documentContent }}\n\n"
            "Summary:"
        ),
        output_schema={
            "type": "OBJECT",
            "properties": {
                "summary": {
                    "type": "STRING",
                    "description": "A summary of the trends and insights found within the collection.",
                }
            },
            "required": ["summary"],
        },
    ),
}


class PromptTemplateRenderer:
    """Renders prompt text for a template name with named variables."""

    def __init__(self, templates: dict[str, PromptTemplate] | None = None) -> None:
        """Initialize with optional template dict; falls back to _DEFAULT_TEMPLATES."""
        self._templates = templates or _DEFAULT_TEMPLATES
        self._env = Environment(autoescape=False, undefined=StrictUndefined)
        self._compiled: dict[str, Template] = {
            name: self._env.from_string(tpl.text) for name, tpl in self._templates.items()
        }

    def output_schema(self, template_name: str) -> dict[str, Any]:
        """Return the output schema for template_name."""
        return self._get(template_name).output_schema

    def render(self, template_name: str, variables: dict[str, str]) -> str:
        """Render the prompt. Raises PromptServiceException for unknown names or missing variables."""
        self._get(template_name)
        try:
            return self._compiled[template_name].render(**variables)
        except UndefinedError as e:
            raise PromptServiceException(
                f"Prompt template {template_name!r} is missing a variable: {e}"
            ) from e

    def _get(self, template_name: str) -> PromptTemplate:
        if template_name not in self._templates:
            raise PromptServiceException(f"Unknown prompt template: {template_name}")
        return self._templates[template_name]
