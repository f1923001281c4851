"""Language-model prompt service integration."""

from fireview.infrastructure.ai.gemini import GeminiPromptService
from fireview.infrastructure.ai.prompt_templates import PromptTemplate, PromptTemplateRenderer

__all__ = [
    "GeminiPromptService",
    "PromptTemplate",
    "PromptTemplateRenderer",
]
