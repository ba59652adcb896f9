"""Text-generation backends, prompt construction and response validation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .validator import (
    Accepted,
    CandidateIngredient,
    ExtractionCandidate,
    Rejected,
    RejectionReason,
    ValidatorSettings,
    validate,
)

if TYPE_CHECKING:
    from ..config import MenusConfig


class TextGenerator(ABC):
    """Abstract text-in, text-out model used to extract recipes."""

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Send one prompt and return the model's text response.

        No retries or timeouts are applied here.
        """
        ...


def create_generator(config: MenusConfig) -> TextGenerator:
    """Create a text generator based on configuration."""
    backend_name = config.generator.backend

    match backend_name:
        case "claude":
            from .claude import ClaudeTextGenerator

            return ClaudeTextGenerator(
                api_key=config.generator.claude.api_key,
                model=config.generator.claude.model,
            )
        case "gemini":
            from .gemini import GeminiTextGenerator

            return GeminiTextGenerator(
                api_key=config.generator.gemini.api_key,
                model=config.generator.gemini.model,
            )
        case _:
            raise ValueError(
                f"Unknown text generator backend: {backend_name!r} "
                f"(choose claude or gemini)"
            )


__all__ = [
    "TextGenerator",
    "create_generator",
    "Accepted",
    "Rejected",
    "RejectionReason",
    "CandidateIngredient",
    "ExtractionCandidate",
    "ValidatorSettings",
    "validate",
]
