"""
Prompt templates for Gemini.

Templates live next to this module as .txt files so wording can change
without touching code. Set RELEASENOTES_SUMMARY_PROMPT to try an alternate
summary template (file name without extension).
"""

from __future__ import annotations

import os
from pathlib import Path

PROMPTS_DIR = Path(__file__).parent

SUMMARY_PROMPT_NAME = os.getenv("RELEASENOTES_SUMMARY_PROMPT", "summary_prompt")


class PromptLoader:
    """Load and cache prompt templates from files"""

    def __init__(self) -> None:
        self._cache: dict[str, str] = {}

    def load_prompt(self, prompt_name: str) -> str:
        if prompt_name not in self._cache:
            prompt_path = PROMPTS_DIR / f"{prompt_name}.txt"

            if not prompt_path.exists():
                raise FileNotFoundError(f"Prompt file not found: {prompt_path}")

            self._cache[prompt_name] = prompt_path.read_text(encoding="utf-8")

        return self._cache[prompt_name]

    def get_summary_prompt(self, *, products: str, release_notes: str) -> str:
        """
        Get the release notes summary prompt.

        Args:
            products: Comma-separated product names covered by the notes
            release_notes: Notes already rendered by format_release_notes()
        """
        template = self.load_prompt(SUMMARY_PROMPT_NAME)
        return template.format(products=products, release_notes=release_notes)

    def reload(self) -> None:
        """Clear cache and reload prompts from disk"""
        self._cache.clear()


_loader = PromptLoader()


def get_summary_prompt(*, products: str, release_notes: str) -> str:
    return _loader.get_summary_prompt(products=products, release_notes=release_notes)
