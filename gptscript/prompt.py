"""Prompts asking the user for input."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

PROMPT_URL_ENV_VAR = "GPTSCRIPT_PROMPT_URL"
PROMPT_TOKEN_ENV_VAR = "GPTSCRIPT_PROMPT_TOKEN"


@dataclass
class Prompt:
    """A request for the user to fill in fields."""

    message: str = ""
    fields: list[str] = field(default_factory=list)
    sensitive: bool = False

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form, leaving out empty fields."""
        result: dict[str, Any] = {}
        if self.message:
            result["message"] = self.message
        if self.fields:
            result["fields"] = list(self.fields)
        if self.sensitive:
            result["sensitive"] = True
        return result