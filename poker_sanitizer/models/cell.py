from __future__ import annotations

from dataclasses import dataclass

from .rule import DEFAULT_RULE, PersonalDataRule

"""Cell model: one raw field of a hand-history row."""

__all__ = [
    "Cell",
]


@dataclass(frozen=True)
class Cell:
    """Immutable wrapper around one raw field value (kept verbatim)."""
    text: str

    def __str__(self) -> str:
        return self.text

    def contains_personal_data(self, rule: PersonalDataRule = DEFAULT_RULE) -> bool:
        return rule.matches(self.text)
