from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

"""Personal-data signature rule.

A cell is considered sensitive when its raw text contains at least one
signature as a case-sensitive substring. The rule is a value object so that
callers (config loader, CLI, tests) can inject their own signature list.
"""

__all__ = [
    "DEFAULT_SIGNATURES",
    "DEFAULT_RULE",
    "PersonalDataRule",
]

DEFAULT_SIGNATURES: frozenset[str] = frozenset({"Your hand"})


@dataclass(frozen=True)
class PersonalDataRule:
    """Closed set of marker substrings identifying personal data."""
    signatures: frozenset[str] = DEFAULT_SIGNATURES

    def __post_init__(self) -> None:
        if not self.signatures:
            raise ValueError("personal data rule requires at least one signature")
        # "" is a substring of every string
        if "" in self.signatures:
            raise ValueError("personal data signature must not be empty")

    @classmethod
    def from_signatures(cls, signatures: Iterable[str]) -> PersonalDataRule:
        return cls(signatures=frozenset(signatures))

    def matches(self, text: str) -> bool:
        """Return True if ``text`` contains any signature (exact substring, no folding)."""
        return any(sig in text for sig in self.signatures)


DEFAULT_RULE = PersonalDataRule()
