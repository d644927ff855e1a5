"""Allowed-origin policy for the CORS filter."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CorsPolicy:
    """Set of origins allowed to receive CORS headers.

    An empty set allows every origin.
    """

    allowed: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, *domains: str) -> "CorsPolicy":
        return cls(frozenset(domains))

    @classmethod
    def from_iterable(cls, domains: Iterable[str]) -> "CorsPolicy":
        return cls(frozenset(domains))

    @property
    def allows_any(self) -> bool:
        return not self.allowed

    def is_allowed(self, origin: str) -> bool:
        return self.allows_any or origin in self.allowed


__all__ = ["CorsPolicy"]
