"""Header assertions for tests and verification scripts.

A :class:`Rule` is a plain predicate over a :class:`~corsgate.headers.HeaderIndex`
paired with a description. Rules compose with :func:`not_` and :func:`all_of`;
:class:`HeaderMatcher` evaluates them against a request or a response.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .headers import HeaderIndex, headers_of
from .http import Request, Response


@dataclass(frozen=True)
class Rule:
    test: Callable[[HeaderIndex], bool]
    description: str

    def __call__(self, index: HeaderIndex) -> bool:
        return self.test(index)


def has_entry(key: str, value: str) -> Rule:
    """Match when header ``key`` carries ``value`` among its values."""

    name = key.lower()
    return Rule(
        lambda index: value in index.get(name, ()),
        f"map containing [{key!r}->{value!r}]",
    )


def has_key(key: str) -> Rule:
    name = key.lower()
    return Rule(lambda index: name in index, f"map containing key {key!r}")


def not_(rule: Rule) -> Rule:
    return Rule(lambda index: not rule(index), f"not {rule.description}")


def all_of(*rules: Rule) -> Rule:
    description = " and ".join(f"({rule.description})" for rule in rules)
    return Rule(lambda index: all(rule(index) for rule in rules), description)


@dataclass(frozen=True)
class MatchResult:
    matched: bool
    description: str
    mismatch: str = ""

    def __bool__(self) -> bool:
        return self.matched

def _evaluate(rule: Rule, index: HeaderIndex) -> MatchResult:
    if rule(index):
        return MatchResult(True, rule.description)
    return MatchResult(False, rule.description, f"headers were {dict(index)!r}")


@dataclass(frozen=True)
class HeaderMatcher:
    """Evaluate a rule against the headers of a request or a response."""

    rule: Rule

    def matches(self, subject: Request | Response) -> MatchResult:
        return _evaluate(self.rule, headers_of(subject))


def assert_that(subject: Request | Response, matcher: HeaderMatcher) -> None:
    """Raise ``AssertionError`` with a diagnostic when ``matcher`` fails."""

    result = matcher.matches(subject)
    if not result:
        raise AssertionError(f"\nExpected: {result.description}\n     but: {result.mismatch}")


__all__ = [
    "HeaderMatcher",
    "MatchResult",
    "Rule",
    "all_of",
    "assert_that",
    "has_entry",
    "has_key",
    "not_",
]
