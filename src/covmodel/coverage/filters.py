"""Inclusion/exclusion filters for assemblies, classes and files.

Pattern syntax:
- '+pattern' includes matching names, '-pattern' excludes them
- A pattern without prefix counts as an include
- Standard glob wildcards (fnmatch, case-sensitive): '*', '?', '[...]'
- Excludes win over includes; without include patterns every name is included
"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable
from typing import Protocol

from covmodel.core.errors import ConfigError

__all__ = [
    "Filter",
    "PatternFilter",
]


class Filter(Protocol):
    """Predicate deciding whether an element appears in the coverage model."""

    @property
    def has_custom_filters(self) -> bool:
        """True when the user configured at least one pattern."""
        ...

    def is_included(self, name: str) -> bool: ...


class PatternFilter:
    """Filter built from '+include' / '-exclude' glob patterns."""

    def __init__(self, patterns: Iterable[str] | None = None) -> None:
        self._includes: list[str] = []
        self._excludes: list[str] = []
        for raw in patterns or ():
            pattern = raw.strip()
            if pattern.startswith("-"):
                target = self._excludes
                pattern = pattern[1:]
            else:
                target = self._includes
                pattern = pattern.removeprefix("+")
            if not pattern:
                raise ConfigError.invalid_value("filters", raw, "empty filter pattern")
            target.append(pattern)

    @classmethod
    def allow_all(cls) -> PatternFilter:
        return cls()

    @property
    def has_custom_filters(self) -> bool:
        return bool(self._includes or self._excludes)

    def is_included(self, name: str) -> bool:
        if any(fnmatch.fnmatchcase(name, p) for p in self._excludes):
            return False
        if not self._includes:
            return True
        return any(fnmatch.fnmatchcase(name, p) for p in self._includes)

    def __repr__(self) -> str:
        return f"PatternFilter(includes={self._includes!r}, excludes={self._excludes!r})"
