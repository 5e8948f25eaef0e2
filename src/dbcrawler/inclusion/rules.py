"""Inclusion rules that decide which object names a crawl keeps."""

import re
from abc import ABC, abstractmethod
from typing import Optional, Pattern, Union

PatternLike = Union[str, Pattern[str], None]

_NONE_PATTERN = re.compile(r"(?!)")
_ALL_PATTERN = re.compile(r".*")


def _compile(pattern: PatternLike, default: Pattern[str]) -> Pattern[str]:
    if pattern is None:
        return default
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


class InclusionRule(ABC):
    """Decides whether a fully qualified object name is included."""

    @abstractmethod
    def test(self, text: Optional[str]) -> bool:
        pass


class IncludeAll(InclusionRule):
    def test(self, text: Optional[str]) -> bool:
        return True

    def __repr__(self) -> str:
        return "IncludeAll()"


class ExcludeAll(InclusionRule):
    def test(self, text: Optional[str]) -> bool:
        return False

    def __repr__(self) -> str:
        return "ExcludeAll()"


class RegularExpressionInclusionRule(InclusionRule):
    """Includes names that fully match the include pattern and do not
    fully match the exclude pattern.

    Args:
        include_pattern: Pattern a name must match. Defaults to everything.
        exclude_pattern: Pattern that excludes a name. Defaults to nothing.

    Example:
        >>> rule = RegularExpressionInclusionRule(r"main\\..*", r".*_backup")
        >>> rule.test("main.orders")
        True
        >>> rule.test("main.orders_backup")
        False
    """

    def __init__(
        self,
        include_pattern: PatternLike = None,
        exclude_pattern: PatternLike = None,
    ):
        self.include_pattern = _compile(include_pattern, _ALL_PATTERN)
        self.exclude_pattern = _compile(exclude_pattern, _NONE_PATTERN)

    def test(self, text: Optional[str]) -> bool:
        if text is None:
            text = ""
        if not self.include_pattern.fullmatch(text):
            return False
        return not self.exclude_pattern.fullmatch(text)

    def __repr__(self) -> str:
        return (
            f"RegularExpressionInclusionRule({self.include_pattern.pattern!r}, "
            f"{self.exclude_pattern.pattern!r})"
        )


def rule_from_patterns(
    include_pattern: Optional[str] = None, exclude_pattern: Optional[str] = None
) -> InclusionRule:
    """Build a rule from optional patterns, using IncludeAll when both are unset."""
    if include_pattern is None and exclude_pattern is None:
        return IncludeAll()
    return RegularExpressionInclusionRule(include_pattern, exclude_pattern)
