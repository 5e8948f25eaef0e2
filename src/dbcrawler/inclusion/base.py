"""Base classes for inclusion filters.

This module defines the interface for filters over crawled database objects
and provides a passthrough implementation that includes everything.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from dbcrawler.inclusion.rules import IncludeAll, InclusionRule
from dbcrawler.schema.models import DatabaseObject

D = TypeVar("D", bound=DatabaseObject)


class InclusionFilter(ABC, Generic[D]):
    """Abstract base class for filters over database objects.

    Example:
        >>> class TablesOnly(InclusionFilter):
        ...     def include(self, database_object):
        ...         return getattr(database_object, "table_type", None) == "TABLE"
    """

    @abstractmethod
    def include(self, database_object: Optional[D]) -> bool:
        """Return whether the object is kept.

        Args:
            database_object: The object to test.

        Returns:
            True to keep the object, False to drop it.
        """
        pass


class PassthroughFilter(InclusionFilter[D]):
    """A filter that includes every object.

    This is the filter used when no inclusion rule is configured, so a
    missing rule never excludes anything.
    """

    def include(self, database_object: Optional[D]) -> bool:
        """Include the object unconditionally."""
        return True


class InclusionRuleFilter(InclusionFilter[D]):
    """Filters objects by testing their full name against an inclusion rule."""

    def __init__(self, rule: InclusionRule):
        self.rule = rule

    def include(self, database_object: Optional[D]) -> bool:
        if database_object is None:
            return False
        return self.rule.test(database_object.full_name)


def filter_for(rule: Optional[InclusionRule]) -> InclusionFilter:
    """Return the filter for a rule, or a passthrough filter when there is none."""
    if rule is None or isinstance(rule, IncludeAll):
        return PassthroughFilter()
    return InclusionRuleFilter(rule)
