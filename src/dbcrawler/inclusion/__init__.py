"""Inclusion rules and filters for crawled database objects.

Example:
    >>> from dbcrawler.inclusion import RegularExpressionInclusionRule, filter_for
    >>> tables_filter = filter_for(RegularExpressionInclusionRule(r"main\\.orders"))
"""

from dbcrawler.inclusion.base import (
    InclusionFilter,
    InclusionRuleFilter,
    PassthroughFilter,
    filter_for,
)
from dbcrawler.inclusion.rules import (
    ExcludeAll,
    IncludeAll,
    InclusionRule,
    RegularExpressionInclusionRule,
    rule_from_patterns,
)

__all__ = [
    # Filters
    "InclusionFilter",
    "PassthroughFilter",
    "InclusionRuleFilter",
    "filter_for",
    # Rules
    "InclusionRule",
    "IncludeAll",
    "ExcludeAll",
    "RegularExpressionInclusionRule",
    "rule_from_patterns",
]
