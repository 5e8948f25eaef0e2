"""Classification of failed metadata calls.

Database drivers report failures with a five character SQLSTATE code, but
expose it in different ways. `MetadataFailure.from_exception` adapts a raw
driver exception once, and `classify_sql_state` decides from the code alone
whether the failure means the driver does not implement the call.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional

_SQL_STATE_PATTERN = re.compile(r"[0-9A-Z]{5}", re.IGNORECASE)

# Attribute names used by common DB-API drivers (psycopg, psycopg2, and others)
_SQL_STATE_ATTRIBUTES = ("sqlstate", "pgcode", "sql_state")


class SqlState(str, Enum):
    """SQLSTATE codes that drivers use when a metadata call is unsupported."""

    OPTIONAL_FEATURE_NOT_IMPLEMENTED = "HYC00"
    # Some drivers, such as Teradata's, raise this for unsupported functions
    GENERAL_ERROR = "HY000"


class MetadataFailureKind(str, Enum):
    """Outcome of classifying a failed metadata call."""

    UNSUPPORTED_FEATURE = "unsupported_feature"
    RETRIEVAL_FAILURE = "retrieval_failure"


UNSUPPORTED_FEATURE_STATES: FrozenSet[str] = frozenset(
    state.value for state in SqlState
)


def classify_sql_state(sql_state: Optional[str]) -> MetadataFailureKind:
    """Classify a SQLSTATE code, ignoring case.

    Args:
        sql_state: The code reported by the driver, or None.

    Returns:
        UNSUPPORTED_FEATURE for the codes in UNSUPPORTED_FEATURE_STATES,
        RETRIEVAL_FAILURE for anything else.
    """
    if sql_state and sql_state.upper() in UNSUPPORTED_FEATURE_STATES:
        return MetadataFailureKind.UNSUPPORTED_FEATURE
    return MetadataFailureKind.RETRIEVAL_FAILURE


def sql_state_of(error: BaseException) -> Optional[str]:
    """Extract the SQLSTATE code from a driver exception.

    Looks at the attributes drivers commonly set, then at the first
    exception argument, which is where ODBC drivers put the code.

    Returns:
        The code, or None if the exception does not carry one.
    """
    for attribute in _SQL_STATE_ATTRIBUTES:
        value = getattr(error, attribute, None)
        if isinstance(value, str) and value:
            return value
    if error.args and isinstance(error.args[0], str):
        first = error.args[0].strip()
        if _SQL_STATE_PATTERN.fullmatch(first):
            return first.upper()
    return None


@dataclass(frozen=True)
class MetadataFailure:
    """A failed metadata call, adapted from the driver exception."""

    error: BaseException
    sql_state: Optional[str]
    kind: MetadataFailureKind

    @classmethod
    def from_exception(cls, error: BaseException) -> "MetadataFailure":
        if isinstance(error, NotImplementedError):
            return cls(
                error=error,
                sql_state=SqlState.OPTIONAL_FEATURE_NOT_IMPLEMENTED.value,
                kind=MetadataFailureKind.UNSUPPORTED_FEATURE,
            )
        sql_state = sql_state_of(error)
        return cls(error=error, sql_state=sql_state, kind=classify_sql_state(sql_state))

    @property
    def is_unsupported_feature(self) -> bool:
        return self.kind is MetadataFailureKind.UNSUPPORTED_FEATURE
