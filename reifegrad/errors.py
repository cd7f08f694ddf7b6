"""
Failure records and schema errors.

Bad caller input never raises.  Every stage of the engine returns either
its normal value or a :class:`Failure` describing what was wrong with the
input, and callers surface that record verbatim.  Only a broken scheme
definition (a lookup of a metric or value the scheme does not declare)
raises, via :class:`SchemaError`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Tuple


class ErrorType(str, Enum):
    """Tags for the recoverable input errors."""

    MISSING_MANDATORY_METRIC = "MissingMandatoryMetric"
    ILLEGAL_VALUE = "IllegalValue"
    MALFORMED_VECTOR = "MalformedVector"
    DUPLICATE_METRIC = "DuplicateMetric"


class SchemaError(KeyError):
    """Raised when code asks a scheme for something it does not define."""


@dataclass(frozen=True)
class Failure:
    """A tagged, recoverable failure.

    Attributes:
        error_type: Which check failed.
        error_metrics: The offending metric codes.  Empty for
            ``MalformedVector`` because the string could not be segmented.
    """

    error_type: ErrorType
    error_metrics: Tuple[str, ...] = ()

    success = False

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {"success": False, "error_type": self.error_type.value}
        if self.error_type is not ErrorType.MALFORMED_VECTOR:
            record["error_metrics"] = list(self.error_metrics)
        return record


def missing_mandatory_metric(codes: Iterable[str]) -> Failure:
    return Failure(ErrorType.MISSING_MANDATORY_METRIC, tuple(codes))


def illegal_value(codes: Iterable[str]) -> Failure:
    return Failure(ErrorType.ILLEGAL_VALUE, tuple(codes))


def malformed_vector() -> Failure:
    return Failure(ErrorType.MALFORMED_VECTOR)


def duplicate_metric(codes: Iterable[str]) -> Failure:
    return Failure(ErrorType.DUPLICATE_METRIC, tuple(codes))
