"""
Reifegrad - scoring engine for metric vector strings.

Parses vector strings such as ``CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H``
or ``Reifegrad/U:F/D:F/G:L/E:N/V:N``, validates them against a metric
scheme, computes scores and severity ratings and renders the result as a
canonical vector string or an XML document.
"""

from .engine import (
    calculate_from_metrics,
    calculate_from_values,
    calculate_from_vector,
    generate_xml_from_metrics,
    generate_xml_from_vector,
)
from .errors import ErrorType, Failure, SchemaError
from .results import ScoreResult, XmlResult
from .rounding import round_up_1
from .schema import NOT_DEFINED, Metric, MetricGroup, Scheme, SeverityBand
from .schemes import CVSS31, REIFEGRAD, SCHEMES, get_scheme, scheme_for_vector
from .severity import classify
from .validator import validate
from .vector import decode, encode

__version__ = "1.0.0"

__all__ = [
    "CVSS31",
    "NOT_DEFINED",
    "REIFEGRAD",
    "SCHEMES",
    "ErrorType",
    "Failure",
    "Metric",
    "MetricGroup",
    "SchemaError",
    "Scheme",
    "ScoreResult",
    "SeverityBand",
    "XmlResult",
    "calculate_from_metrics",
    "calculate_from_values",
    "calculate_from_vector",
    "classify",
    "decode",
    "encode",
    "generate_xml_from_metrics",
    "generate_xml_from_vector",
    "get_scheme",
    "round_up_1",
    "scheme_for_vector",
    "validate",
]
