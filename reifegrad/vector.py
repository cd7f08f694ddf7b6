"""
Vector string codec.

A vector string is the scheme's version prefix followed by one or more
``/CODE:VALUE`` segments, e.g. ``CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H``.

The grammar only checks the shape of the segments.  Metric codes and values
the scheme does not know are left for the validator, which reports them as
``IllegalValue`` together with any other bad values.
"""

import logging
import re
from typing import Dict, List, Mapping, Pattern, Union

from .errors import Failure, duplicate_metric, malformed_vector
from .schema import NOT_DEFINED, Scheme

logger = logging.getLogger(__name__)

_SEGMENT = r"/[A-Z]+:[A-Z]+"

MetricValueMap = Dict[str, str]


def vector_pattern(scheme: Scheme) -> Pattern[str]:
    """Return the grammar for vector strings of ``scheme``, used with ``fullmatch``."""
    return re.compile(rf"(?:{scheme.version_pattern})(?:{_SEGMENT})+")


def search_pattern(scheme: Scheme) -> Pattern[str]:
    """Return the grammar for finding vector strings of ``scheme`` in free text.

    The vector must stand on its own: ``XYZCVSS:3.1/...`` or a value running
    on into lower case letters is not a match.
    """
    return re.compile(rf"(?<![\w.:/])(?:{scheme.version_pattern})(?:{_SEGMENT})+(?![\w:/])")


def decode(text: str, scheme: Scheme) -> Union[MetricValueMap, Failure]:
    """Split a vector string into a metric value map.

    Returns:
        The decoded map, or a ``MalformedVector`` failure when ``text`` does
        not match the grammar, or a ``DuplicateMetric`` failure listing every
        metric code that appears more than once.
    """
    if not isinstance(text, str) or not vector_pattern(scheme).fullmatch(text):
        logger.debug("Malformed %s vector: %r", scheme.name, text)
        return malformed_vector()

    # The grammar guarantees the prefix contains no "/" and every segment
    # has exactly one ":".
    segments = text.split("/")[1:]
    values: MetricValueMap = {}
    duplicates: List[str] = []
    for segment in segments:
        code, value = segment.split(":")
        if code in values:
            if code not in duplicates:
                duplicates.append(code)
            continue
        values[code] = value

    if duplicates:
        logger.debug("Duplicate metrics in %r: %s", text, duplicates)
        return duplicate_metric(scheme.order_codes(duplicates))
    return values


def encode(values: Mapping[str, str], scheme: Scheme) -> str:
    """Build the canonical vector string for a validated map.

    Metrics are emitted in the scheme's declaration order.  Optional metrics
    that are absent or not defined are left out.
    """
    parts = [scheme.version_identifier]
    for metric in scheme.metrics:
        value = values.get(metric.code, NOT_DEFINED)
        if value == NOT_DEFINED and scheme.is_optional(metric.code):
            continue
        parts.append(f"{metric.code}:{value}")
    return "/".join(parts)
