"""
Public entry points of the scoring engine.

Two input shapes are accepted:

* discrete metric values, as a mapping (:func:`calculate_from_metrics`) or
  positionally in the scheme's declaration order
  (:func:`calculate_from_values`); optional metrics may be omitted;
* a single vector string (:func:`calculate_from_vector`), decoded first.

The value map then goes through validation, scoring, severity
classification and, for the XML variants, export.  Every function returns
either a result record or the :class:`~reifegrad.errors.Failure` produced by
the first stage that rejected the input.

Example::

    >>> from reifegrad import calculate_from_vector
    >>> result = calculate_from_vector("CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H")
    >>> result.base_score, result.base_severity
    ('9.8', 'Critical')
"""

import logging
from typing import Mapping, Optional, Union

from .calculator import calculate
from .errors import Failure, malformed_vector
from .results import ScoreResult, XmlResult
from .rounding import format_score
from .schema import Scheme
from .schemes import CVSS31, scheme_for_vector
from .severity import classify
from .validator import normalize, validate
from .vector import decode, encode
from .xml_export import build_xml

logger = logging.getLogger(__name__)


def _score(values: Mapping[str, str], scheme: Scheme) -> Union[ScoreResult, Failure]:
    failure = validate(values, scheme)
    if failure is not None:
        return failure
    calculation = calculate(values, scheme)
    return ScoreResult(
        scheme=scheme.name,
        scores={key: format_score(score) for key, score in calculation.scores.items()},
        severities={key: classify(score, scheme.severity_bands) for key, score in calculation.scores.items()},
        sub_scores=dict(calculation.sub_scores),
        vector_string=encode(values, scheme),
        metrics=dict(values),
    )


def calculate_from_metrics(
    metrics: Mapping[str, Optional[str]], scheme: Scheme = CVSS31
) -> Union[ScoreResult, Failure]:
    """Score discrete metric values.

    Args:
        metrics: Mapping of metric code to value code, e.g.
            ``{"AV": "N", "AC": "L", ...}``.  Mandatory metrics are
            required; optional metrics that are missing or ``None`` default
            to "not defined" (``X``).
        scheme: Scheme to score against.

    Returns:
        A :class:`ScoreResult`, or a ``MissingMandatoryMetric`` or
        ``IllegalValue`` failure.
    """
    return _score(normalize(metrics, scheme), scheme)


def calculate_from_values(scheme: Scheme, *values: Optional[str]) -> Union[ScoreResult, Failure]:
    """Score values given positionally in the scheme's declaration order.

    Trailing optional metrics may be left out.
    """
    if len(values) > len(scheme.codes):
        raise TypeError(f"{scheme.name} defines {len(scheme.codes)} metrics, got {len(values)} values")
    return calculate_from_metrics(dict(zip(scheme.codes, values)), scheme)


def _decode_vector(text: str, scheme: Optional[Scheme]):
    if scheme is None:
        scheme = scheme_for_vector(text) if isinstance(text, str) else None
        if scheme is None:
            logger.debug("No scheme matches vector %r", text)
            return None, malformed_vector()
    return scheme, decode(text, scheme)


def calculate_from_vector(text: str, scheme: Optional[Scheme] = None) -> Union[ScoreResult, Failure]:
    """Score a vector string.

    Args:
        text: The vector string, e.g. ``CVSS:3.1/AV:N/AC:L/...``.
        scheme: Scheme to decode with.  When omitted the scheme is chosen by
            the version prefix of ``text``.

    Returns:
        A :class:`ScoreResult`, or a ``MalformedVector``,
        ``DuplicateMetric``, ``MissingMandatoryMetric`` or ``IllegalValue``
        failure.
    """
    scheme, decoded = _decode_vector(text, scheme)
    if isinstance(decoded, Failure):
        return decoded
    return _score(normalize(decoded, scheme), scheme)


def generate_xml_from_metrics(
    metrics: Mapping[str, Optional[str]], scheme: Scheme = CVSS31
) -> Union[XmlResult, Failure]:
    """Score discrete metric values and render them as XML.

    Failures from validation are returned unchanged.
    """
    result = calculate_from_metrics(metrics, scheme)
    if isinstance(result, Failure):
        return result
    return XmlResult(xml_string=build_xml(result.metrics, result, scheme), result=result)


def generate_xml_from_vector(text: str, scheme: Optional[Scheme] = None) -> Union[XmlResult, Failure]:
    """Score a vector string and render it as XML.

    Failures from decoding or validation are returned unchanged.
    """
    scheme, decoded = _decode_vector(text, scheme)
    if isinstance(decoded, Failure):
        return decoded
    return generate_xml_from_metrics(decoded, scheme)
