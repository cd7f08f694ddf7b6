"""
Two-pass validation of metric value maps.

Both passes collect every offending metric before failing, so a caller can
report one complete, actionable message instead of fixing one metric per
round trip.
"""

import logging
from typing import Dict, Mapping, Optional

from .errors import Failure, illegal_value, missing_mandatory_metric
from .schema import NOT_DEFINED, Scheme

logger = logging.getLogger(__name__)


def normalize(metrics: Mapping[str, Optional[str]], scheme: Scheme) -> Dict[str, str]:
    """Prepare discrete input for validation.

    Metrics passed as ``None`` count as absent, and absent optional metrics
    are set to "not defined".  Nothing else is changed: empty strings and
    unknown codes are left for :func:`validate` to report.
    """
    values = {code: value for code, value in metrics.items() if value is not None}
    for code in scheme.optional_codes:
        values.setdefault(code, NOT_DEFINED)
    return values


def validate(values: Mapping[str, str], scheme: Scheme) -> Optional[Failure]:
    """Check a metric value map against ``scheme``.

    Returns:
        ``None`` when the map is valid.  Otherwise a
        ``MissingMandatoryMetric`` failure listing every absent or empty
        mandatory metric, or, when all of them are present, an
        ``IllegalValue`` failure listing every metric whose value is not
        legal (including metric codes the scheme does not define).
    """
    missing = [code for code in scheme.mandatory_codes if not values.get(code)]
    if missing:
        logger.debug("Missing mandatory %s metrics: %s", scheme.name, missing)
        return missing_mandatory_metric(missing)

    illegal = [
        code
        for code, value in values.items()
        if code not in scheme or not isinstance(value, str) or not scheme.is_legal(code, value)
    ]
    if illegal:
        logger.debug("Illegal %s metric values: %s", scheme.name, illegal)
        return illegal_value(scheme.order_codes(illegal))
    return None
