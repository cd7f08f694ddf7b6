"""Qualitative severity ratings."""

import math
from typing import Optional, Sequence

from .schema import SeverityBand


def classify(score: float, bands: Sequence[SeverityBand]) -> Optional[str]:
    """Return the name of the band containing ``score``.

    Bands are scanned in ascending order and the first one whose top is at
    least ``score`` wins, so scores falling between two one-decimal bounds
    (3.95 between "Low" and "Medium") still land in a band.  ``None`` means
    the score lies outside every band, which for a computed score points at
    a broken scheme rather than bad input.
    """
    if not bands or math.isnan(score):
        return None
    if score < bands[0].bottom or score > bands[-1].top:
        return None
    for band in bands:
        if score <= band.top:
            return band.name
    return None
