"""
Score calculation.

The calculator only ever sees maps that passed ``reifegrad.validator``, so
it is pure arithmetic and cannot fail on input.  A scheme selects its
formula by name:

* ``linear`` adds one weight per mandatory metric (Reifegrad).
* ``impact_exploitability`` is the CVSS v3.1 Base, Temporal and
  Environmental formula.

Every formula returns its intermediate sub-formula values next to the
final scores so results can be audited.

References:
  https://www.first.org/cvss/v3.1/specification-document#7-4-Metric-Values
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping

from .errors import SchemaError
from .rounding import round_up_1
from .schema import NOT_DEFINED, Scheme

logger = logging.getLogger(__name__)

EXPLOITABILITY_COEFFICIENT = 8.22
SCOPE_COEFFICIENT = 1.08
MODIFIED_IMPACT_SUBSCORE_CAP = 0.915


@dataclass(frozen=True)
class Calculation:
    """Raw outcome of a formula.

    Attributes:
        scores: Final score per score key (``"base"``, ``"temporal"``, ...),
            already rounded to one decimal place.
        sub_scores: Intermediate values, unrounded.
    """

    scores: Dict[str, float] = field(default_factory=dict)
    sub_scores: Dict[str, float] = field(default_factory=dict)


Formula = Callable[[Mapping[str, str], Scheme], Calculation]


def linear(values: Mapping[str, str], scheme: Scheme) -> Calculation:
    """Sum the weights of the mandatory metrics."""
    total = sum(scheme.weight(code, values[code]) for code in scheme.mandatory_codes)
    score = min(round_up_1(total), scheme.max_score)
    return Calculation(scores={"base": score}, sub_scores={"base_weight_sum": total})


def impact_exploitability(values: Mapping[str, str], scheme: Scheme) -> Calculation:
    """CVSS v3.1 Base, Temporal and Environmental scores."""
    max_score = scheme.max_score

    def value(code: str) -> str:
        selected = values.get(code, NOT_DEFINED)
        base = scheme.metric(code).base
        if selected == NOT_DEFINED and base is not None:
            return values[base]
        return selected

    def weight(code: str, changed: bool = False) -> float:
        return scheme.weight(code, value(code), changed)

    # Base score
    scope_changed = value("S") == "C"
    iss = 1 - ((1 - weight("C")) * (1 - weight("I")) * (1 - weight("A")))
    if scope_changed:
        impact = weight("S") * (iss - 0.029) - 3.25 * (iss - 0.02) ** 15
    else:
        impact = weight("S") * iss
    exploitability = (
        EXPLOITABILITY_COEFFICIENT
        * weight("AV")
        * weight("AC")
        * weight("PR", scope_changed)
        * weight("UI")
    )
    if impact <= 0:
        base_score = 0.0
    elif scope_changed:
        base_score = round_up_1(min(SCOPE_COEFFICIENT * (impact + exploitability), max_score))
    else:
        base_score = round_up_1(min(impact + exploitability, max_score))

    # Temporal score
    temporal_multiplier = weight("E") * weight("RL") * weight("RC")
    temporal_score = round_up_1(base_score * temporal_multiplier)

    # Environmental score: the base formula again, with modified metrics
    # falling back to their base values when not defined.
    modified_scope_changed = value("MS") == "C"
    miss = min(
        1
        - (
            (1 - weight("MC") * weight("CR"))
            * (1 - weight("MI") * weight("IR"))
            * (1 - weight("MA") * weight("AR"))
        ),
        MODIFIED_IMPACT_SUBSCORE_CAP,
    )
    if modified_scope_changed:
        modified_impact = weight("MS") * (miss - 0.029) - 3.25 * (miss * 0.9731 - 0.02) ** 13
    else:
        modified_impact = weight("MS") * miss
    modified_exploitability = (
        EXPLOITABILITY_COEFFICIENT
        * weight("MAV")
        * weight("MAC")
        * weight("MPR", modified_scope_changed)
        * weight("MUI")
    )
    if modified_impact <= 0:
        environmental_score = 0.0
    elif modified_scope_changed:
        environmental_score = round_up_1(
            round_up_1(min(SCOPE_COEFFICIENT * (modified_impact + modified_exploitability), max_score))
            * temporal_multiplier
        )
    else:
        environmental_score = round_up_1(
            round_up_1(min(modified_impact + modified_exploitability, max_score)) * temporal_multiplier
        )

    return Calculation(
        scores={
            "base": base_score,
            "temporal": temporal_score,
            "environmental": environmental_score,
        },
        sub_scores={
            "base_iss": iss,
            "base_impact": impact,
            "base_exploitability": exploitability,
            "environmental_miss": miss,
            "environmental_modified_impact": modified_impact,
            "environmental_modified_exploitability": modified_exploitability,
        },
    )


FORMULAS: Dict[str, Formula] = {
    "linear": linear,
    "impact_exploitability": impact_exploitability,
}


def calculate(values: Mapping[str, str], scheme: Scheme) -> Calculation:
    """Score a validated metric value map with the scheme's formula."""
    try:
        formula = FORMULAS[scheme.formula]
    except KeyError:
        raise SchemaError(f"{scheme.name} uses unknown formula {scheme.formula!r}") from None
    calculation = formula(values, scheme)
    logger.debug("%s scores %s", scheme.name, calculation.scores)
    return calculation
