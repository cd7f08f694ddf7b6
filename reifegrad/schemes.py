"""
Built-in scoring schemes.

* ``cvss31`` - CVSS v3.1 with Base, Temporal and Environmental groups.
  Weights, severity ratings and XML element names follow the FIRST CVSS
  v3.1 specification document.
* ``reifegrad`` - process maturity level (Reifegrad).  Five mandatory
  metrics, one per maturity level, each rated on the N/P/L/F achievement
  scale.  The score is the sum of the per-level weights, so a process
  whose first two levels are fully achieved scores 2.0 ("Gesteuert").

References:
  https://www.first.org/cvss/specification-document
"""

import re
from typing import Dict, Optional

from .errors import SchemaError
from .schema import Metric, MetricGroup, Scheme, SeverityBand

# ---------------------------------------------------------------------------
# Shared label tables
# ---------------------------------------------------------------------------

_AV_LABELS = {"N": "NETWORK", "A": "ADJACENT_NETWORK", "L": "LOCAL", "P": "PHYSICAL"}
_AC_LABELS = {"L": "LOW", "H": "HIGH"}
_PR_LABELS = {"N": "NONE", "L": "LOW", "H": "HIGH"}
_UI_LABELS = {"N": "NONE", "R": "REQUIRED"}
_S_LABELS = {"U": "UNCHANGED", "C": "CHANGED"}
_CIA_LABELS = {"N": "NONE", "L": "LOW", "H": "HIGH"}
_CIAR_LABELS = {"X": "NOT_DEFINED", "L": "LOW", "M": "MEDIUM", "H": "HIGH"}

_AV = {"N": 0.85, "A": 0.62, "L": 0.55, "P": 0.2}
_AC = {"H": 0.44, "L": 0.77}
_PR_UNCHANGED = {"N": 0.85, "L": 0.62, "H": 0.27}
_PR_CHANGED = {"N": 0.85, "L": 0.68, "H": 0.5}
_UI = {"N": 0.85, "R": 0.62}
# Scope weights are the impact multipliers used by the formula.
_S = {"U": 6.42, "C": 7.52}
_CIA = {"H": 0.56, "L": 0.22, "N": 0.0}
_CIAR = {"X": 1.0, "L": 0.5, "M": 1.0, "H": 1.5}


def _cvss_metrics(prefix: str = "", element_prefix: str = "", base: bool = True):
    """Exploitability and impact metrics, plain or as ``M*`` overrides."""

    def make(code, name, element, weights, labels, changed_weights=None):
        return Metric(
            code=prefix + code,
            name=(f"Modified {name}" if prefix else name),
            element=element_prefix + element,
            weights=weights,
            labels=labels,
            changed_weights=changed_weights,
            base=None if base else code,
        )

    return (
        make("AV", "Attack Vector", "attack-vector", _AV, _AV_LABELS),
        make("AC", "Attack Complexity", "attack-complexity", _AC, _AC_LABELS),
        make("PR", "Privileges Required", "privileges-required", _PR_UNCHANGED, _PR_LABELS, _PR_CHANGED),
        make("UI", "User Interaction", "user-interaction", _UI, _UI_LABELS),
        make("S", "Scope", "scope", _S, _S_LABELS),
        make("C", "Confidentiality", "confidentiality-impact", _CIA, _CIA_LABELS),
        make("I", "Integrity", "integrity-impact", _CIA, _CIA_LABELS),
        make("A", "Availability", "availability-impact", _CIA, _CIA_LABELS),
    )


CVSS31 = Scheme(
    name="cvss31",
    title="CVSS v3.1",
    version_identifier="CVSS:3.1",
    version_pattern=r"CVSS:3\.[01]",
    formula="impact_exploitability",
    groups=(
        MetricGroup(
            name="base",
            metrics=_cvss_metrics(),
            mandatory=True,
            element="base_metrics",
            score_key="base",
            score_element="base-score",
            severity_element="base-severity",
        ),
        MetricGroup(
            name="temporal",
            metrics=(
                Metric(
                    "E",
                    "Exploit Code Maturity",
                    "exploit-code-maturity",
                    {"X": 1.0, "U": 0.91, "P": 0.94, "F": 0.97, "H": 1.0},
                    {"X": "NOT_DEFINED", "U": "UNPROVEN", "P": "PROOF_OF_CONCEPT", "F": "FUNCTIONAL", "H": "HIGH"},
                ),
                Metric(
                    "RL",
                    "Remediation Level",
                    "remediation-level",
                    {"X": 1.0, "O": 0.95, "T": 0.96, "W": 0.97, "U": 1.0},
                    {"X": "NOT_DEFINED", "O": "OFFICIAL_FIX", "T": "TEMPORARY_FIX", "W": "WORKAROUND", "U": "UNAVAILABLE"},
                ),
                Metric(
                    "RC",
                    "Report Confidence",
                    "report-confidence",
                    {"X": 1.0, "U": 0.92, "R": 0.96, "C": 1.0},
                    {"X": "NOT_DEFINED", "U": "UNKNOWN", "R": "REASONABLE", "C": "CONFIRMED"},
                ),
            ),
            mandatory=False,
            element="temporal_metrics",
            score_key="temporal",
            score_element="temporal-score",
            severity_element="temporal-severity",
        ),
        MetricGroup(
            name="environmental",
            metrics=(
                Metric("CR", "Confidentiality Requirement", "confidentiality-requirement", _CIAR, _CIAR_LABELS),
                Metric("IR", "Integrity Requirement", "integrity-requirement", _CIAR, _CIAR_LABELS),
                Metric("AR", "Availability Requirement", "availability-requirement", _CIAR, _CIAR_LABELS),
            )
            + _cvss_metrics(prefix="M", element_prefix="modified-", base=False),
            mandatory=False,
            element="environmental_metrics",
            score_key="environmental",
            score_element="environmental-score",
            severity_element="environmental-severity",
        ),
    ),
    severity_bands=(
        SeverityBand("None", 0.0, 0.0),
        SeverityBand("Low", 0.1, 3.9),
        SeverityBand("Medium", 4.0, 6.9),
        SeverityBand("High", 7.0, 8.9),
        SeverityBand("Critical", 9.0, 10.0),
    ),
    xml_root="cvssv3.1",
    xml_attributes=(
        ("xmlns", "https://www.first.org/cvss/cvss-v3.1.xsd"),
        ("xmlns:xsi", "http://www.w3.org/2001/XMLSchema-instance"),
        (
            "xsi:schemaLocation",
            "https://www.first.org/cvss/cvss-v3.1.xsd https://www.first.org/cvss/cvss-v3.1.xsd",
        ),
    ),
)


# ---------------------------------------------------------------------------
# Reifegrad
# ---------------------------------------------------------------------------

# N/P/L/F achievement ratings.  The weights are the upper bounds of the
# achievement ranges (N: 0-15 %, P: 15-50 %, L: 50-85 %, F: 85-100 %),
# with "not achieved" contributing nothing.
_RATING_LABELS = {
    "N": "NOT_ACHIEVED",
    "P": "PARTIALLY_ACHIEVED",
    "L": "LARGELY_ACHIEVED",
    "F": "FULLY_ACHIEVED",
}
_RATING = {"N": 0.0, "P": 0.5, "L": 0.85, "F": 1.0}
# Level 0 has no process attributes, so its rating never raises the score.
_LEVEL_ZERO = {"N": 0.0, "P": 0.0, "L": 0.0, "F": 0.0}

REIFEGRAD = Scheme(
    name="reifegrad",
    title="Reifegrad",
    version_identifier="Reifegrad",
    version_pattern=r"Reifegrad",
    formula="linear",
    groups=(
        MetricGroup(
            name="base",
            metrics=(
                Metric("U", "Unvollständig", "unvollstaendig", _LEVEL_ZERO, _RATING_LABELS),
                Metric("D", "Durchgeführt", "durchgefuehrt", _RATING, _RATING_LABELS),
                Metric("G", "Gesteuert", "gesteuert", _RATING, _RATING_LABELS),
                Metric("E", "Etabliert", "etabliert", _RATING, _RATING_LABELS),
                Metric("V", "Vorhersagbar", "vorhersagbar", _RATING, _RATING_LABELS),
            ),
            mandatory=True,
            element="reifegrad_metrics",
            score_key="base",
            score_element="reifegrad-score",
            severity_element="reifegrad-stufe",
        ),
    ),
    severity_bands=(
        SeverityBand("Unvollständig", 0.0, 0.0),
        SeverityBand("Durchgeführt", 0.1, 1.0),
        SeverityBand("Gesteuert", 1.1, 2.0),
        SeverityBand("Etabliert", 2.1, 3.0),
        SeverityBand("Vorhersagbar", 3.1, 4.0),
    ),
    xml_root="reifegrad",
    xml_attributes=(("xmlns", "urn:reifegrad:1.0"),),
)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

SCHEMES: Dict[str, Scheme] = {scheme.name: scheme for scheme in (CVSS31, REIFEGRAD)}


def get_scheme(name: str) -> Scheme:
    """Return the registered scheme called ``name``."""
    try:
        return SCHEMES[name.lower()]
    except KeyError:
        raise SchemaError(f"unknown scheme {name!r}; choose one of {', '.join(SCHEMES)}") from None


def scheme_for_vector(text: str) -> Optional[Scheme]:
    """Return the scheme whose version prefix starts ``text``, if any."""
    for scheme in SCHEMES.values():
        if re.match(scheme.version_pattern + "/", text):
            return scheme
    return None
