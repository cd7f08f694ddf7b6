"""
Tests for the public entry points.
"""

import pytest
from reifegrad import (
    CVSS31,
    REIFEGRAD,
    ErrorType,
    Failure,
    ScoreResult,
    calculate_from_metrics,
    calculate_from_values,
    calculate_from_vector,
)

CRITICAL = "CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H"


class TestCalculateFromVector:
    """Input shape B."""

    def test_critical(self):
        result = calculate_from_vector(CRITICAL)
        assert isinstance(result, ScoreResult)
        assert result.success is True
        assert result.scheme == "cvss31"
        assert result.scores == {"base": "9.8", "temporal": "9.8", "environmental": "9.8"}
        assert result.severities == {"base": "Critical", "temporal": "Critical", "environmental": "Critical"}
        assert result.base_score == "9.8"
        assert result.base_severity == "Critical"
        assert result.score("temporal") == 9.8
        assert result.vector_string == CRITICAL

    def test_weakest_cvss_input(self):
        result = calculate_from_vector("CVSS:3.1/AV:P/AC:H/PR:H/UI:R/S:U/C:N/I:N/A:N")
        assert result.base_score == "0.0"
        assert result.base_severity == "None"

    def test_weakest_reifegrad_input(self):
        result = calculate_from_vector("Reifegrad/U:N/D:N/G:N/E:N/V:N")
        assert result.scheme == "reifegrad"
        assert result.scores == {"base": "0.0"}
        assert result.severities == {"base": "Unvollständig"}

    def test_explicit_scheme(self):
        result = calculate_from_vector("Reifegrad/U:F/D:F/G:F/E:F/V:F", REIFEGRAD)
        assert result.base_score == "4.0"
        assert result.base_severity == "Vorhersagbar"

    def test_scheme_mismatch_is_malformed(self):
        assert calculate_from_vector(CRITICAL, REIFEGRAD).error_type is ErrorType.MALFORMED_VECTOR

    def test_unknown_prefix(self):
        result = calculate_from_vector("CVSS:4.0/AV:N/AC:L/AT:N/PR:N/UI:N/VC:H/VI:H/VA:H/SC:N/SI:N/SA:N")
        assert isinstance(result, Failure)
        assert result.error_type is ErrorType.MALFORMED_VECTOR

    def test_canonical_vector(self):
        result = calculate_from_vector("CVSS:3.0/A:H/I:H/C:H/S:U/UI:N/PR:N/AC:L/AV:N/E:X/RL:O")
        assert result.vector_string == CRITICAL + "/RL:O"

    def test_unknown_metric_code(self):
        result = calculate_from_vector(CRITICAL + "/Z:X")
        assert result.error_type is ErrorType.ILLEGAL_VALUE
        assert result.error_metrics == ("Z",)

    def test_duplicate(self):
        result = calculate_from_vector("CVSS:3.1/AV:N/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H")
        assert result.error_type is ErrorType.DUPLICATE_METRIC
        assert result.error_metrics == ("AV",)

    def test_missing(self):
        result = calculate_from_vector("CVSS:3.1/AC:L/PR:N/UI:N/S:U/I:H/A:H")
        assert result.error_type is ErrorType.MISSING_MANDATORY_METRIC
        assert result.error_metrics == ("AV", "C")

    def test_deterministic(self):
        vector = CRITICAL + "/E:P/RL:T/CR:H/MAV:A"
        assert calculate_from_vector(vector).to_dict() == calculate_from_vector(vector).to_dict()


class TestCalculateFromMetrics:
    """Input shape A."""

    def test_optional_metrics_may_be_omitted(self, critical_metrics):
        result = calculate_from_metrics(critical_metrics)
        assert result.base_score == "9.8"
        assert result.metrics["E"] == "X"

    def test_optional_metrics_as_none(self, critical_metrics):
        result = calculate_from_metrics(dict(critical_metrics, E=None, RL="O"))
        assert result.scores["temporal"] == "9.4"
        assert result.vector_string == CRITICAL + "/RL:O"

    def test_reifegrad(self, reifegrad_metrics):
        result = calculate_from_metrics(reifegrad_metrics, REIFEGRAD)
        assert result.base_score == "1.9"
        assert result.base_severity == "Gesteuert"
        assert result.sub_scores["base_weight_sum"] == pytest.approx(1.85)
        assert result.vector_string == "Reifegrad/U:F/D:F/G:L/E:N/V:N"

    def test_missing_and_illegal(self, critical_metrics):
        missing = calculate_from_metrics({"AV": "N", "AC": "", "PR": None})
        assert missing.error_type is ErrorType.MISSING_MANDATORY_METRIC
        assert missing.error_metrics == ("AC", "PR", "UI", "S", "C", "I", "A")

        illegal = calculate_from_metrics(dict(critical_metrics, AV="n", MAV=""))
        assert illegal.error_type is ErrorType.ILLEGAL_VALUE
        assert illegal.error_metrics == ("AV", "MAV")

    def test_positional_values(self):
        result = calculate_from_values(CVSS31, "N", "L", "N", "N", "U", "H", "H", "H", "P", "O", "C")
        assert result.scores["temporal"] == "8.8"
        positional = calculate_from_values(REIFEGRAD, "N", "F", "F", "N", "N")
        assert positional.base_score == "2.0"

    def test_too_many_positional_values(self):
        with pytest.raises(TypeError):
            calculate_from_values(REIFEGRAD, "N", "N", "N", "N", "N", "N")


class TestRecords:
    """JSON-ready records for callers."""

    def test_success_record(self):
        record = calculate_from_vector(CRITICAL).to_dict()
        assert record["success"] is True
        assert record["base_score"] == "9.8"
        assert record["environmental_severity"] == "Critical"
        assert record["base_iss"] == pytest.approx(0.914816)
        assert record["vector_string"] == CRITICAL

    def test_failure_records(self):
        assert calculate_from_vector(CRITICAL + "/Z:X").to_dict() == {
            "success": False,
            "error_type": "IllegalValue",
            "error_metrics": ["Z"],
        }
        assert calculate_from_vector("garbage").to_dict() == {"success": False, "error_type": "MalformedVector"}
