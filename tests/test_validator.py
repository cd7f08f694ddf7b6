"""
Tests for two-pass validation.
"""

from reifegrad.errors import ErrorType
from reifegrad.schemes import CVSS31, REIFEGRAD
from reifegrad.validator import normalize, validate


class TestNormalize:
    """Discrete input preparation."""

    def test_optional_metrics_default_to_not_defined(self, critical_metrics):
        values = normalize(critical_metrics, CVSS31)
        assert values["E"] == "X"
        assert values["MA"] == "X"
        assert values["AV"] == "N"

    def test_none_counts_as_absent(self, critical_metrics):
        values = normalize(dict(critical_metrics, AV=None, RL=None), CVSS31)
        assert "AV" not in values
        assert values["RL"] == "X"

    def test_input_not_mutated(self, critical_metrics):
        before = dict(critical_metrics)
        normalize(critical_metrics, CVSS31)
        assert critical_metrics == before


class TestCompleteness:
    """Step 1: every mandatory metric present."""

    def test_valid(self, critical_metrics, reifegrad_metrics):
        assert validate(normalize(critical_metrics, CVSS31), CVSS31) is None
        assert validate(reifegrad_metrics, REIFEGRAD) is None

    def test_all_missing_metrics_reported(self, critical_metrics):
        del critical_metrics["AV"]
        del critical_metrics["C"]
        failure = validate(critical_metrics, CVSS31)
        assert failure.error_type is ErrorType.MISSING_MANDATORY_METRIC
        assert failure.error_metrics == ("AV", "C")

    def test_empty_value_is_missing(self, reifegrad_metrics):
        reifegrad_metrics["G"] = ""
        failure = validate(reifegrad_metrics, REIFEGRAD)
        assert failure.error_type is ErrorType.MISSING_MANDATORY_METRIC
        assert failure.error_metrics == ("G",)

    def test_missing_reported_before_illegal(self, critical_metrics):
        del critical_metrics["UI"]
        critical_metrics["AV"] = "Q"
        failure = validate(critical_metrics, CVSS31)
        assert failure.error_type is ErrorType.MISSING_MANDATORY_METRIC
        assert failure.error_metrics == ("UI",)


class TestLegality:
    """Step 2: every value legal for its metric."""

    def test_all_illegal_values_reported(self, critical_metrics):
        values = normalize(dict(critical_metrics, AV="Q", S="X", RC="Z"), CVSS31)
        failure = validate(values, CVSS31)
        assert failure.error_type is ErrorType.ILLEGAL_VALUE
        assert failure.error_metrics == ("AV", "S", "RC")

    def test_not_defined_accepted_for_optional_metrics(self, critical_metrics):
        values = dict(critical_metrics, MAV="X", E="X", CR="X")
        assert validate(values, CVSS31) is None

    def test_empty_optional_value_is_illegal(self, critical_metrics):
        failure = validate(dict(critical_metrics, E=""), CVSS31)
        assert failure.error_type is ErrorType.ILLEGAL_VALUE
        assert failure.error_metrics == ("E",)

    def test_unknown_metric_code_is_illegal(self, critical_metrics):
        failure = validate(dict(critical_metrics, Z="X"), CVSS31)
        assert failure.error_type is ErrorType.ILLEGAL_VALUE
        assert failure.error_metrics == ("Z",)

    def test_non_string_value_is_illegal(self, reifegrad_metrics):
        failure = validate(dict(reifegrad_metrics, D=1), REIFEGRAD)
        assert failure.error_metrics == ("D",)

    def test_value_of_other_scheme_is_illegal(self, reifegrad_metrics):
        failure = validate(dict(reifegrad_metrics, E="H"), REIFEGRAD)
        assert failure.error_type is ErrorType.ILLEGAL_VALUE
        assert failure.error_metrics == ("E",)
