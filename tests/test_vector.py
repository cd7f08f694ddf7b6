"""
Tests for the vector string codec.
"""

import pytest
from reifegrad.errors import ErrorType, Failure
from reifegrad.schemes import CVSS31, REIFEGRAD
from reifegrad.validator import normalize
from reifegrad.vector import decode, encode, search_pattern

CRITICAL = "CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H"


class TestDecode:
    """Grammar check and segmentation."""

    def test_decode_base_vector(self, critical_metrics):
        assert decode(CRITICAL, CVSS31) == critical_metrics

    def test_decode_accepts_cvss30_prefix(self, critical_metrics):
        assert decode(CRITICAL.replace("3.1", "3.0"), CVSS31) == critical_metrics

    def test_decode_reifegrad(self):
        assert decode("Reifegrad/U:F/D:P/G:N/E:N/V:N", REIFEGRAD) == {
            "U": "F",
            "D": "P",
            "G": "N",
            "E": "N",
            "V": "N",
        }

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "CVSS:3.1",
            "CVSS:3.1/",
            "CVSS:3.2/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H",
            " CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H",
            "CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H/",
            "CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H\n",
            "CVSS:3.1/AV:N /AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H",
            "CVSS:3.1/av:n/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H",
            "CVSS:3.1/AV:N:L/AC:L",
            "CVSS:3.1//AV:N",
            "Reifegrad/U:N/D:N/G:N/E:N/V:N",
        ],
    )
    def test_malformed(self, text):
        result = decode(text, CVSS31)
        assert isinstance(result, Failure)
        assert result.error_type is ErrorType.MALFORMED_VECTOR
        assert result.error_metrics == ()

    def test_non_string_is_malformed(self):
        assert decode(None, CVSS31).error_type is ErrorType.MALFORMED_VECTOR

    def test_unknown_code_passes_grammar(self):
        """Unknown codes are left for the validator to report."""
        decoded = decode(CRITICAL + "/Z:X", CVSS31)
        assert decoded["Z"] == "X"

    def test_duplicate_with_identical_values(self):
        result = decode("CVSS:3.1/AV:N/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H", CVSS31)
        assert result.error_type is ErrorType.DUPLICATE_METRIC
        assert result.error_metrics == ("AV",)

    def test_all_duplicates_reported_once(self):
        result = decode("CVSS:3.1/AV:N/AC:L/AV:L/AC:H/AV:P/PR:N/UI:N/S:U/C:H/I:H/A:H", CVSS31)
        assert result.error_type is ErrorType.DUPLICATE_METRIC
        assert result.error_metrics == ("AV", "AC")

    def test_duplicate_unknown_codes_reported(self):
        result = decode(CRITICAL + "/Z:X/Z:Y", CVSS31)
        assert result.error_metrics == ("Z",)


class TestSearch:
    """Finding vector strings in running text."""

    def test_standalone_vectors(self):
        text = f"Scored {CRITICAL}, then re-scored as Reifegrad/U:F/D:F/G:N/E:N/V:N."
        assert [m.group() for m in search_pattern(CVSS31).finditer(text)] == [CRITICAL]
        assert search_pattern(REIFEGRAD).search(text).group() == "Reifegrad/U:F/D:F/G:N/E:N/V:N"

    @pytest.mark.parametrize(
        "text",
        [
            "XYZ" + CRITICAL,
            "v" + CRITICAL,
            "x/" + CRITICAL,
            CRITICAL + "x",
            CRITICAL + ":Q",
        ],
    )
    def test_glued_vectors_not_found(self, text):
        assert search_pattern(CVSS31).search(text) is None


class TestEncode:
    """Canonical form."""

    def test_declaration_order(self, critical_metrics):
        shuffled = dict(reversed(list(critical_metrics.items())))
        assert encode(shuffled, CVSS31) == CRITICAL

    def test_not_defined_optional_metrics_omitted(self, critical_metrics):
        values = normalize(dict(critical_metrics, E="P", MAV="L"), CVSS31)
        assert encode(values, CVSS31) == CRITICAL + "/E:P/MAV:L"

    def test_reifegrad(self, reifegrad_metrics):
        assert encode(reifegrad_metrics, REIFEGRAD) == "Reifegrad/U:F/D:F/G:L/E:N/V:N"


class TestRoundTrip:
    """decode(encode(m)) gives back m, minus 'not defined' optional metrics."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {},
            {"E": "F", "RL": "O", "RC": "C"},
            {"CR": "H", "IR": "L", "AR": "M", "MS": "C", "MPR": "L"},
            {"E": "X", "MAV": "P", "MC": "N"},
        ],
    )
    def test_cvss(self, critical_metrics, overrides):
        values = normalize(dict(critical_metrics, **overrides), CVSS31)
        decoded = decode(encode(values, CVSS31), CVSS31)
        expected = {code: value for code, value in values.items() if value != "X"}
        assert decoded == expected
        assert normalize(decoded, CVSS31) == values

    def test_reifegrad(self, reifegrad_metrics):
        assert decode(encode(reifegrad_metrics, REIFEGRAD), REIFEGRAD) == reifegrad_metrics
