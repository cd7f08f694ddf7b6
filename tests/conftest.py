import pytest


@pytest.fixture
def critical_metrics():
    """CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H, scores 9.8."""
    return {"AV": "N", "AC": "L", "PR": "N", "UI": "N", "S": "U", "C": "H", "I": "H", "A": "H"}


@pytest.fixture
def reifegrad_metrics():
    """Level 1 fully and level 2 largely achieved."""
    return {"U": "F", "D": "F", "G": "L", "E": "N", "V": "N"}
