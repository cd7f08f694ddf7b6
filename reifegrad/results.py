"""Result records returned by the engine."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ScoreResult:
    """A successful scoring.

    Attributes:
        scheme: Name of the scheme used.
        scores: Score text per score key, always one decimal digit
            (``{"base": "9.8", "temporal": "9.8", ...}``).
        severities: Severity name per score key.
        sub_scores: Sub-formula values used to obtain the scores.
        vector_string: Canonical vector string of the input.
        metrics: The validated metric values, optional metrics included.
    """

    scheme: str
    scores: Dict[str, str]
    severities: Dict[str, Optional[str]]
    sub_scores: Dict[str, float] = field(default_factory=dict)
    vector_string: str = ""
    metrics: Dict[str, str] = field(default_factory=dict)

    success = True

    @property
    def base_score(self) -> str:
        return self.scores["base"]

    @property
    def base_severity(self) -> Optional[str]:
        return self.severities["base"]

    def score(self, key: str = "base") -> float:
        return float(self.scores[key])

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {"success": True, "scheme": self.scheme}
        for key, score in self.scores.items():
            record[f"{key}_score"] = score
            record[f"{key}_severity"] = self.severities.get(key)
        record.update(self.sub_scores)
        record["vector_string"] = self.vector_string
        return record


@dataclass(frozen=True)
class XmlResult:
    """A successful XML export."""

    xml_string: str
    result: ScoreResult

    success = True

    def to_dict(self) -> Dict[str, Any]:
        return {"success": True, "xml_string": self.xml_string}
