"""
Metric schema data structures.

A :class:`Scheme` is plain configuration: ordered metric groups, the weight
and display label of every legal value, the severity bands and the XML
naming used by the exporter.  Schemes are built once at import time (see
``reifegrad.schemes``) and are read-only afterwards, so they can be shared
between threads and passed by reference into every call.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from .errors import SchemaError

# Sentinel value code for an optional metric that was not supplied.
NOT_DEFINED = "X"
NOT_DEFINED_LABEL = "NOT_DEFINED"


@dataclass(frozen=True, eq=False)
class Metric:
    """A single categorical metric.

    Attributes:
        code: Short code used in vector strings, e.g. ``"AV"``.
        name: Human-readable name.
        element: Element name used in XML exports.
        weights: Ordered mapping of legal value code to numeric weight.  The
            order of the keys is the order of :attr:`values`.
        labels: Display label of every value code, e.g. ``{"N": "NETWORK"}``.
        changed_weights: Alternative weights used while the scheme's scope
            changed condition holds (CVSS ``PR`` and ``MPR``).
        base: For override metrics, the code of the metric they replace when
            they are not defined (``MAV`` overrides ``AV``).
    """

    code: str
    name: str
    element: str
    weights: Mapping[str, float]
    labels: Mapping[str, str]
    changed_weights: Optional[Mapping[str, float]] = None
    base: Optional[str] = None

    def __post_init__(self) -> None:
        missing = [value for value in self.weights if value not in self.labels]
        if missing:
            raise SchemaError(f"metric {self.code} has no label for {', '.join(missing)}")
        if self.changed_weights is not None and set(self.changed_weights) != set(self.weights):
            raise SchemaError(f"metric {self.code} changed weights do not cover its values")
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))
        if self.changed_weights is not None:
            object.__setattr__(self, "changed_weights", MappingProxyType(dict(self.changed_weights)))

    @property
    def values(self) -> Tuple[str, ...]:
        return tuple(self.weights)

    def weight(self, value: str, changed: bool = False) -> float:
        table = self.changed_weights if changed and self.changed_weights is not None else self.weights
        try:
            return table[value]
        except KeyError:
            raise SchemaError(f"{self.code}:{value} has no weight") from None


@dataclass(frozen=True)
class MetricGroup:
    """A named, ordered collection of metrics.

    Every metric of a mandatory group must be present in a valid vector.
    Metrics of optional groups default to :data:`NOT_DEFINED`.
    """

    name: str
    metrics: Tuple[Metric, ...]
    mandatory: bool
    element: str
    score_key: Optional[str] = None
    score_element: Optional[str] = None
    severity_element: Optional[str] = None


@dataclass(frozen=True)
class SeverityBand:
    """A named score range, both bounds inclusive."""

    name: str
    bottom: float
    top: float


@dataclass(frozen=True, eq=False)
class Scheme:
    """A complete scoring scheme.

    Schemes compare and hash by identity, so they can be used as dict keys
    and set members.

    Attributes:
        name: Registry key, e.g. ``"cvss31"``.
        title: Human-readable name.
        version_identifier: Prefix emitted at the start of vector strings.
        version_pattern: Regular expression (unanchored) matching every
            prefix accepted when decoding.
        groups: Metric groups in declaration order.
        formula: Name of the scoring formula (see ``reifegrad.calculator``).
        severity_bands: Bands in ascending order, partitioning ``[0, max]``.
        xml_root: Root element of exported documents.
        xml_attributes: Namespace declarations and other root attributes.
    """

    name: str
    title: str
    version_identifier: str
    version_pattern: str
    groups: Tuple[MetricGroup, ...]
    formula: str
    severity_bands: Tuple[SeverityBand, ...]
    xml_root: str
    xml_attributes: Tuple[Tuple[str, str], ...] = ()
    _index: Mapping[str, Tuple[Metric, MetricGroup]] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        index: Dict[str, Tuple[Metric, MetricGroup]] = {}
        for group in self.groups:
            for metric in group.metrics:
                if metric.code in index:
                    raise SchemaError(f"metric {metric.code} declared twice in {self.name}")
                index[metric.code] = (metric, group)
        for code, (metric, _) in index.items():
            if metric.base is not None and metric.base not in index:
                raise SchemaError(f"metric {code} overrides unknown metric {metric.base}")
        if not self.severity_bands:
            raise SchemaError(f"scheme {self.name} has no severity bands")
        object.__setattr__(self, "_index", MappingProxyType(index))

    # -----------------------------------------------------------------------
    # Lookups
    # -----------------------------------------------------------------------

    @property
    def metrics(self) -> Tuple[Metric, ...]:
        """All metrics in declaration order."""
        return tuple(metric for group in self.groups for metric in group.metrics)

    @property
    def codes(self) -> Tuple[str, ...]:
        return tuple(self._index)

    @property
    def mandatory_codes(self) -> Tuple[str, ...]:
        return tuple(m.code for g in self.groups if g.mandatory for m in g.metrics)

    @property
    def optional_codes(self) -> Tuple[str, ...]:
        return tuple(m.code for g in self.groups if not g.mandatory for m in g.metrics)

    @property
    def max_score(self) -> float:
        return self.severity_bands[-1].top

    def __contains__(self, code: object) -> bool:
        return code in self._index

    def __iter__(self) -> Iterator[Metric]:
        return iter(self.metrics)

    def metric(self, code: str) -> Metric:
        try:
            return self._index[code][0]
        except KeyError:
            raise SchemaError(f"{self.name} has no metric {code!r}") from None

    def group_of(self, code: str) -> MetricGroup:
        try:
            return self._index[code][1]
        except KeyError:
            raise SchemaError(f"{self.name} has no metric {code!r}") from None

    def is_optional(self, code: str) -> bool:
        return not self.group_of(code).mandatory

    def is_legal(self, code: str, value: str) -> bool:
        """Whether ``value`` may be selected for ``code``."""
        if value in self.metric(code).weights:
            return True
        return value == NOT_DEFINED and self.is_optional(code)

    def weight(self, code: str, value: str, changed: bool = False) -> float:
        return self.metric(code).weight(value, changed)

    def label(self, code: str, value: str) -> str:
        metric = self.metric(code)
        if value in metric.labels:
            return metric.labels[value]
        if value == NOT_DEFINED and self.is_optional(code):
            return NOT_DEFINED_LABEL
        raise SchemaError(f"{code}:{value} has no label")

    def defaults(self) -> Dict[str, str]:
        """The value map of a vector that sets no optional metric."""
        return {code: NOT_DEFINED for code in self.optional_codes}

    def order_codes(self, codes) -> Tuple[str, ...]:
        """Sort metric codes into declaration order, unknown codes last."""
        codes = list(dict.fromkeys(codes))
        known = [code for code in self.codes if code in codes]
        return tuple(known + [code for code in codes if code not in self._index])
