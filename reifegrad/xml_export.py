"""
XML export of scored metric values.

The document has a fixed root element with the scheme's namespace
declarations and one child element per metric group.  Each group element
holds one element per metric, whose text is the display label of the
selected value (``NETWORK`` rather than ``N``), followed by the group's
score and severity elements when the group reports a score::

    <?xml version="1.0" encoding="UTF-8"?>
    <cvssv3.1 xmlns="https://www.first.org/cvss/cvss-v3.1.xsd" ...>
      <base_metrics>
        <attack-vector>NETWORK</attack-vector>
        ...
        <base-score>9.8</base-score>
        <base-severity>Critical</base-severity>
      </base_metrics>
      ...
    </cvssv3.1>
"""

import xml.etree.ElementTree as ET
from typing import Mapping

from .results import ScoreResult
from .schema import NOT_DEFINED, Scheme

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def build_xml(values: Mapping[str, str], result: ScoreResult, scheme: Scheme) -> str:
    """Render validated ``values`` and their ``result`` as an XML document.

    Labels are looked up through the same scheme used for validation, so a
    value without a label raises ``SchemaError`` instead of leaking into the
    document.
    """
    root = ET.Element(scheme.xml_root, dict(scheme.xml_attributes))
    for group in scheme.groups:
        group_element = ET.SubElement(root, group.element)
        for metric in group.metrics:
            value = values.get(metric.code, NOT_DEFINED)
            ET.SubElement(group_element, metric.element).text = scheme.label(metric.code, value)
        if group.score_key is not None and group.score_key in result.scores:
            if group.score_element:
                ET.SubElement(group_element, group.score_element).text = result.scores[group.score_key]
            if group.severity_element:
                severity = result.severities.get(group.score_key)
                ET.SubElement(group_element, group.severity_element).text = severity or ""
    ET.indent(root, space="  ")
    return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"
