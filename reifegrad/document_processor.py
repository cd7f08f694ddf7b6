"""
Document intake for the scoring engine
======================================

This module handles uploaded reports (Word, PDF) and extracts metric values
from their text so they can be scored.  An embedded vector string is used
as-is; otherwise metric values are detected with keyword patterns.

Intake sits in front of the engine: it reads document bytes handed over by
the caller and passes plain metric values on, the engine itself never sees
a file.
"""

import io
import logging
import re
from typing import Any, Dict, List, Optional

import pdfplumber
from docx import Document
from PyPDF2 import PdfReader

from . import config
from .engine import calculate_from_metrics
from .errors import Failure
from .schema import Scheme
from .schemes import CVSS31
from .validator import normalize, validate
from .vector import decode, search_pattern

logger = logging.getLogger(__name__)

# Keyword patterns per scheme, metric and value.  Within a metric, values
# are tried in the order listed and the first match wins.
CVSS_PATTERNS: Dict[str, Dict[str, List[str]]] = {
    "AV": {
        "N": [r"\bnetwork\b", r"\bremote\b", r"\bover\s+network\b", r"\bnetwork\s+accessible\b", r"\bnetwork\s+based\b"],
        "A": [r"\badjacent\b", r"\bsame\s+network\b", r"\blocal\s+network\b", r"\bsubnet\b"],
        "L": [r"\blocal\b", r"\bon\s+system\b", r"\brequires\s+local\s+access\b", r"\blocal\s+access\b"],
        "P": [r"\bphysical\b", r"\bphysical\s+access\b", r"\brequires\s+physical\s+access\b"],
    },
    "AC": {
        "L": [r"\blow\s+complexity\b", r"\bsimple\b", r"\beasy\b", r"\btrivial\b", r"\bsimple\s+to\s+exploit\b"],
        "H": [r"\bhigh\s+complexity\b", r"\bcomplex\b", r"\bdifficult\b", r"\brequires\s+special\b"],
    },
    "PR": {
        "N": [r"\bno\s+privileges\b", r"\bunprivileged\b", r"\bno\s+authentication\b"],
        "L": [r"\blow\s+privileges\b", r"\bbasic\s+user\b", r"\buser\s+level\b"],
        "H": [r"\bhigh\s+privileges\b", r"\badmin\b", r"\broot\b", r"\belevated\b"],
    },
    "UI": {
        "N": [r"\bno\s+user\s+interaction\b", r"\bautomatic\b", r"\bno\s+user\s+action\b"],
        "R": [r"\brequires\s+user\s+interaction\b", r"\buser\s+must\s+click\b", r"\buser\s+action\b", r"\buser\s+interaction\s+required\b"],
    },
    "S": {
        "U": [r"\bunchanged\s+scope\b", r"\bsame\s+component\b", r"\bwithin\s+component\b", r"\bunchanged\b"],
        "C": [r"\bchanged\s+scope\b", r"\bdifferent\s+component\b", r"\bcross\s+component\b", r"\bchanged\b"],
    },
    "C": {
        "H": [r"\bhigh\s+confidentiality\s+impact\b", r"\bcomplete\s+data\s+disclosure\b"],
        "L": [r"\blow\s+confidentiality\s+impact\b", r"\bminor\s+data\s+leak\b"],
        "N": [r"\bno\s+confidentiality\s+impact\b", r"\bno\s+data\s+disclosure\b", r"\bno\s+data\s+leak\b"],
    },
    "I": {
        "H": [r"\bhigh\s+integrity\s+impact\b", r"\bcomplete\s+data\s+modification\b"],
        "L": [r"\blow\s+integrity\s+impact\b", r"\bminor\s+data\s+modification\b"],
        "N": [r"\bno\s+integrity\s+impact\b", r"\bno\s+data\s+modification\b"],
    },
    "A": {
        "H": [r"\bhigh\s+availability\s+impact\b", r"\bcomplete\s+service\s+disruption\b"],
        "L": [r"\blow\s+availability\s+impact\b", r"\bminor\s+service\s+disruption\b"],
        "N": [r"\bno\s+availability\s+impact\b", r"\bno\s+service\s+disruption\b"],
    },
}

# Reifegrad reports rate each level on its own line, e.g.
# "Gesteuert: überwiegend erreicht".
_LEVEL_NAMES = {
    "U": r"unvollst(?:ä|ae)ndig",
    "D": r"durchgef(?:ü|ue)hrt",
    "G": r"gesteuert",
    "E": r"etabliert",
    "V": r"vorhersagbar",
}
_RATING_WORDS = {
    "N": [r"nicht\s+(?:erreicht|erfüllt)", r"not\s+achieved"],
    "P": [r"teilweise", r"partially"],
    "L": [r"(?:ü|ue)berwiegend", r"weitgehend", r"largely"],
    "F": [r"vollst(?:ä|ae)ndig\s+(?:erreicht|erfüllt)", r"fully"],
}
REIFEGRAD_PATTERNS: Dict[str, Dict[str, List[str]]] = {
    code: {
        value: [rf"^[^\n]*\b{level}\b[^\n]*\b{word}" for word in words]
        for value, words in _RATING_WORDS.items()
    }
    for code, level in _LEVEL_NAMES.items()
}

PATTERNS: Dict[str, Dict[str, Dict[str, List[str]]]] = {
    "cvss31": CVSS_PATTERNS,
    "reifegrad": REIFEGRAD_PATTERNS,
}


class DocumentProcessor:
    """Processes uploaded documents to extract metric values for a scheme."""

    def __init__(self, scheme: Scheme = CVSS31):
        self.scheme = scheme
        self.patterns = PATTERNS.get(scheme.name, {})

    def extract_text_from_docx(self, file_content: bytes) -> str:
        """Extract text from Word document."""
        try:
            doc = Document(io.BytesIO(file_content))
        except Exception as e:
            raise ValueError(f"Error reading Word document: {e}") from e
        return "\n".join(paragraph.text for paragraph in doc.paragraphs)

    def extract_text_from_pdf(self, file_content: bytes) -> str:
        """Extract text from PDF document."""
        try:
            # pdfplumber keeps the layout better, PyPDF2 is the fallback
            with pdfplumber.open(io.BytesIO(file_content)) as pdf:
                return "\n".join(page_text for page_text in (page.extract_text() for page in pdf.pages) if page_text)
        except Exception as plumber_error:
            logger.debug("pdfplumber failed, falling back to PyPDF2: %s", plumber_error)
            try:
                reader = PdfReader(io.BytesIO(file_content))
                return "\n".join(page.extract_text() or "" for page in reader.pages)
            except Exception as e:
                raise ValueError(f"Error reading PDF document: {e}") from e

    def extract_text_from_file(self, file_content: bytes, filename: str) -> str:
        """Extract text from uploaded file based on file type."""
        filename_lower = filename.lower()

        if filename_lower.endswith(".docx"):
            return self.extract_text_from_docx(file_content)
        elif filename_lower.endswith(".pdf"):
            return self.extract_text_from_pdf(file_content)
        elif filename_lower.endswith(".txt"):
            return file_content.decode("utf-8")
        else:
            raise ValueError(f"Unsupported file type: {filename}")

    def find_vector(self, text: str) -> Optional[Dict[str, str]]:
        """Return the metric values of the first valid vector string in ``text``.

        Partial vectors and vectors with illegal values are skipped.
        """
        for match in search_pattern(self.scheme).finditer(text):
            decoded = decode(match.group(), self.scheme)
            if isinstance(decoded, Failure):
                continue
            if validate(normalize(decoded, self.scheme), self.scheme) is not None:
                logger.debug("Skipping incomplete vector: %s", match.group())
                continue
            return decoded
        return None

    def detect_metrics(self, text: str) -> Dict[str, str]:
        """Detect metric values from text.

        An embedded vector string wins over keyword detection.
        """
        embedded = self.find_vector(text)
        if embedded is not None:
            logger.debug("Using embedded vector: %s", embedded)
            return embedded

        text_lower = text.lower()
        detected: Dict[str, str] = {}
        for code, values in self.patterns.items():
            for value, patterns in values.items():
                matched = next(
                    (p for p in patterns if re.search(p, text_lower, re.IGNORECASE | re.MULTILINE)),
                    None,
                )
                if matched is not None:
                    detected[code] = value
                    logger.debug("%s: %s (pattern: %s)", code, value, matched)
                    break
            else:
                logger.debug("%s: no pattern matched", code)
        return detected

    def extract_cve_id(self, text: str) -> Optional[str]:
        """Extract CVE ID from text."""
        match = re.search(r"CVE-\d{4}-\d{4,7}", text, re.IGNORECASE)
        return match.group().upper() if match else None

    def extract_title(self, text: str) -> str:
        """Extract potential title from text."""
        for line in text.split("\n"):
            line = line.strip()
            if 10 < len(line) < 200:
                # Skip common headers
                if not any(header in line.lower() for header in ["abstract", "summary", "introduction", "description"]):
                    return line
        return "Document Analysis"

    def process_document(self, file_content: bytes, filename: str) -> Dict[str, Any]:
        """Process uploaded document, extract its metric values and score them."""
        try:
            text = self.extract_text_from_file(file_content, filename)
        except ValueError as e:
            logger.warning("Could not read %s: %s", filename, e)
            return {"success": False, "error": str(e), "filename": filename}

        metrics = self.detect_metrics(text)
        result = calculate_from_metrics(metrics, self.scheme)
        preview = config.TEXT_PREVIEW_LENGTH
        return {
            "success": True,
            "text": text[:preview] + "..." if len(text) > preview else text,
            "metrics": metrics,
            "vector": None if isinstance(result, Failure) else result.vector_string,
            "score": result.to_dict(),
            "cve_id": self.extract_cve_id(text),
            "title": self.extract_title(text),
            "filename": filename,
        }
