"""
Binary/PDF payload detection.

Cheap heuristics run on a fetched body before it is handed to text
extraction. False negatives are tolerated; false positives must stay rare,
so the structural check needs all four PDF markers and the noise check
needs more than 10% control characters.
"""

from __future__ import annotations

import re
from typing import Any


PDF_SIGNATURE = "%PDF-"
PDF_STRUCTURE_MARKERS = ("obj", "endobj", "stream", "endstream")

# Ratio check only applies above this many characters
MIN_LENGTH_FOR_RATIO = 100
NON_PRINTABLE_RATIO_THRESHOLD = 0.1

_NON_PRINTABLE_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def is_binary_content(content: Any) -> bool:
    """Return True when content looks like a PDF or other binary payload.

    Rules are evaluated in order and the first match wins:
    1. The trimmed content starts with the ``%PDF-`` signature.
    2. The trimmed content contains all of ``obj``, ``endobj``, ``stream``
       and ``endstream`` (order is not checked).
    3. The content is longer than 100 characters and more than 10% of it
       are control characters.

    Never raises; anything that is not a non-empty string is not binary.
    """
    if not content or not isinstance(content, str):
        return False

    trimmed = content.strip()
    if trimmed.startswith(PDF_SIGNATURE):
        return True

    if all(marker in trimmed for marker in PDF_STRUCTURE_MARKERS):
        return True

    return non_printable_ratio(content) > NON_PRINTABLE_RATIO_THRESHOLD


def non_printable_ratio(content: str) -> float:
    """Share of control characters in content, 0.0 at or below the length gate."""
    total = len(content)
    if total <= MIN_LENGTH_FOR_RATIO:
        return 0.0
    return len(_NON_PRINTABLE_RE.findall(content)) / total
