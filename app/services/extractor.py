"""Slice a numbered free-text diagnosis reply into its six labeled blocks.

The completion service is asked to answer in the form::

    1. Provide a diagnosis: ...
    2. Add a personalized message: ...
    ...
    6. End with a next recommended step: ...

Nothing enforces that format on the far side. This module is a best-effort
scan over the ``N. <label>:`` markers, not a grammar: a reply that drifts
from the format (no numbers, labels without a colon, nested numbered lists)
degrades to ``"Not specified"`` or truncated blocks, never to an error.
"""

import re

from app.models.diagnosis import NOT_SPECIFIED

BLOCK_COUNT = 6

# Result field for each block number, in reply order.
BLOCK_FIELDS = (
    "diagnosis",
    "message",
    "severity",
    "dangerLevel",
    "costEstimate",
    "nextStep",
)

# "N. <label>:" with the label on one line, optionally wrapped in markdown
# bold ("**N. <label>:**") so the markers never leak into block content.
_MARKER_RE = re.compile(
    rf"(?:\*\*)?(?<!\d)([1-{BLOCK_COUNT}])\.[ \t]+[^\n:]*?:(?:\*\*)?",
    re.IGNORECASE,
)

_BOLD = "**"


def _scan_markers(text: str) -> list[tuple[int, int, int]]:
    """Return (block number, marker start, content start) for every marker in order."""
    return [
        (int(m.group(1)), m.start(), m.end())
        for m in _MARKER_RE.finditer(text)
    ]


def extract_block(num: int, text: str) -> str:
    """Return the trimmed content of block ``num`` or ``NOT_SPECIFIED``.

    Content runs from the first ``num.`` marker up to the next marker of any
    block number, or to the end of the text.
    """
    if not text or not 1 <= num <= BLOCK_COUNT:
        return NOT_SPECIFIED

    markers = _scan_markers(text)
    for idx, (block, _, content_start) in enumerate(markers):
        if block != num:
            continue
        content_end = markers[idx + 1][1] if idx + 1 < len(markers) else len(text)
        content = text[content_start:content_end].strip()
        if len(content) > 2 * len(_BOLD) and content.startswith(_BOLD) and content.endswith(_BOLD):
            content = content[len(_BOLD):-len(_BOLD)].strip()
        return content or NOT_SPECIFIED
    return NOT_SPECIFIED


def extract_blocks(text: str) -> dict[str, str]:
    """Map every block of the reply onto its DiagnosisResult field name."""
    return {
        field: extract_block(num, text)
        for num, field in enumerate(BLOCK_FIELDS, start=1)
    }
