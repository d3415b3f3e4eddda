"""Recognition of memory anchors in model output."""

from __future__ import annotations

import re

_QA_REF_RE = re.compile(r"\[QA_REF\s+([A-Za-z0-9_\-]+)\]")


def extract_qa_refs(text: str) -> list[str]:
    """Return the distinct ``[QA_REF <id>]`` ids in ``text``, sorted."""
    return sorted({m.group(1) for m in _QA_REF_RE.finditer(text)})