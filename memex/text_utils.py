"""Small text shaping helpers."""

from __future__ import annotations


def one_line(s: str) -> str:
    """Collapse every run of whitespace into a single space and strip the ends."""
    return " ".join(s.split())


def truncate_clean(s: str, max_chars: int) -> str:
    """Strip, normalise CRLF, and cut to ``max_chars`` characters plus an ellipsis."""
    t = s.strip().replace("\r\n", "\n")
    if len(t) <= max_chars:
        return t
    return t[:max_chars] + " ..."


def trim_mid(s: str, max_chars: int) -> str:
    """Flatten to one line and cut to at most ``max_chars``, ending with ``..``."""
    t = one_line(s)
    if len(t) <= max_chars:
        return t
    return t[: max(max_chars - 2, 0)] + ".."