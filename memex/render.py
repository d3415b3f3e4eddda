"""Rendering of retrieved memory items into prompt context."""

from __future__ import annotations

from typing import Sequence

from .decision import InjectItem
from .memory_types import InjectConfig
from .text_utils import one_line, truncate_clean


def _pick_answer(item: InjectItem, max_chars: int) -> str:
    raw = item.summary if item.summary is not None else item.answer
    return truncate_clean(raw, max_chars)


def render_memory_context(items: Sequence[InjectItem], cfg: InjectConfig) -> str:
    """Render items as a ``[MEMORY_CONTEXT v1]`` block; empty input gives ``""``."""
    if not items:
        return ""

    lines = [
        "[MEMORY_CONTEXT v1]",
        "The following items are retrieved from the memory system. "
        "Prefer using them when relevant.",
        "If you use an item, include its anchor exactly once in your final answer: "
        "[QA_REF <qa_id>].",
        "",
    ]

    for n, item in enumerate(items[: cfg.max_items], start=1):
        lines.append(f"{n}) [QA_REF {item.qa_id}]")
        lines.append(f"Q: {one_line(item.question)}")
        lines.append(f"A: {_pick_answer(item, cfg.max_answer_chars)}")
        if cfg.include_meta_line:
            tags = ",".join(item.tags) if item.tags else "-"
            lines.append(
                f"Meta: level={item.validation_level} trust={item.trust:.2f} "
                f"score={item.score:.2f} tags={tags}"
            )
        lines.append("")

    lines.extend(
        [
            "Rules:",
            "- Do not invent anchors.",
            "- If none are relevant, ignore them.",
            "- Prefer the highest validation_level and trust.",
            "[/MEMORY_CONTEXT]",
        ]
    )
    return "\n".join(lines) + "\n"


def merge_prompt(user_query: str, memory_context: str) -> str:
    """Prefix the query with the memory context unless the context is blank."""
    if not memory_context.strip():
        return user_query
    return f"{memory_context}\n{user_query}"