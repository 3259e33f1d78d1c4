from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List


def render_journal_markdown(
    entries: Iterable[Any],
    start: date,
    end: date,
    titles: Dict[str, str] | None = None,
) -> str:
    """Render journal entries (newest first) as a printable Markdown document.

    ``titles`` maps linked record ids to display titles; unknown ids are
    listed by id.
    """
    titles = titles or {}
    lines: List[str] = [f"# Journal {start.isoformat()} to {end.isoformat()}", ""]
    rows = sorted(entries, key=lambda e: e.date, reverse=True)
    if not rows:
        lines.append("_No entries in this period._")
        return "\n".join(lines) + "\n"

    for entry in rows:
        lines.append(f"## {entry.date.isoformat()}")
        lines.append("")
        content = (entry.content or "").strip()
        lines.append(content if content else "_(empty)_")
        lines.append("")
        links = [
            ("Meetings", entry.linked_meeting_ids),
            ("Actions", entry.linked_action_ids),
            ("Knowledge", entry.linked_knowledge_ids),
        ]
        for label, ids in links:
            if ids:
                names = ", ".join(titles.get(i, i) for i in ids)
                lines.append(f"- **{label}:** {names}")
        if entry.tags:
            lines.append(f"- **Tags:** {', '.join(entry.tags)}")
        if any(ids for _, ids in links) or entry.tags:
            lines.append("")
    return "\n".join(lines).rstrip() + "\n"
