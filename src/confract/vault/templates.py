"""Markdown, plain text and JSON exports of documents."""

import json
import re
from datetime import date

from ..models import Document, Section

_BULLET = re.compile(r"^- (?P<name>.*?)(?: — \*(?P<note>.*)\*)?$")


def render_markdown(title: str, sections: list[Section], generated: date | None = None) -> str:
    """Render a title and sections as markdown."""
    generated = generated or date.today()
    lines = [f"# {title}", "", f"*Generated by Confract · {generated.isoformat()}*", ""]
    for section in sections:
        lines.append(f"## {section.emoji} {section.title}")
        for item in section.items:
            lines.append(f"- {item.name} — *{item.note}*" if item.note else f"- {item.name}")
        lines.append("")
    return "\n".join(lines)


def parse_markdown(text: str) -> list[tuple[str, str]]:
    """Read ``(name, note)`` pairs back out of rendered markdown bullets."""
    pairs = []
    for line in text.splitlines():
        match = _BULLET.match(line)
        if match:
            pairs.append((match.group("name"), match.group("note") or ""))
    return pairs


def render_text(document: Document) -> str:
    """Plain text export with underlined headings and numbered items."""
    lines = [document.title, "=" * len(document.title), ""]
    for section in document.sections:
        lines.append(section.title)
        lines.append("-" * len(section.title))
        for i, item in enumerate(section.items, 1):
            lines.append(f"{i}. {item.name} ({item.note})" if item.note else f"{i}. {item.name}")
        lines.append("")
    return "\n".join(lines)


def render_json(document: Document) -> str:
    """JSON export of the title, sections and consolidation log."""
    data = {
        "title": document.title,
        "sections": [s.to_dict() for s in document.sections],
        "consolidation_log": [e.to_dict() for e in document.consolidation_log],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)
