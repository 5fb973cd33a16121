"""Bounded, category-grouped Markdown summary of a canonical database."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from actioncatalog.domain.model import ActionRecord, CanonicalDatabase

ENTRIES_PER_CATEGORY: Final[int] = 50
PARAMETER_PREVIEW: Final[int] = 3


def render_digest(
    database: CanonicalDatabase,
    *,
    entries_per_category: int = ENTRIES_PER_CATEGORY,
    parameter_preview: int = PARAMETER_PREVIEW,
) -> str:
    by_category: dict[str, list[ActionRecord]] = defaultdict(list)
    for identifier in sorted(database.actions):
        record = database.actions[identifier]
        by_category[record.category or "general"].append(record)

    lines = [
        "# Action Reference",
        "",
        "Canonical reference of known action identifiers.",
        "Use these exact identifiers when building workflows.",
        "",
        f"Total Actions: {database.metadata.total_actions}",
        f"Categories: {', '.join(database.metadata.categories)}",
        "",
        "## Actions by Category",
        "",
    ]

    for category in sorted(by_category):
        records = by_category[category]
        lines.append(f"### {category[:1].upper()}{category[1:]}")
        lines.append("")
        for record in records[:entries_per_category]:
            lines.extend(_entry_lines(record, parameter_preview))
        if len(records) > entries_per_category:
            lines.append(f"  ... and {len(records) - entries_per_category} more")
        lines.append("")

    return "\n".join(lines)


def _entry_lines(record: ActionRecord, parameter_preview: int) -> list[str]:
    lines = [f"- **{record.name}** (`{record.identifier}`)"]
    if record.description:
        lines.append(f"  {record.description}")
    keys = record.parameter_keys()
    if keys:
        elision = "..." if len(keys) > parameter_preview else ""
        lines.append(f"  Parameters: {', '.join(keys[:parameter_preview])}{elision}")
    return lines
