"""
Report Parsing
Reading loosely structured markdown tables back out of upstream text
"""

from __future__ import annotations

import re

from cost_report.services.report.prompt import PROVIDER_MARKER
from cost_report.services.report.tables import UNKNOWN

URL_PATTERN = re.compile(r"https?://[^\s|<>()\[\]`\"']+")
SUMMARY_HEADING = re.compile(r"^##\s+(Totals|Notes)\b", re.MULTILINE)
DIVIDER_CELL = re.compile(r":?-{3,}:?")
# Label cell of a Total row: "**Total**", "Grand Total", "Total (monthly)"
TOTAL_LABEL = re.compile(r"(grand\s+)?total(\s*\(.*\))?:?", re.IGNORECASE)

# Column positions inside a provider table row
INPUT_CELL, VALUE_CELL, PRICE_CELL, URL_CELL = 0, 1, 2, 5


def looks_like_markdown_table(text: str | None) -> bool:
    """Cheap sanity check: at least one pipe and one divider"""
    return bool(text) and "|" in text and "---" in text


def split_cells(line: str) -> list[str]:
    line = line.strip()
    if line.startswith("|"):
        line = line[1:]
    if line.endswith("|"):
        line = line[:-1]
    return [cell.strip() for cell in line.split("|")]


def _is_divider(cells: list[str]) -> bool:
    filled = [c for c in cells if c]
    return bool(filled) and all(DIVIDER_CELL.fullmatch(c) for c in filled)


def _plain(cell: str) -> str:
    return cell.strip().strip("*`_").strip()


def _is_total_row(cells: list[str]) -> bool:
    return bool(cells) and TOTAL_LABEL.fullmatch(_plain(cells[0])) is not None


def split_provider_sections(text: str, count: int) -> list[str | None]:
    """
    Assign `## Provider:` sections to providers by position.

    Returns exactly `count` items; None marks a provider the text has no
    section for. Anything before the first marker is dropped. Without any
    marker the whole text belongs to a lone provider.
    """
    if PROVIDER_MARKER not in text:
        if count == 1:
            return [text.strip()]
        return [None] * count

    sections: list[str | None] = [
        (PROVIDER_MARKER + part).strip() for part in text.split(PROVIDER_MARKER)[1:]
    ]
    sections = sections[:count]
    sections.extend([None] * (count - len(sections)))
    return sections


def detach_summary_sections(section: str) -> tuple[str, str]:
    """Split off a trailing `## Totals` / `## Notes` block"""
    match = SUMMARY_HEADING.search(section)
    if not match:
        return section.strip(), ""
    return section[: match.start()].strip(), section[match.start() :].strip()


def extract_pricing(fragment: str) -> dict[str, dict[str, str]]:
    """
    Memo entries from every priced row of a provider table.

    Header, divider and Total rows are skipped, as are rows whose price is
    empty or Unknown.
    """
    entries: dict[str, dict[str, str]] = {}
    for line in fragment.splitlines():
        line = line.strip()
        if not line.startswith("|"):
            continue
        cells = split_cells(line)
        if len(cells) <= URL_CELL or _is_divider(cells) or _is_total_row(cells):
            continue

        name = _plain(cells[INPUT_CELL])
        value = _plain(cells[VALUE_CELL])
        price = cells[PRICE_CELL]
        if not name or name == "Input" or not price or price.lower() == UNKNOWN.lower():
            continue

        entries[f"{name}:{value}"] = {"price": price, "url": cells[URL_CELL]}
    return entries


def total_cost_cell(fragment: str) -> str | None:
    """Estimated cost of the first Total row (third cell from the end)"""
    for line in fragment.splitlines():
        line = line.strip()
        if not line.startswith("|"):
            continue
        cells = split_cells(line)
        if _is_total_row(cells) and len(cells) >= 3:
            return cells[-3]
    return None


def first_url(fragment: str) -> str | None:
    match = URL_PATTERN.search(fragment)
    if not match:
        return None
    return match.group(0).rstrip(".,;:")
