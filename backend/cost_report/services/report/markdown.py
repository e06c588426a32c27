"""
Markdown Rendering
Turns the assembled report into sanitized HTML

Every character of the source is HTML-escaped before any markup is
produced, so raw HTML in upstream text can never reach the client.
Supported: headings, pipe tables, bold, italic, inline code, bullet and
numbered lists, paragraphs with line breaks.
"""

from __future__ import annotations

import re
from html import escape

from cost_report.services.report.parsing import DIVIDER_CELL, split_cells

# A closing "#" run only counts after whitespace ("## C#" keeps its "#")
HEADING = re.compile(r"^(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
BULLET = re.compile(r"^[-*+]\s+(.*)$")
NUMBERED = re.compile(r"^\d+[.)]\s+(.*)$")
HORIZONTAL_RULE = re.compile(r"^(-{3,}|\*{3,}|_{3,})$")

INLINE_RULES = (
    (re.compile(r"`([^`]+)`"), r"<code>\1</code>"),
    (re.compile(r"\*\*(.+?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"(?<![\w_])__(.+?)__(?![\w_])"), r"<strong>\1</strong>"),
    (re.compile(r"(?<![\w*])\*(?!\s)(.+?)(?<!\s)\*(?![\w*])"), r"<em>\1</em>"),
    # Underscores inside words (vCPU_seconds) are not emphasis
    (re.compile(r"(?<![\w_])_(?!\s)(.+?)(?<!\s)_(?![\w_])"), r"<em>\1</em>"),
)


def render_inline(text: str) -> str:
    html = escape(text, quote=True)
    for pattern, replacement in INLINE_RULES:
        html = pattern.sub(replacement, html)
    return html


def _is_table_line(line: str) -> bool:
    return line.startswith("|")


def _is_divider_row(line: str) -> bool:
    cells = [c for c in split_cells(line) if c]
    return bool(cells) and all(DIVIDER_CELL.fullmatch(c) for c in cells)


def _render_table(rows: list[str]) -> str:
    header: list[str] | None = None
    body = rows
    if len(rows) > 1 and _is_divider_row(rows[1]):
        header = split_cells(rows[0])
        body = rows[2:]

    parts = ["<table>"]
    if header is not None:
        cells = "".join(f"<th>{render_inline(c)}</th>" for c in header)
        parts.append(f"<thead><tr>{cells}</tr></thead>")
    parts.append("<tbody>")
    for row in body:
        if _is_divider_row(row):
            continue
        cells = "".join(f"<td>{render_inline(c)}</td>" for c in split_cells(row))
        parts.append(f"<tr>{cells}</tr>")
    parts.append("</tbody></table>")
    return "".join(parts)


def _render_list(items: list[str], ordered: bool) -> str:
    tag = "ol" if ordered else "ul"
    inner = "".join(f"<li>{render_inline(item)}</li>" for item in items)
    return f"<{tag}>{inner}</{tag}>"


def _is_block_start(line: str) -> bool:
    return bool(
        _is_table_line(line)
        or HEADING.match(line)
        or BULLET.match(line)
        or NUMBERED.match(line)
        or HORIZONTAL_RULE.match(line)
    )


def render_markdown(text: str) -> str:
    lines = [line.strip() for line in (text or "").splitlines()]
    blocks: list[str] = []
    i = 0

    while i < len(lines):
        line = lines[i]
        if not line:
            i += 1
            continue

        if HORIZONTAL_RULE.match(line):
            blocks.append("<hr>")
            i += 1
            continue

        heading = HEADING.match(line)
        if heading:
            level = len(heading.group(1))
            blocks.append(f"<h{level}>{render_inline(heading.group(2))}</h{level}>")
            i += 1
            continue

        if _is_table_line(line):
            rows = []
            while i < len(lines) and _is_table_line(lines[i]):
                rows.append(lines[i])
                i += 1
            blocks.append(_render_table(rows))
            continue

        for pattern, ordered in ((BULLET, False), (NUMBERED, True)):
            if pattern.match(line):
                items = []
                while i < len(lines) and pattern.match(lines[i]):
                    items.append(pattern.match(lines[i]).group(1))
                    i += 1
                blocks.append(_render_list(items, ordered))
                break
        else:
            paragraph = []
            while i < len(lines) and lines[i] and not _is_block_start(lines[i]):
                paragraph.append(render_inline(lines[i]))
                i += 1
            blocks.append("<p>" + "<br>".join(paragraph) + "</p>")

    return "\n".join(blocks)
