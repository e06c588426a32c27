"""
Report Tables
Deterministic markdown tables: persisted-pricing, fallback, totals, notes
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from cost_report.schemas.report import SelectedProvider
from cost_report.services.report.prompt import (
    PROVIDER_MARKER,
    TABLE_COLUMNS,
    TOTALS_COLUMNS,
    table_header,
)

HOURS_PER_MONTH = 730
UNKNOWN = "Unknown"
INCLUDED = "Included"
NO_CALCULATION = "-"

HOURLY_SUFFIX = "/hour"
STORAGE_SUFFIX = "/gb/month"
LEADING_NUMBER = re.compile(r"[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")


@dataclass
class CostEstimate:
    """Estimated monthly cost of one input row"""

    amount: float | None
    calculation: str

    @property
    def display(self) -> str:
        return INCLUDED if self.amount is None else format_usd(self.amount)


def default_pricing_url(provider_name: str) -> str:
    slug = re.sub(r"\s+", "", provider_name.lower())
    return f"https://www.{slug}.com/pricing"


def format_usd(amount: float) -> str:
    return f"${amount:.2f}"


def parse_amount(text: str | None) -> float | None:
    """'$1,234.50' -> 1234.5; None for anything that is not a number"""
    if not text:
        return None
    cleaned = text.strip().strip("*` ").removeprefix("$").replace(",", "").strip()
    try:
        amount = float(cleaned)
    except ValueError:
        return None
    return amount if math.isfinite(amount) else None


def numeric_value(value: str, default: float = 1.0) -> float:
    """Leading number of `value` ("250 GB" -> 250), else `default`"""
    amount = parse_amount(value)
    if amount is not None:
        return amount
    match = LEADING_NUMBER.match((value or "").strip())
    if match:
        amount = float(match.group(0))
        if math.isfinite(amount):
            return amount
    return default


def _rate(price: str) -> float | None:
    return parse_amount(price.split("/", 1)[0])


def estimate_cost(price: str, value: str) -> CostEstimate:
    """
    Monthly cost for a memoized price string.

    `$r/hour` runs all month, `$r/GB/month` scales with the input value,
    anything else (including `Included`) counts as included.
    """
    price = price.strip()
    lowered = price.lower()

    if lowered.endswith(HOURLY_SUFFIX):
        rate = _rate(price)
        if rate is not None:
            return CostEstimate(rate * HOURS_PER_MONTH, f"{price} × {HOURS_PER_MONTH} hours")

    if lowered.endswith(STORAGE_SUFFIX):
        rate = _rate(price)
        if rate is not None:
            quantity = numeric_value(value)
            shown = value.strip() if parse_amount(value) is not None else f"{quantity:g}"
            return CostEstimate(rate * quantity, f"{price} × {shown} GB")

    return CostEstimate(None, NO_CALCULATION)


def _cell(text: str) -> str:
    # A stray pipe or newline would shift every column after it
    return " ".join(str(text).replace("|", "/").split())


def table_row(cells) -> str:
    return "| " + " | ".join(_cell(c) for c in cells) + " |"


def _provider_heading(name: str) -> list[str]:
    return [f"{PROVIDER_MARKER} {name}", ""]


def build_pricing_table(
    selection: SelectedProvider, pricing: dict[str, dict[str, str]] | None
) -> str | None:
    """Table from the pricing memo, or None unless the memo covers every input"""
    resolved = selection.resolved_inputs()
    if not pricing or not resolved:
        return None

    entries = []
    for _field, name, value in resolved:
        entry = pricing.get(f"{name}:{value}")
        if not entry:
            return None
        entries.append((name, value, entry))

    lines = _provider_heading(selection.provider.name) + table_header(TABLE_COLUMNS)
    total = 0.0
    for name, value, entry in entries:
        price = str(entry.get("price", ""))
        estimate = estimate_cost(price, value)
        if estimate.amount is not None:
            total += estimate.amount
        url = entry.get("url") or default_pricing_url(selection.provider.name)
        lines.append(table_row([name, value, price, estimate.display, estimate.calculation, url]))

    lines.append(table_row(["**Total**", "", "", format_usd(total), "", ""]))
    return "\n".join(lines)


def build_fallback_table(selection: SelectedProvider) -> str:
    """Every price unknown, used when the upstream answer has no usable table"""
    url = default_pricing_url(selection.provider.name)
    lines = _provider_heading(selection.provider.name) + table_header(TABLE_COLUMNS)
    for _field, name, value in selection.resolved_inputs():
        lines.append(table_row([name, value, UNKNOWN, UNKNOWN, NO_CALCULATION, url]))
    lines.append(table_row(["**Total**", "", "", UNKNOWN, NO_CALCULATION, ""]))
    return "\n".join(lines)


def build_totals_section(totals: list[tuple[str, str | None]]) -> str:
    """Totals table over (provider name, Total-row cost cell) pairs"""
    lines = ["## Totals", ""] + table_header(TOTALS_COLUMNS)
    grand_total = 0.0
    for name, cell in totals:
        cell = cell or UNKNOWN
        amount = parse_amount(cell)
        if amount is None:
            lines.append(table_row([name, "-", cell]))
            continue
        grand_total += amount
        lines.append(table_row([name, "-", format_usd(amount)]))
    lines.append(table_row(["**Grand Total**", "-", format_usd(grand_total)]))
    return "\n".join(lines)


def build_notes_section(sources: list[tuple[str, str]]) -> str:
    """Plain-text pricing sources, one per provider"""
    lines = ["## Notes", ""]
    lines.extend(f"- {name}: {url}" for name, url in sources)
    return "\n".join(lines)
