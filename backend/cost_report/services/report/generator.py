"""
Report Generator
Cache -> pricing memo -> one batched upstream call -> assembled HTML report
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from loguru import logger

from cost_report.core.exceptions import ValidationError
from cost_report.schemas.report import SelectedProvider
from cost_report.services.llm_service import LLMService
from cost_report.services.provider_store import ProviderStore
from cost_report.services.report.cache import ReportCache, cache_key
from cost_report.services.report.markdown import render_markdown
from cost_report.services.report.parsing import (
    detach_summary_sections,
    extract_pricing,
    first_url,
    looks_like_markdown_table,
    split_provider_sections,
    total_cost_cell,
)
from cost_report.services.report.prompt import SYSTEM_PROMPT, build_report_prompt
from cost_report.services.report.tables import (
    build_fallback_table,
    build_notes_section,
    build_pricing_table,
    build_totals_section,
    default_pricing_url,
)

NOTES_HEADING = re.compile(r"^##\s+Notes\b", re.MULTILINE)


@dataclass
class ReportResult:
    markdown: str
    html: str
    # Per-provider origin: "cache", "pricing", "llm" or "fallback"
    sources: list[str] = field(default_factory=list)


class ReportGenerator:
    """Builds a multi-provider cost report"""

    def __init__(self, store: ProviderStore, llm: LLMService, cache: ReportCache):
        self.store = store
        self.llm = llm
        self.cache = cache

    async def generate(self, selections: list[SelectedProvider]) -> ReportResult:
        if not selections:
            raise ValidationError("providers", "At least one provider is required")

        fragments: list[str | None] = [None] * len(selections)
        sources: list[str] = [""] * len(selections)
        misses: list[int] = []

        for index, selection in enumerate(selections):
            key = cache_key(selection)
            if self.cache.has(key):
                logger.debug(f"Report cache hit: {selection.provider.name}")
                fragments[index] = self.cache.get(key)
                sources[index] = "cache"
                continue

            record = await self._find_record(selection)
            fragment = build_pricing_table(selection, record.pricing if record else None)
            if fragment is not None:
                logger.debug(f"Pricing memo hit: {selection.provider.name}")
                self.cache.set(key, fragment)
                fragments[index] = fragment
                sources[index] = "pricing"
                continue

            misses.append(index)

        tail = ""
        if misses:
            tail = await self._resolve_misses(selections, misses, fragments, sources)
            # Upstream totals only describe the miss set
            if len(misses) != len(selections):
                tail = ""

        markdown = self._assemble(selections, fragments, tail)
        return ReportResult(markdown=markdown, html=render_markdown(markdown), sources=sources)

    async def _find_record(self, selection: SelectedProvider):
        if selection.provider.id:
            record = await self.store.find(selection.provider.id)
            if record is not None:
                return record
        return await self.store.find(selection.provider.name)

    async def _resolve_misses(
        self,
        selections: list[SelectedProvider],
        misses: list[int],
        fragments: list[str | None],
        sources: list[str],
    ) -> str:
        """One upstream call for every miss; returns a trailing Totals/Notes block if any"""
        batch = [selections[i] for i in misses]
        names = ", ".join(s.provider.name for s in batch)
        logger.info(f"Requesting estimates for {len(batch)} provider(s): {names}")

        raw = await self.llm.complete(SYSTEM_PROMPT, build_report_prompt(batch))

        if not looks_like_markdown_table(raw):
            logger.warning(f"Upstream answer has no markdown table, using fallback for: {names}")
            for index in misses:
                fragments[index] = build_fallback_table(selections[index])
                sources[index] = "fallback"
            return ""

        tail = ""
        sections = split_provider_sections(raw, len(batch))
        for index, section in zip(misses, sections):
            selection = selections[index]
            if section is not None:
                section, section_tail = detach_summary_sections(section)
                tail = section_tail or tail

            if not section or not looks_like_markdown_table(section):
                logger.warning(f"No table for {selection.provider.name}, using fallback")
                fragments[index] = build_fallback_table(selection)
                sources[index] = "fallback"
                continue

            fragments[index] = section
            sources[index] = "llm"
            self.cache.set(cache_key(selection), section)
            await self._persist_pricing(selection, section)

        return tail

    async def _persist_pricing(self, selection: SelectedProvider, fragment: str) -> None:
        entries = extract_pricing(fragment)
        if not entries:
            return
        record = await self._find_record(selection)
        if record is None:
            logger.warning(
                f"Provider {selection.provider.name} is not in the catalog, prices not stored"
            )
            return
        await self.store.save_pricing(record, entries)

    def _assemble(
        self,
        selections: list[SelectedProvider],
        fragments: list[str | None],
        tail: str,
    ) -> str:
        parts = [fragment for fragment in fragments if fragment]
        if tail:
            parts.append(tail)
        markdown = "\n\n".join(parts)

        if len(selections) > 1 and "## Totals" not in markdown:
            totals = [
                (selection.provider.name, total_cost_cell(fragment or ""))
                for selection, fragment in zip(selections, fragments)
            ]
            totals_section = build_totals_section(totals)
            notes = NOTES_HEADING.search(markdown)
            if notes:
                # Totals go ahead of an upstream Notes block
                markdown = (
                    markdown[: notes.start()] + totals_section + "\n\n" + markdown[notes.start() :]
                )
            else:
                markdown += "\n\n" + totals_section

        if not NOTES_HEADING.search(markdown):
            sources = [
                (
                    selection.provider.name,
                    first_url(fragment or "") or default_pricing_url(selection.provider.name),
                )
                for selection, fragment in zip(selections, fragments)
            ]
            markdown += "\n\n" + build_notes_section(sources)

        return markdown
