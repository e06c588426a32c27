"""
Upstream answer parsing tests
"""

import pytest

from cost_report.services.report.parsing import (
    detach_summary_sections,
    extract_pricing,
    first_url,
    looks_like_markdown_table,
    split_provider_sections,
    total_cost_cell,
)

CLOUD_RUN_SECTION = """## Provider: Google Cloud Run

| Input | Value | Original Price (USD) | Estimated Cost (USD) | Cost Calculation | Pricing Source URL |
|-------|-------|----------------------|----------------------|------------------|--------------------|
| vCPU_hours | 100 | $0.54/hour | $394.20 | $0.54/hour × 730 hours | https://cloud.google.com/run/pricing |
| Storage_GB | 250 | $0.10/GB/month | $25.00 | $0.10/GB/month × 250 GB | https://cloud.google.com/storage/pricing |
| Region | us-central1 | Unknown | Unknown | - | https://cloud.google.com/run/pricing |
| **Total** | | | $419.20 | | |"""


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("| a | b |\n|---|---|", True),
        ("no table at all", False),
        ("| pipes but no divider |", False),
        ("--- divider but no pipes", False),
        ("", False),
        (None, False),
    ],
)
def test_looks_like_markdown_table(text, expected):
    assert looks_like_markdown_table(text) is expected


class TestSplitProviderSections:
    def test_sections_are_assigned_in_order(self):
        text = "Intro text\n## Provider: A\n| a |\n## Provider: B\n| b |"

        assert split_provider_sections(text, 2) == [
            "## Provider: A\n| a |",
            "## Provider: B\n| b |",
        ]

    def test_missing_sections_are_none(self):
        text = "## Provider: A\n| a |"

        assert split_provider_sections(text, 3) == ["## Provider: A\n| a |", None, None]

    def test_extra_sections_are_dropped(self):
        text = "## Provider: A\n| a |\n## Provider: B\n| b |"

        assert split_provider_sections(text, 1) == ["## Provider: A\n| a |"]

    def test_positional_not_by_name(self):
        text = "## Provider: B\n| b |\n## Provider: A\n| a |"

        assert split_provider_sections(text, 2)[0].startswith("## Provider: B")

    def test_no_marker_single_provider_takes_everything(self):
        assert split_provider_sections("| a |\n|---|", 1) == ["| a |\n|---|"]

    def test_no_marker_many_providers(self):
        assert split_provider_sections("| a |\n|---|", 2) == [None, None]


def test_detach_summary_sections():
    section = CLOUD_RUN_SECTION + "\n\n## Totals\n\n| x |\n\n## Notes\n\n- a"

    body, tail = detach_summary_sections(section)

    assert body == CLOUD_RUN_SECTION
    assert tail.startswith("## Totals")
    assert tail.endswith("- a")


def test_detach_summary_sections_without_summary():
    assert detach_summary_sections(CLOUD_RUN_SECTION + "\n") == (CLOUD_RUN_SECTION, "")


def test_extract_pricing_reads_priced_rows():
    entries = extract_pricing(CLOUD_RUN_SECTION)

    assert entries == {
        "vCPU_hours:100": {
            "price": "$0.54/hour",
            "url": "https://cloud.google.com/run/pricing",
        },
        "Storage_GB:250": {
            "price": "$0.10/GB/month",
            "url": "https://cloud.google.com/storage/pricing",
        },
    }


def test_extract_pricing_ignores_short_rows():
    assert extract_pricing("| a | b |\n|---|---|\n| x | y |") == {}


def test_total_cost_cell():
    assert total_cost_cell(CLOUD_RUN_SECTION) == "$419.20"
    assert total_cost_cell("| a | b |") is None


def test_first_url():
    assert first_url(CLOUD_RUN_SECTION) == "https://cloud.google.com/run/pricing"
    assert first_url("see https://vercel.com/pricing.") == "https://vercel.com/pricing"
    assert first_url("nothing here") is None


TOTAL_INPUT_SECTION = """## Provider: Edge Cache

| Input | Value | Original Price (USD) | Estimated Cost (USD) | Cost Calculation | Pricing Source URL |
|---|---|---|---|---|---|
| Total_requests | 10 | $0.10/GB/month | $1.00 | $0.10/GB/month × 10 GB | https://edge.test/pricing |
| vCPU | 1 | $1/hour | $730.00 | $1/hour × 730 hours | https://edge.test/pricing |
| **Total** | | | $731.00 | | |"""


def test_total_cost_cell_skips_inputs_named_total():
    assert total_cost_cell(TOTAL_INPUT_SECTION) == "$731.00"


@pytest.mark.parametrize("label", ["Total", "**Grand Total**", "`Total (monthly)`", "total:"])
def test_total_cost_cell_label_variants(label):
    assert total_cost_cell(f"| a | 1 | $2.00 | |\n| {label} | | | $5.00 | | |") == "$5.00"


def test_extract_pricing_keeps_inputs_named_total():
    entries = extract_pricing(TOTAL_INPUT_SECTION)

    assert entries["Total_requests:10"] == {
        "price": "$0.10/GB/month",
        "url": "https://edge.test/pricing",
    }
    assert set(entries) == {"Total_requests:10", "vCPU:1"}
