"""
Report table synthesis tests
"""

import pytest

from cost_report.schemas.report import SelectedProvider
from cost_report.services.report.parsing import split_cells, total_cost_cell
from cost_report.services.report.tables import (
    build_fallback_table,
    build_notes_section,
    build_pricing_table,
    build_totals_section,
    default_pricing_url,
    estimate_cost,
    numeric_value,
    parse_amount,
)


def make_selection(name="Google Cloud Run", inputs=None, schema=None) -> SelectedProvider:
    return SelectedProvider(
        provider={"name": name, "inputs": schema or []},
        inputs=inputs or {},
    )


class TestEstimateCost:
    def test_hourly_price_runs_730_hours(self):
        estimate = estimate_cost("$0.54/hour", "3")

        assert estimate.amount == pytest.approx(394.20)
        assert estimate.display == "$394.20"
        assert estimate.calculation == "$0.54/hour × 730 hours"

    def test_storage_price_scales_with_value(self):
        estimate = estimate_cost("$0.10/GB/month", "250")

        assert estimate.amount == pytest.approx(25.00)
        assert estimate.display == "$25.00"
        assert estimate.calculation == "$0.10/GB/month × 250 GB"

    def test_storage_price_with_non_numeric_value_counts_one(self):
        estimate = estimate_cost("$0.10/GB/month", "lots")

        assert estimate.amount == pytest.approx(0.10)
        assert estimate.calculation == "$0.10/GB/month × 1 GB"

    def test_storage_price_reads_leading_number(self):
        estimate = estimate_cost("$0.10/GB/month", "250 GB")

        assert estimate.amount == pytest.approx(25.00)
        assert estimate.calculation == "$0.10/GB/month × 250 GB"

    @pytest.mark.parametrize("value", ["1", "1000", "us-east1"])
    def test_included_ignores_value(self, value):
        estimate = estimate_cost("Included", value)

        assert estimate.amount is None
        assert estimate.display == "Included"
        assert estimate.calculation == "-"

    @pytest.mark.parametrize("price", ["$0.40 per million requests", "Free tier", "$x/hour"])
    def test_unrecognized_price_is_included(self, price):
        assert estimate_cost(price, "5").display == "Included"


@pytest.mark.parametrize(
    ("text", "expected"),
    [("$394.20", 394.2), ("**$1,200.50**", 1200.5), ("25", 25.0), ("Unknown", None), ("", None)],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


def test_default_pricing_url():
    assert default_pricing_url("MongoDB Atlas") == "https://www.mongodbatlas.com/pricing"
    assert default_pricing_url("Google Cloud  Run") == "https://www.googlecloudrun.com/pricing"


class TestPricingTable:
    schema = [
        {"name": "vCPU_hours", "type": "number"},
        {"name": "Storage_GB", "type": "number"},
        {"name": "Region", "type": "text", "defaultValue": "us-central1"},
    ]
    pricing = {
        "vCPU_hours:100": {"price": "$0.54/hour", "url": "https://cloud.google.com/run/pricing"},
        "Storage_GB:250": {"price": "$0.10/GB/month", "url": ""},
        "Region:us-central1": {"price": "Included", "url": ""},
    }

    def test_full_coverage_builds_table(self):
        selection = make_selection(
            inputs={"vCPU_hours": "100", "Storage_GB": "250"}, schema=self.schema
        )

        table = build_pricing_table(selection, self.pricing)

        lines = table.splitlines()
        assert lines[0] == "## Provider: Google Cloud Run"
        rows = [split_cells(line) for line in lines if line.startswith("| ")]
        assert rows[0][0] == "Input"
        assert rows[1] == [
            "vCPU_hours",
            "100",
            "$0.54/hour",
            "$394.20",
            "$0.54/hour × 730 hours",
            "https://cloud.google.com/run/pricing",
        ]
        assert rows[2][3] == "$25.00"
        # Region falls back to its default value and is included
        assert rows[3][:5] == ["Region", "us-central1", "Included", "Included", "-"]
        assert rows[2][5] == "https://www.googlecloudrun.com/pricing"
        assert total_cost_cell(table) == "$419.20"

    def test_partial_coverage_returns_none(self):
        selection = make_selection(
            inputs={"vCPU_hours": "101", "Storage_GB": "250"}, schema=self.schema
        )

        assert build_pricing_table(selection, self.pricing) is None

    def test_no_memo_returns_none(self):
        selection = make_selection(inputs={"vCPU_hours": "100"}, schema=self.schema)

        assert build_pricing_table(selection, None) is None
        assert build_pricing_table(selection, {}) is None


def test_fallback_table_marks_everything_unknown():
    selection = make_selection(
        name="MongoDB Atlas",
        inputs={"Cluster_tier": "M10", "Storage_GB": "20"},
        schema=[{"name": "Cluster_tier"}, {"name": "Storage_GB", "type": "number"}],
    )

    table = build_fallback_table(selection)

    rows = [split_cells(line) for line in table.splitlines()[4:]]
    assert rows[0] == [
        "Cluster_tier",
        "M10",
        "Unknown",
        "Unknown",
        "-",
        "https://www.mongodbatlas.com/pricing",
    ]
    assert rows[1][3] == "Unknown"
    assert total_cost_cell(table) == "Unknown"


def test_totals_section_sums_provider_totals():
    section = build_totals_section([("A", "$394.20"), ("B", "**$25.80**"), ("C", "Unknown")])

    lines = section.splitlines()
    assert lines[0] == "## Totals"
    assert split_cells(lines[4]) == ["A", "-", "$394.20"]
    assert split_cells(lines[6]) == ["C", "-", "Unknown"]
    assert split_cells(lines[-1]) == ["**Grand Total**", "-", "$420.00"]


def test_notes_section():
    section = build_notes_section([("Vercel", "https://vercel.com/pricing")])

    assert section == "## Notes\n\n- Vercel: https://vercel.com/pricing"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("250", 250.0), ("250 GB", 250.0), ("1,500", 1500.0), (".5GB", 0.5), ("lots", 1.0), ("", 1.0)],
)
def test_numeric_value(value, expected):
    assert numeric_value(value) == pytest.approx(expected)
