"""
Report Prompt
Fixed instruction template for the cost-estimation upstream call
"""

from cost_report.schemas.report import SelectedProvider

PROVIDER_MARKER = "## Provider:"

TABLE_COLUMNS = (
    "Input",
    "Value",
    "Original Price (USD)",
    "Estimated Cost (USD)",
    "Cost Calculation",
    "Pricing Source URL",
)

TOTALS_COLUMNS = ("Provider", "Original Price (USD)", "Estimated Cost (USD)")

SYSTEM_PROMPT = (
    "You are a cloud cost estimation expert. "
    "You answer only with markdown in exactly the format you are asked for."
)


def table_header(columns: tuple[str, ...]) -> list[str]:
    return [
        "| " + " | ".join(columns) + " |",
        "|" + "|".join("---" for _ in columns) + "|",
    ]


def build_summary(selections: list[SelectedProvider]) -> str:
    """One `<name>: Inputs=<json>` line per provider"""
    return "\n".join(
        f"{selection.provider.name}: Inputs={selection.serialized_inputs()}"
        for selection in selections
    )


def build_report_prompt(selections: list[SelectedProvider]) -> str:
    columns = " | ".join(TABLE_COLUMNS)
    rules = [
        f"For each provider, write the heading `{PROVIDER_MARKER} <ProviderName>` followed by "
        f"exactly one markdown table with exactly these columns: | {columns} |",
        "Add one row per input, in the order given. Write hourly prices as `$<rate>/hour`, "
        "storage prices as `$<rate>/GB/month`, and `Included` when an input is not billed "
        "separately.",
        "End every provider table with a `| **Total** |` row whose Estimated Cost (USD) cell "
        "holds the provider's monthly total.",
    ]
    if len(selections) > 1:
        totals = " | ".join(TOTALS_COLUMNS)
        rules.append(
            "After the provider tables, write the heading `## Totals` followed by one table "
            f"with the columns | {totals} |, one row per provider, ending in a "
            "`| **Grand Total** |` row."
        )
    rules.append(
        "Finish with a `## Notes` section listing one pricing source URL per provider as "
        "plain text, not as a markdown link."
    )
    rules.append("Do not add any other commentary.")

    lines = [
        "Estimate the monthly cost in USD for each of the following providers "
        "based on the given inputs:",
        "",
        build_summary(selections),
        "",
        "Formatting rules:",
    ]
    lines.extend(f"{i}. {rule}" for i, rule in enumerate(rules, 1))
    return "\n".join(lines)
