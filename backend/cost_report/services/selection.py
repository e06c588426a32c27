"""
Selection Validation
Checks a provider + input values pair before it joins the working set
"""

import math

from cost_report.core.exceptions import ValidationError
from cost_report.schemas.report import SelectedProvider


def validate_selection(selection: SelectedProvider) -> SelectedProvider:
    """
    Every schema input must be present and non-empty, and `number` inputs
    must be finite numbers. Raises ValidationError on the first problem.
    """
    provider = selection.provider
    if not provider.inputs:
        raise ValidationError("provider.inputs", "Provider has no inputs")

    missing = [
        field.name
        for field in provider.inputs
        if not selection.inputs.get(field.name, "").strip()
    ]
    if missing:
        raise ValidationError("inputs", f"Missing or empty inputs: {', '.join(missing)}")

    invalid = []
    for field in provider.inputs:
        if not field.is_numeric:
            continue
        try:
            number = float(selection.inputs[field.name].strip())
        except ValueError:
            invalid.append(field.name)
            continue
        if not math.isfinite(number):
            invalid.append(field.name)
    if invalid:
        raise ValidationError("inputs", f"Invalid number inputs: {', '.join(invalid)}")

    return selection
