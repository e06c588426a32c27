"""
Report API
Selection checks and cost report generation
"""

from fastapi import APIRouter, Depends

from cost_report.api.deps import get_report_generator
from cost_report.schemas.report import (
    ReportRequest,
    ReportResponse,
    SelectedProvider,
    SelectionResponse,
)
from cost_report.services.report.generator import ReportGenerator
from cost_report.services.selection import validate_selection

router = APIRouter(tags=["Report"])


@router.post("/selections", response_model=SelectionResponse)
async def check_selection(selection: SelectedProvider):
    """Validate one provider + inputs pair before it is added to the working set"""
    return SelectionResponse(selection=validate_selection(selection))


@router.post("/report", response_model=ReportResponse)
async def create_report(
    request: ReportRequest,
    generator: ReportGenerator = Depends(get_report_generator),
):
    """
    Generate the cost report for the working set

    Providers are answered from the report cache, then from their pricing
    memo; the rest go to the upstream model in one call. The result is
    sanitized HTML.
    """
    result = await generator.generate(request.providers)
    return ReportResponse(report=result.html)
