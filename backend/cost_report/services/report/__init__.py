"""
Report pipeline
"""

from cost_report.services.report.cache import InMemoryReportCache, ReportCache, cache_key
from cost_report.services.report.generator import ReportGenerator, ReportResult

__all__ = [
    "InMemoryReportCache",
    "ReportCache",
    "ReportGenerator",
    "ReportResult",
    "cache_key",
]
