"""
API v1 Router
Collects all API routes
"""

from fastapi import APIRouter

from cost_report.api.v1.providers import router as providers_router
from cost_report.api.v1.report import router as report_router

api_router = APIRouter()

api_router.include_router(providers_router)
api_router.include_router(report_router)
