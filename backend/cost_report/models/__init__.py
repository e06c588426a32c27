"""
Models module
Export all models
"""

from cost_report.models.provider import Provider

__all__ = [
    "Provider",
]
