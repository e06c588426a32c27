"""
Custom Exceptions
Application-level exception types

Concrete exception types instead of string matching, mapped to HTTP
responses in exception_handlers.
"""

from __future__ import annotations

from typing import Any


class CostReportError(Exception):
    """Base application exception"""

    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(message)


# ========== Resources ==========


class ResourceNotFoundError(CostReportError):
    """Resource not found"""

    def __init__(self, resource_type: str, resource_id: str | None = None):
        message = f"{resource_type} not found"
        if resource_id:
            message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id


class ResourceExistsError(CostReportError):
    """Resource already exists"""

    def __init__(self, resource_type: str, identifier: str):
        message = f"{resource_type} with identifier '{identifier}' already exists"
        super().__init__(message)
        self.resource_type = resource_type
        self.identifier = identifier


# ========== External services ==========


class ExternalServiceError(CostReportError):
    """Base class for external service failures"""

    def __init__(self, service: str, message: str, details: Any = None):
        super().__init__(f"{service} error: {message}", details)
        self.service = service


class LLMServiceError(ExternalServiceError):
    """Chat-completion upstream failure"""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
        details: Any = None,
    ):
        super().__init__("LLM", message, details)
        self.provider = provider
        self.status_code = status_code


# ========== Configuration ==========


class ConfigurationError(CostReportError):
    """Configuration error"""

    pass


class MissingConfigError(ConfigurationError):
    """Required configuration is missing"""

    def __init__(self, config_key: str):
        super().__init__(f"Missing required configuration: {config_key}")
        self.config_key = config_key


# ========== Validation ==========


class ValidationError(CostReportError):
    """Validation error"""

    def __init__(self, field: str, message: str):
        super().__init__(f"Validation error for '{field}': {message}")
        self.field = field
