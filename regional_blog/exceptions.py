"""
Custom Exception Classes for the Regional Blog API

This module defines custom exceptions for better error handling and
consistent error responses across the application. Every exception
carries a machine-readable ``ErrorCode`` that the front-end can map to
its own localized messages.
"""

import enum
from typing import Any

from fastapi import status


class ErrorCode(str, enum.Enum):
    """Machine-readable error codes returned in every error payload."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    AUTH_PERMISSION_DENIED = "AUTH_PERMISSION_DENIED"

    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    REGION_FORBIDDEN = "REGION_FORBIDDEN"
    ENTITY_UNAVAILABLE = "ENTITY_UNAVAILABLE"
    REGION_MISCONFIGURED = "REGION_MISCONFIGURED"

    VALIDATION_FAILED = "VALIDATION_FAILED"
    VALIDATION_UNKNOWN_LANGUAGE = "VALIDATION_UNKNOWN_LANGUAGE"
    VALIDATION_MISSING_DEFAULT_VARIANT = "VALIDATION_MISSING_DEFAULT_VARIANT"
    VALIDATION_DUPLICATE_RESOURCE = "VALIDATION_DUPLICATE_RESOURCE"
    INVALID_OPERATION = "INVALID_OPERATION"


class CMSError(Exception):
    """Base exception class for all application exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Resource Not Found / Access Exceptions
# ============================================================================


class EntityNotFoundError(CMSError):
    """Raised when a slug does not resolve to any stored entity"""

    def __init__(self, resource_type: str, slug: Any | None = None):
        message = f"{resource_type} not found"
        if slug is not None:
            message = f"{resource_type} '{slug}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=ErrorCode.RESOURCE_NOT_FOUND,
            details={"resource_type": resource_type, "slug": slug},
        )


class RegionNotFoundError(EntityNotFoundError):
    """Raised when a region code is unknown or inactive"""

    def __init__(self, code: str | None = None):
        super().__init__(resource_type="Region", slug=code)


class RegionForbiddenError(CMSError):
    """Raised when an entity is not visible in the requesting region"""

    def __init__(self, resource_type: str, region: str):
        super().__init__(
            message=f"{resource_type} not available in your region",
            status_code=status.HTTP_403_FORBIDDEN,
            error_code=ErrorCode.REGION_FORBIDDEN,
            details={"resource_type": resource_type, "region": region},
        )


# ============================================================================
# Integrity Exceptions
# ============================================================================


class EntityIntegrityError(CMSError):
    """Raised when a stored entity breaks the default-variant invariant"""

    def __init__(self, resource_type: str, base_slug: str, default_language: str):
        super().__init__(
            message=f"{resource_type} is temporarily unavailable",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code=ErrorCode.ENTITY_UNAVAILABLE,
            details={
                "resource_type": resource_type,
                "base_slug": base_slug,
                "default_language": default_language,
            },
        )


class RegionIntegrityError(CMSError):
    """Raised when a region has no languages or a default outside its languages"""

    def __init__(self, code: str, reason: str):
        super().__init__(
            message=f"Region '{code}' is misconfigured: {reason}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code=ErrorCode.REGION_MISCONFIGURED,
            details={"region": code, "reason": reason},
        )


# ============================================================================
# Validation & Business Logic Exceptions
# ============================================================================


class ValidationError(CMSError):
    """Raised when input validation fails"""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_FAILED,
    ):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=error_code,
            details=error_details,
        )


class UnknownLanguageError(ValidationError):
    """Raised when a translation is written under a language outside the registry"""

    def __init__(self, language: str, allowed: list[str]):
        super().__init__(
            message=f"Language '{language}' is not supported",
            field="translations",
            details={"language": language, "allowed_languages": allowed},
            error_code=ErrorCode.VALIDATION_UNKNOWN_LANGUAGE,
        )


class MissingDefaultVariantError(ValidationError):
    """Raised when a write would leave an entity without its default-language variant"""

    def __init__(self, default_language: str):
        super().__init__(
            message=f"A non-empty '{default_language}' translation is required",
            field="translations",
            details={"default_language": default_language},
            error_code=ErrorCode.VALIDATION_MISSING_DEFAULT_VARIANT,
        )


class DuplicateResourceError(CMSError):
    """Raised when attempting to create a duplicate resource"""

    def __init__(self, resource_type: str, field: str, value: Any):
        super().__init__(
            message=f"{resource_type} with {field} '{value}' already exists",
            status_code=status.HTTP_409_CONFLICT,
            error_code=ErrorCode.VALIDATION_DUPLICATE_RESOURCE,
            details={"resource_type": resource_type, "field": field, "value": value},
        )


class InvalidOperationError(CMSError):
    """Raised when an operation is invalid in the current context"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=ErrorCode.INVALID_OPERATION,
            details=details or {},
        )


class AuthorizationError(CMSError):
    """Raised when an editor request lacks a valid API key"""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            error_code=ErrorCode.AUTH_PERMISSION_DENIED,
        )
