"""
API Exceptions - Custom Exception Classes for the Abako API

This module provides custom exception classes for standardized error handling:
- Resource exceptions (not found, conflicts, invalid workflow state)
- Permission and authentication exceptions
- Identity provider (external service) exceptions
- The global DRF exception handler

All errors follow a consistent envelope:
{
    "success": false,
    "error": true,
    "data": null,
    "message": "Human-readable message",
    "error_code": "MACHINE_READABLE_CODE",
    "errors": [...],
    "meta": {...}
}
"""

import logging
from typing import Any, Dict, List

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


# Fallback machine codes by HTTP status
STATUS_ERROR_CODES = {
    400: 'BAD_REQUEST',
    401: 'UNAUTHORIZED',
    403: 'FORBIDDEN',
    404: 'NOT_FOUND',
    405: 'METHOD_NOT_ALLOWED',
    409: 'CONFLICT',
    415: 'UNSUPPORTED_MEDIA_TYPE',
    422: 'UNPROCESSABLE_ENTITY',
    429: 'TOO_MANY_REQUESTS',
    500: 'INTERNAL_ERROR',
    502: 'BAD_GATEWAY',
}

# DRF / simplejwt default codes that the SPA reacts to by name
DRF_ERROR_CODES = {
    'not_authenticated': 'AUTH_REQUIRED',
    'authentication_failed': 'AUTH_FAILED',
    'token_not_valid': 'SESSION_EXPIRED',
}


# =============================================================================
# BASE EXCEPTIONS
# =============================================================================

class AbakoAPIException(APIException):
    """
    Base exception for all Abako API errors.

    Attributes:
        status_code: HTTP status code
        default_detail: Default error message
        default_code: Machine-readable error code
        error_code: Specific error code for this instance
        extra_data: Additional data to include in response
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = _("An unexpected error occurred.")
    default_code = "ERROR"

    def __init__(
        self,
        detail: str = None,
        code: str = None,
        extra_data: Dict = None,
        **kwargs
    ):
        self.error_code = code or self.default_code
        self.extra_data = extra_data or {}

        if detail is None:
            detail = str(self.default_detail)

        super().__init__(detail=detail, code=code)


# =============================================================================
# RESOURCE EXCEPTIONS
# =============================================================================

class ResourceNotFoundError(AbakoAPIException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = _("The requested resource was not found.")
    default_code = "NOT_FOUND"

    def __init__(self, resource_type: str = None, resource_id: Any = None, **kwargs):
        detail = str(self.default_detail)
        extra_data = kwargs.pop('extra_data', {})

        if resource_type:
            extra_data['resource_type'] = resource_type
            detail = f"{resource_type} not found."

        if resource_id:
            extra_data['resource_id'] = str(resource_id)
            detail = f"{resource_type or 'Resource'} with ID '{resource_id}' not found."

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


class ResourceStateError(AbakoAPIException):
    """Raised when a project or milestone is in the wrong workflow state."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = _("This operation cannot be performed on the resource in its current state.")
    default_code = "INVALID_STATE"

    def __init__(
        self,
        current_state: str = None,
        allowed_states: List[str] = None,
        **kwargs
    ):
        detail = kwargs.pop('detail', None) or str(self.default_detail)
        extra_data = kwargs.pop('extra_data', {})

        if current_state:
            extra_data['current_state'] = str(current_state)
            detail = f"{detail} Current state: '{current_state}'."

        if allowed_states:
            extra_data['allowed_states'] = [str(s) for s in allowed_states]
            detail = f"{detail} Allowed states: {', '.join(extra_data['allowed_states'])}."

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


# =============================================================================
# PERMISSION EXCEPTIONS
# =============================================================================

class PermissionDeniedError(AbakoAPIException):
    """Raised when user doesn't have permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("You do not have permission to perform this action.")
    default_code = "FORBIDDEN"

    def __init__(self, required_role: str = None, **kwargs):
        extra_data = kwargs.pop('extra_data', {})
        if required_role:
            extra_data['required_role'] = required_role
        super().__init__(extra_data=extra_data, **kwargs)


class MissingProfileError(AbakoAPIException):
    """Raised when the user has neither a client nor a developer profile."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("User has no client or developer profile.")
    default_code = "BAD_REQUEST"


# =============================================================================
# VALIDATION EXCEPTIONS
# =============================================================================

class MissingRequiredFieldError(AbakoAPIException):
    """Raised when a required field is missing."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("Required field is missing.")
    default_code = "VALIDATION_ERROR"

    def __init__(self, field_names: List[str] = None, **kwargs):
        detail = str(self.default_detail)
        extra_data = kwargs.pop('extra_data', {})

        if field_names:
            extra_data['fields'] = list(field_names)
            detail = f"Missing required fields: {', '.join(field_names)}."

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


class UnprocessableError(AbakoAPIException):
    """Raised when a well-formed request carries a payload of the wrong shape."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = _("The request payload could not be processed.")
    default_code = "UNPROCESSABLE_ENTITY"


# =============================================================================
# AUTHENTICATION EXCEPTIONS
# =============================================================================

class AuthenticationFailedError(AbakoAPIException):
    """Raised when login cannot match an account."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = _("Authentication failed.")
    default_code = "AUTH_FAILED"


class RegistrationFailedError(AbakoAPIException):
    """Raised when account registration cannot be completed."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("Registration failed.")
    default_code = "REGISTRATION_FAILED"


# =============================================================================
# EXTERNAL SERVICE EXCEPTIONS
# =============================================================================

class ExternalServiceError(AbakoAPIException):
    """Raised when the identity provider or contract adapter fails."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = _("The identity provider is temporarily unavailable.")
    default_code = "IDENTITY_PROVIDER_ERROR"

    def __init__(self, service_name: str = None, **kwargs):
        extra_data = kwargs.pop('extra_data', {})

        if service_name:
            extra_data['service'] = service_name

        super().__init__(extra_data=extra_data, **kwargs)


# =============================================================================
# EXCEPTION HANDLER
# =============================================================================

def _error_code_for(exc, status_code: int) -> str:
    if isinstance(exc, AbakoAPIException):
        return exc.error_code
    if isinstance(exc, ValidationError):
        return "VALIDATION_ERROR"
    codes = exc.get_codes() if hasattr(exc, 'get_codes') else None
    if isinstance(codes, str) and codes in DRF_ERROR_CODES:
        return DRF_ERROR_CODES[codes]
    if isinstance(codes, dict) and codes.get('code') in DRF_ERROR_CODES:
        return DRF_ERROR_CODES[codes['code']]
    return STATUS_ERROR_CODES.get(status_code, 'ERROR')


def _flatten_errors(detail, field=None):
    """Yield ``(field, messages)`` pairs, naming nested errors by dotted path (``votes.1.score``)."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            yield from _flatten_errors(value, f"{field}.{key}" if field else str(key))
    elif isinstance(detail, list):
        if any(isinstance(item, (dict, list)) for item in detail):
            for index, item in enumerate(detail):
                yield from _flatten_errors(item, f"{field}.{index}" if field else str(index))
        elif detail:
            yield field or "non_field_errors", [str(item) for item in detail]
    else:
        yield field or "non_field_errors", [str(detail)]


def abako_exception_handler(exc, context):
    """
    Custom exception handler for standardized error responses.

    All errors are formatted as:
    {
        "success": false,
        "error": true,
        "data": null,
        "message": "Error description",
        "error_code": "MACHINE_CODE",
        "errors": [...],
        "meta": {
            "timestamp": "ISO8601",
            "request_id": "..."
        }
    }
    """
    request = context.get('request')
    request_id = getattr(request, 'request_id', None) if request else None

    # Get the standard DRF response (handles Http404 and Django PermissionDenied too)
    response = exception_handler(exc, context)

    # Handle unhandled exceptions
    if response is None:
        view = context.get('view')
        logger.exception(f"Unhandled exception in {view.__class__.__name__ if view else 'view'}: {exc}")
        meta = {"timestamp": timezone.now().isoformat()}
        if request_id:
            meta["request_id"] = request_id
        return Response(
            {
                "success": False,
                "error": True,
                "data": None,
                "message": "An unexpected error occurred.",
                "error_code": "INTERNAL_ERROR",
                "errors": [],
                "meta": meta,
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    error_data = {
        "success": False,
        "error": True,
        "data": None,
        "message": "",
        "error_code": _error_code_for(exc, response.status_code),
        "errors": [],
        "meta": {
            "timestamp": timezone.now().isoformat(),
        }
    }

    if request_id:
        error_data["meta"]["request_id"] = request_id

    # Handle our custom exceptions
    if isinstance(exc, AbakoAPIException):
        error_data["message"] = str(exc.detail)
        if exc.extra_data:
            error_data["meta"].update(exc.extra_data)

    # Handle DRF ValidationError
    elif isinstance(exc, ValidationError):
        error_data["errors"] = [
            {"field": field, "messages": messages}
            for field, messages in _flatten_errors(exc.detail)
        ]
        first = error_data["errors"][0] if error_data["errors"] else None
        if first and first["field"] == "non_field_errors" and not isinstance(exc.detail, dict):
            error_data["message"] = first["messages"][0]
        else:
            error_data["message"] = "Validation failed."

    elif isinstance(exc, Http404):
        error_data["message"] = "Resource not found."

    elif isinstance(exc, DjangoPermissionDenied):
        error_data["message"] = "You do not have permission to perform this action."

    # Handle other DRF exceptions (simplejwt nests its message under "detail")
    else:
        detail = getattr(exc, 'detail', str(exc))
        if isinstance(detail, dict):
            detail = detail.get('detail', detail)
        error_data["message"] = str(detail)

    if response.status_code >= 500:
        logger.error(f"API error {response.status_code}: {error_data['message']}")
    else:
        logger.info(f"API error {response.status_code} {error_data['error_code']}: {error_data['message']}")

    response.data = error_data
    return response
