"""
API Base Classes - Response envelope and pagination for the Abako API

This module provides:
- APIResponse: Standard response format helpers
- StandardPagination: Page-number pagination that emits the envelope
- EnvelopeViewSetMixin: Wraps ModelViewSet responses in the envelope

All API views return the same structure so the SPA's API client can unwrap
``data`` uniformly and branch on ``success``.
"""

from typing import Any, Dict

from django.utils import timezone

from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.request import Request
from rest_framework.response import Response


# =============================================================================
# STANDARD RESPONSE HELPERS
# =============================================================================

class APIResponse:
    """
    Standardized API response format for consistent client handling.

    All responses follow this structure:
    {
        "success": bool,
        "data": {...} | [...],
        "message": str | null,
        "errors": [...] | null,
        "meta": {
            "timestamp": "ISO8601",
            "request_id": str,
            "pagination": {...} | null
        }
    }
    """

    @staticmethod
    def success(
        data: Any = None,
        message: str = None,
        status_code: int = status.HTTP_200_OK,
        meta: Dict = None,
        headers: Dict = None,
        request: Request = None
    ) -> Response:
        """Create a successful response."""
        response_meta = {
            "timestamp": timezone.now().isoformat(),
            **(meta or {})
        }

        # Include request ID if available
        if request and hasattr(request, 'request_id'):
            response_meta["request_id"] = request.request_id

        response_data = {
            "success": True,
            "data": data,
            "message": message,
            "errors": None,
            "meta": response_meta
        }
        return Response(response_data, status=status_code, headers=headers)

    @staticmethod
    def created(
        data: Any = None,
        message: str = "Resource created successfully",
        meta: Dict = None,
        request: Request = None
    ) -> Response:
        """Create a 201 Created response."""
        return APIResponse.success(
            data=data,
            message=message,
            status_code=status.HTTP_201_CREATED,
            meta=meta,
            request=request
        )

    @staticmethod
    def deleted() -> Response:
        """Create a 204 No Content response for deletions."""
        return Response(status=status.HTTP_204_NO_CONTENT)


# =============================================================================
# PAGINATION CLASSES
# =============================================================================

class StandardPagination(PageNumberPagination):
    """
    Standard page-number based pagination with configurable page size.

    Query params:
    - page: Page number (1-indexed)
    - page_size: Items per page (default: 20, max: 100)
    """
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100

    def get_paginated_response(self, data):
        return Response({
            "success": True,
            "data": data,
            "message": None,
            "errors": None,
            "meta": {
                "timestamp": timezone.now().isoformat(),
                "pagination": {
                    "count": self.page.paginator.count,
                    "page": self.page.number,
                    "page_size": self.get_page_size(self.request),
                    "total_pages": self.page.paginator.num_pages,
                    "next": self.get_next_link(),
                    "previous": self.get_previous_link(),
                }
            }
        })


# =============================================================================
# VIEWSET MIXINS
# =============================================================================

class EnvelopeViewSetMixin:
    """
    Wraps the default ModelViewSet handlers in the standard envelope.

    List responses are enveloped by StandardPagination when paginated.
    """

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        serializer = self.get_serializer(queryset, many=True)
        return APIResponse.success(data=serializer.data, request=request)

    def retrieve(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object())
        return APIResponse.success(data=serializer.data, request=request)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        return APIResponse.created(data=serializer.data, request=request)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return APIResponse.success(
            data=serializer.data,
            message="Resource updated successfully",
            request=request
        )

    def destroy(self, request, *args, **kwargs):
        self.perform_destroy(self.get_object())
        return APIResponse.deleted()
