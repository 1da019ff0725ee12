"""
Accounts API Views - authentication and marketplace profiles.

Provides:
- AuthViewSet: login, register, me, logout, check-registered
- ClientViewSet: client profile retrieve/update and attachment
- DeveloperViewSet: developer directory, profile retrieve/update and attachment
"""

import logging

from django.contrib.auth import login as django_login, logout as django_logout
from django.http import FileResponse
from rest_framework import mixins, permissions, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from django_filters.rest_framework import DjangoFilterBackend

from api.base import APIResponse, EnvelopeViewSetMixin
from api.exceptions import MissingRequiredFieldError, ResourceNotFoundError
from core.permissions import IsProfileOwnerOrReadOnly

from .. import services
from ..models import Attachment, Client, Developer
from .serializers import (
    AttachmentSerializer,
    ClientSerializer,
    DeveloperSerializer,
    LoginSerializer,
    RegisterSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


# ==================== AUTHENTICATION ====================

class AuthViewSet(viewsets.ViewSet):
    """
    Session and token authentication backed by the identity provider.

    The browser runs the WebAuthn ceremony against the provider and then
    posts the outcome here.
    """

    public_actions = ('login', 'register', 'check_registered')

    def get_permissions(self):
        if self.action in self.public_actions:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def _user_payload(self, request, user, role):
        data = UserSerializer(user, context={'request': request}).data
        data['role'] = role
        return data

    @action(detail=False, methods=['post'])
    def login(self, request):
        """
        POST /api/auth/login/

        Body: {"email": ..., "token": ..., "role": "client" | "developer"}

        Returns:
            200: {user, token, refresh}
            400: VALIDATION_ERROR on missing fields
            401: AUTH_FAILED when no account holds the role
        """
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user = services.authenticate_account(email=data['email'], role=data['role'])

        django_login(request, user, backend='django.contrib.auth.backends.ModelBackend')
        request.session['role'] = data['role']
        request.session['identity_token'] = data['token']

        tokens = services.issue_tokens(user, data['role'])
        logger.info(f"User {user.pk} logged in as {data['role']}")

        return APIResponse.success(
            data={
                'user': self._user_payload(request, user, data['role']),
                'token': tokens['access'],
                'refresh': tokens['refresh'],
            },
            message="Login successful",
            request=request
        )

    @action(detail=False, methods=['post'])
    def register(self, request):
        """
        POST /api/auth/register/

        Returns:
            201: {user, address}
            400: REGISTRATION_FAILED
        """
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user = services.register_account(
            email=data['email'],
            name=data['name'],
            role=data['role'],
            prepared_data=data['prepared_data'],
        )

        return APIResponse.created(
            data={
                'user': self._user_payload(request, user, data['role']),
                'address': user.address,
            },
            message="Registration completed",
            request=request
        )

    @action(detail=False, methods=['get'])
    def me(self, request):
        """GET /api/auth/me/"""
        role = services.active_role(request)
        return APIResponse.success(
            data=self._user_payload(request, request.user, role),
            request=request
        )

    @action(detail=False, methods=['post'])
    def logout(self, request):
        """POST /api/auth/logout/ - ends the session; bearer tokens expire on their own."""
        user_id = request.user.pk
        django_logout(request)
        logger.info(f"User {user_id} logged out")
        return APIResponse.success(message="Logged out", request=request)

    @action(detail=False, methods=['get'], url_path=r'check-registered/(?P<user_id>[^/]+)')
    def check_registered(self, request, user_id=None):
        """GET /api/auth/check-registered/<user_id>/"""
        registered = services.check_registered(user_id)
        return APIResponse.success(
            data={'user_id': user_id, 'is_registered': registered},
            request=request
        )


# ==================== PROFILES ====================

class ProfileAttachmentMixin:
    """
    GET/POST ``<profile>/<id>/attachment/``.

    Upload replaces the profile attachment; download streams the file with
    its stored MIME type.
    """

    @action(detail=True, methods=['get', 'post'],
            parser_classes=[MultiPartParser, FormParser, JSONParser])
    def attachment(self, request, pk=None):
        profile = self.get_object()

        if request.method == 'GET':
            if profile.attachment is None:
                raise ResourceNotFoundError(resource_type='Attachment')
            attachment = profile.attachment
            return FileResponse(
                attachment.file.open('rb'),
                content_type=attachment.mime or 'application/octet-stream',
                filename=attachment.original_name or None,
            )

        upload = request.FILES.get('file')
        if upload is None:
            raise MissingRequiredFieldError(field_names=['file'])
        if upload.size > services.max_attachment_size():
            raise ValidationError({'file': [f"File exceeds {services.max_attachment_size()} bytes."]})

        attachment = Attachment.objects.create(
            file=upload,
            original_name=upload.name,
            mime=getattr(upload, 'content_type', '') or '',
            size=upload.size,
            uploaded_by=request.user,
        )
        profile.attachment = attachment
        profile.save(update_fields=['attachment', 'updated_at'])

        return APIResponse.created(
            data=AttachmentSerializer(attachment).data,
            message="Attachment uploaded",
            request=request
        )


class ClientViewSet(EnvelopeViewSetMixin,
                    ProfileAttachmentMixin,
                    mixins.RetrieveModelMixin,
                    mixins.UpdateModelMixin,
                    viewsets.GenericViewSet):
    """
    Client profiles.

    Any authenticated user may read a client profile; only its owner may
    update it.
    """

    queryset = Client.objects.select_related('user', 'attachment').prefetch_related('languages')
    serializer_class = ClientSerializer
    permission_classes = [permissions.IsAuthenticated, IsProfileOwnerOrReadOnly]


class DeveloperViewSet(EnvelopeViewSetMixin,
                       ProfileAttachmentMixin,
                       mixins.ListModelMixin,
                       mixins.RetrieveModelMixin,
                       mixins.UpdateModelMixin,
                       viewsets.GenericViewSet):
    """
    Developer directory and profiles.

    Consultants browse the directory to staff milestones.
    """

    queryset = Developer.objects.select_related(
        'user', 'role', 'proficiency', 'attachment'
    ).prefetch_related('skills', 'languages')
    serializer_class = DeveloperSerializer
    permission_classes = [permissions.IsAuthenticated, IsProfileOwnerOrReadOnly]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['role', 'proficiency', 'is_available_for_hire']
