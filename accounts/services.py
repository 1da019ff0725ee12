"""
Accounts Services - registration and login against the identity provider.

Views stay thin: they validate input with serializers and delegate here.
Identity provider failures are translated into API exceptions so the
global handler renders them in the standard envelope.
"""

import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.db import transaction
from rest_framework_simplejwt.tokens import RefreshToken

from api.exceptions import (
    AuthenticationFailedError,
    ExternalServiceError,
    RegistrationFailedError,
)
from integrations.providers import (
    BaseIdentityProvider,
    IntegrationError,
    RegistrationError,
    get_identity_provider,
)

from .models import Client, Developer, User

logger = logging.getLogger(__name__)

ROLE_CLIENT = 'client'
ROLE_DEVELOPER = 'developer'
ROLES = (ROLE_CLIENT, ROLE_DEVELOPER)

PROFILE_MODELS = {
    ROLE_CLIENT: Client,
    ROLE_DEVELOPER: Developer,
}

PROFILE_ATTRS = {
    ROLE_CLIENT: 'client_profile',
    ROLE_DEVELOPER: 'developer_profile',
}


def get_profile(user: User, role: str):
    """Return the user's profile for ``role`` or None."""
    return getattr(user, PROFILE_ATTRS[role], None)


def register_account(
    *,
    email: str,
    name: str,
    role: str,
    prepared_data: Dict[str, Any],
    provider: Optional[BaseIdentityProvider] = None,
) -> User:
    """
    Complete an identity provider registration and create the profile.

    An existing user registering the other role keeps its account and gets
    the second profile.

    Raises:
        RegistrationFailedError: duplicate profile or provider refusal
    """
    email = User.objects.normalize_email(email).lower()
    existing = User.objects.filter(email__iexact=email).first()
    if existing is not None and get_profile(existing, role) is not None:
        raise RegistrationFailedError(f"A {role} account already exists for {email}.")

    provider = provider or get_identity_provider()
    try:
        result = provider.complete_registration(prepared_data)
    except RegistrationError as e:
        logger.warning(f"Identity provider refused registration of {email}: {e}")
        raise RegistrationFailedError(str(e))
    except IntegrationError as e:
        logger.error(f"Identity provider failed during registration of {email}: {e}")
        raise RegistrationFailedError(f"Registration failed: {e}")

    with transaction.atomic():
        user = existing
        if user is None:
            user = User.objects.create_user(email=email, name=name)
            user.set_unusable_password()
        if not user.name:
            user.name = name
        user.address = result.get('address') or user.address
        user.save()

        PROFILE_MODELS[role].objects.create(user=user, name=name)

    logger.info(f"Registered {role} account for {email}")
    return user


def authenticate_account(
    *,
    email: str,
    role: str,
    provider: Optional[BaseIdentityProvider] = None,
) -> User:
    """
    Resolve the account that completed a WebAuthn login.

    Raises:
        AuthenticationFailedError: unknown email, missing profile for the
            role, or credential not registered with the provider
        ExternalServiceError: provider unreachable
    """
    user = User.objects.filter(email__iexact=email, is_active=True).first()
    if user is None or get_profile(user, role) is None:
        logger.info(f"Login failed for {email} as {role}: no matching profile")
        raise AuthenticationFailedError(f"No {role} account found for {email}.")

    provider = provider or get_identity_provider()
    try:
        registered = provider.check_registered(user.email)
    except IntegrationError as e:
        logger.error(f"Identity provider unavailable during login of {email}: {e}")
        raise ExternalServiceError(service_name=provider.provider_name)

    if not registered:
        raise AuthenticationFailedError("Credential is not registered with the identity provider.")

    return user


def issue_tokens(user: User, role: str) -> Dict[str, str]:
    """Issue a JWT pair carrying the active role as a claim."""
    refresh = RefreshToken.for_user(user)
    refresh['role'] = role
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


def check_registered(user_id: str, provider: Optional[BaseIdentityProvider] = None) -> bool:
    provider = provider or get_identity_provider()
    try:
        return provider.check_registered(user_id)
    except IntegrationError as e:
        logger.error(f"Identity provider unavailable for check_registered({user_id}): {e}")
        raise ExternalServiceError(service_name=provider.provider_name)


def max_attachment_size() -> int:
    return getattr(settings, 'ABAKO_MAX_ATTACHMENT_SIZE', 5 * 1024 * 1024)


def active_role(request) -> Optional[str]:
    """
    Role the request acts with.

    Bearer tokens carry it as a claim; session logins keep it in the
    session. Without either the first profile the user holds wins.
    """
    token = getattr(request, 'auth', None)
    role = token.get('role') if token is not None and hasattr(token, 'get') else None
    if role is None and hasattr(request, 'session'):
        role = request.session.get('role')
    if role in ROLES:
        return role

    user = request.user
    for candidate in ROLES:
        if get_profile(user, candidate) is not None:
            return candidate
    return None
