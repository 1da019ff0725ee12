# Identity provider implementations (mock and hosted adapter)

from django.conf import settings
from django.utils.module_loading import import_string

from .base import (
    AuthenticationError,
    BaseIdentityProvider,
    ConfigurationError,
    IntegrationError,
    RegistrationError,
)

PROVIDERS = {
    'mock': 'integrations.providers.mock.MockIdentityProvider',
    'virto': 'integrations.providers.virto.VirtoIdentityProvider',
}


def get_identity_provider() -> BaseIdentityProvider:
    """Instantiate the provider selected by ``settings.IDENTITY_PROVIDER``."""
    name = getattr(settings, 'IDENTITY_PROVIDER', 'mock')
    try:
        path = PROVIDERS[name]
    except KeyError:
        raise ConfigurationError(f"Unknown identity provider '{name}'")
    return import_string(path)()


__all__ = [
    'AuthenticationError',
    'BaseIdentityProvider',
    'ConfigurationError',
    'IntegrationError',
    'RegistrationError',
    'get_identity_provider',
]
