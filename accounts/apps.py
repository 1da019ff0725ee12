"""
Accounts App Configuration
"""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """Users, client/developer profiles and authentication endpoints."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'accounts'
    verbose_name = 'Accounts'
