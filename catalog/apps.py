"""
Catalog App Configuration
"""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    """Reference data used by project and profile forms."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'catalog'
    verbose_name = 'Catalog'
