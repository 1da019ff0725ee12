"""
Projects app configuration.

This app manages client proposals from deployment through scoping,
milestone delivery, votes and payment release.
"""

from django.apps import AppConfig


class ProjectsConfig(AppConfig):
    """Configuration for the projects app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'projects'
    verbose_name = 'Projects'

    def ready(self):
        """Import signal handlers when app is ready."""
        import projects.signals  # noqa: F401
