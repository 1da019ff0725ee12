"""
Projects Signal Handlers - contract deployment.

post_save of a new draft Project -> deploy_project task, queued once the
creating transaction commits.
"""

from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Project


@receiver(post_save, sender=Project)
def project_created(sender, instance, created, **kwargs):
    if not created or instance.state != Project.State.DRAFT:
        return

    # Import here to avoid circular imports
    from .tasks import deploy_project

    project_id = instance.pk
    transaction.on_commit(lambda: deploy_project.delay(project_id))
