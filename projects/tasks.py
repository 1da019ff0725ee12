"""
Projects Celery Tasks - contract deployment.

Proposals are deployed as project contracts through the identity provider
adapter outside the request cycle; the adapter call can take several
seconds.
"""

import logging

from celery import shared_task
from django.conf import settings
from django.db import DatabaseError

logger = logging.getLogger(__name__)


def project_payload(project):
    """Proposal fields sent to the adapter when deploying."""
    return {
        'id': project.pk,
        'title': project.title,
        'summary': project.summary,
        'description': project.description,
        'url': project.url,
        'budget': project.budget.description if project.budget else None,
        'deliveryTime': project.delivery_time.description if project.delivery_time else None,
        'projectType': project.project_type.description if project.project_type else None,
        'deliveryDate': project.delivery_date.isoformat() if project.delivery_date else None,
    }


@shared_task(bind=True, max_retries=3)
def deploy_project(self, project_id):
    """
    Deploy a draft project's contract.

    On success the project becomes ``deployed`` with its contract address
    and, when ``ABAKO_DEFAULT_CONSULTANT_ID`` is set, gets the default
    consultant. Adapter failures are stored on the project
    (``creation_error``) rather than retried.

    Args:
        project_id: ID of the Project to deploy

    Retries: 3 times on database errors
    """
    from accounts.models import Developer
    from integrations.providers import IntegrationError, get_identity_provider
    from .models import Project

    try:
        project = Project.objects.select_related(
            'client__user', 'budget', 'delivery_time', 'project_type'
        ).get(pk=project_id)
    except Project.DoesNotExist:
        logger.warning(f"Project {project_id} vanished before deployment")
        return None

    if project.contract_address:
        return project.contract_address

    provider = get_identity_provider()
    client_ref = project.client.user.address or project.client_id

    try:
        result = provider.deploy_project(project_payload(project), client_ref)
    except IntegrationError as e:
        logger.error(f"Deployment of project {project_id} failed: {e}")
        Project.objects.filter(pk=project_id).update(
            creation_status=Project.CreationStatus.FAILED,
            creation_error=str(e) or 'Deployment failed',
        )
        return None

    project.contract_address = result['contract_address']
    project.state = Project.State.DEPLOYED
    project.creation_status = Project.CreationStatus.CREATED
    project.creation_error = ''

    default_consultant_id = getattr(settings, 'ABAKO_DEFAULT_CONSULTANT_ID', None)
    if default_consultant_id and project.consultant_id is None:
        consultant = Developer.objects.filter(pk=default_consultant_id).first()
        if consultant is None:
            logger.warning(f"Default consultant {default_consultant_id} does not exist")
        project.consultant = consultant

    try:
        project.save(update_fields=[
            'contract_address', 'state', 'creation_status', 'creation_error',
            'consultant', 'updated_at',
        ])
    except DatabaseError as exc:
        logger.error(f"Could not store deployment of project {project_id}: {exc}")
        raise self.retry(exc=exc)

    logger.info(f"Project {project_id} deployed at {project.contract_address}")
    return project.contract_address
