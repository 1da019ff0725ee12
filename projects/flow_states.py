"""
Flow states - user-facing workflow labels derived from raw adapter states.

The adapter only knows a handful of contract states. The UI needs finer
labels (who must act next), so they are derived here from the raw state
plus the surrounding data: consultant assignment, coordinator approval,
the consultant's session scope draft and persisted milestones.

Both functions accept model instances or plain mappings, because scope
drafts live in the session as dicts.
"""

from collections.abc import Mapping

from django.db import models
from django.utils.translation import gettext_lazy as _


class ProjectFlow(models.TextChoices):
    CREATION_ERROR = 'CreationError', _('Creation error')
    PROPOSAL_PENDING = 'ProposalPending', _('Proposal pending')
    PROPOSAL_REJECTED = 'ProposalRejected', _('Proposal rejected')
    WAITING_FOR_PROPOSAL_APPROVAL = 'WaitingForProposalApproval', _('Waiting for proposal approval')
    SCOPING_IN_PROGRESS = 'ScopingInProgress', _('Scoping in progress')
    SCOPE_VALIDATION_NEEDED = 'ScopeValidationNeeded', _('Scope validation needed')
    SCOPE_REJECTED = 'ScopeRejected', _('Scope rejected')
    # Label kept as the frontend spells it.
    WAITING_FOR_TEAM_ASSIGNMENT = 'WaitingForTeamAssigment', _('Waiting for team assignment')
    PROJECT_IN_PROGRESS = 'ProjectInProgress', _('Project in progress')
    COMPLETED = 'completed', _('Completed')
    PAYMENT_RELEASED = 'PaymentReleased', _('Payment released')
    INVALID = 'Invalid', _('Invalid')


class MilestoneFlow(models.TextChoices):
    CREATING_MILESTONE = 'CreatingMilestone', _('Creating milestone')
    WAITING_DEVELOPER_ASSIGNATION = 'WaitingDeveloperAssignation', _('Waiting developer assignation')
    MILESTONE_IN_PROGRESS = 'MilestoneInProgress', _('Milestone in progress')
    WAITING_CLIENT_ACCEPT_SUBMISSION = 'WaitingClientAcceptSubmission', _('Waiting client acceptance')
    MILESTONE_COMPLETED = 'MilestoneCompleted', _('Milestone completed')
    SUBMISSION_REJECTED_BY_CLIENT = 'SubmissionRejectedByClient', _('Submission rejected by client')
    # Never derived from a raw state.
    AWAITING_PAYMENT = 'AwaitingPayment', _('Awaiting payment')
    PAID = 'Paid', _('Paid')
    INVALID = 'Invalid', _('Invalid')


# Raw states that map one-to-one onto a project flow state
PROJECT_STATE_FLOWS = {
    'scope_proposed': ProjectFlow.SCOPE_VALIDATION_NEEDED,
    'scope_rejected': ProjectFlow.SCOPE_REJECTED,
    'scope_accepted': ProjectFlow.WAITING_FOR_TEAM_ASSIGNMENT,
    'team_assigned': ProjectFlow.PROJECT_IN_PROGRESS,
    'completed': ProjectFlow.COMPLETED,
    'payment_released': ProjectFlow.PAYMENT_RELEASED,
}

MILESTONE_STATE_FLOWS = {
    'pending': MilestoneFlow.WAITING_DEVELOPER_ASSIGNATION,
    'task_in_progress': MilestoneFlow.MILESTONE_IN_PROGRESS,
    'in_review': MilestoneFlow.WAITING_CLIENT_ACCEPT_SUBMISSION,
    'completed': MilestoneFlow.MILESTONE_COMPLETED,
    'rejected': MilestoneFlow.SUBMISSION_REJECTED_BY_CLIENT,
    'paid': MilestoneFlow.PAID,
}


def _get(obj, name, default=None):
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _has_consultant(project):
    if isinstance(project, Mapping):
        return bool(project.get('consultant_id') or project.get('consultant'))
    return project.consultant_id is not None


def _has_persisted_milestones(project):
    if isinstance(project, Mapping):
        return any(_get(m, 'id') for m in project.get('milestones') or [])
    if project.pk is None:
        return False
    return project.milestones.exists()


def _scope_belongs_to(scope, project):
    if not scope:
        return False
    project_id = _get(project, 'id')
    scope_project_id = _get(scope, 'project_id')
    return scope_project_id is not None and str(scope_project_id) == str(project_id)


def flow_project_state(project, scope=None) -> ProjectFlow:
    """
    Derive the project flow state.

    Args:
        project: Project instance or mapping with the same attribute names
        scope: the consultant's session scope draft ``{project_id, milestones}``

    The first matching rule wins.
    """
    if _get(project, 'creation_error'):
        return ProjectFlow.CREATION_ERROR

    if not _has_consultant(project):
        return ProjectFlow.PROPOSAL_PENDING

    state = _get(project, 'state')

    if state == 'rejected_by_coordinator':
        return ProjectFlow.PROPOSAL_REJECTED

    if state == 'deployed':
        awaiting_approval = (
            not _get(project, 'coordinator_approval_status')
            and not _scope_belongs_to(scope, project)
            and not _has_persisted_milestones(project)
        )
        if awaiting_approval:
            return ProjectFlow.WAITING_FOR_PROPOSAL_APPROVAL
        return ProjectFlow.SCOPING_IN_PROGRESS

    return PROJECT_STATE_FLOWS.get(state, ProjectFlow.INVALID)


def flow_milestone_state(milestone) -> MilestoneFlow:
    """Derive the milestone flow state; a milestone without state is still a draft."""
    state = _get(milestone, 'state')
    if not state:
        return MilestoneFlow.CREATING_MILESTONE
    return MILESTONE_STATE_FLOWS.get(state, MilestoneFlow.INVALID)
