"""
Projects Services - the project and milestone lifecycle.

Every operation checks who is acting and the derived flow state before it
touches the database, then records the transition (milestone operations
append a MilestoneLog entry) and mirrors it on the project contract
through the identity provider adapter.

Raises (all rendered by the API exception handler):
- PermissionDeniedError: the user plays the wrong part on the project
- ResourceStateError: the project or milestone is in the wrong state
- ExternalServiceError: the adapter call failed
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Q
from django.utils.dateparse import parse_date
from rest_framework.exceptions import ValidationError

from accounts.models import Developer
from api.exceptions import (
    ExternalServiceError,
    PermissionDeniedError,
    ResourceNotFoundError,
    ResourceStateError,
)
from catalog.models import Skill
from core.permissions import (
    check_permission,
    is_dao,
    is_milestone_developer,
    is_project_client,
    is_project_consultant,
)
from integrations.providers import IntegrationError, get_identity_provider

from .flow_states import ProjectFlow, flow_project_state
from .models import (
    Assignation,
    Comment,
    Constraint,
    Milestone,
    MilestoneLog,
    Objective,
    Project,
    Vote,
)
from .payments import parse_budget

logger = logging.getLogger(__name__)

PROPOSAL_EDITABLE_FLOWS = (
    ProjectFlow.PROPOSAL_PENDING,
    ProjectFlow.WAITING_FOR_PROPOSAL_APPROVAL,
    ProjectFlow.PROPOSAL_REJECTED,
)

SCOPING_FLOWS = (
    ProjectFlow.SCOPING_IN_PROGRESS,
    ProjectFlow.SCOPE_REJECTED,
)

PROJECT_FIELDS = (
    'title', 'summary', 'description', 'url',
    'budget', 'delivery_time', 'project_type', 'delivery_date',
)


# ============================================================================
# GUARDS
# ============================================================================

def require(allowed: bool, role: str):
    if not allowed:
        raise PermissionDeniedError(required_role=role)


def require_flow(project: Project, allowed: Iterable[str], scope=None) -> ProjectFlow:
    flow = flow_project_state(project, scope)
    allowed = list(allowed)
    if flow not in allowed:
        raise ResourceStateError(current_state=flow, allowed_states=allowed)
    return flow


def require_project_state(project: Project, allowed: Iterable[str]):
    allowed = list(allowed)
    if project.state not in allowed:
        raise ResourceStateError(current_state=project.state, allowed_states=allowed)


def require_milestone_state(milestone: Milestone, allowed: Iterable[str]):
    allowed = list(allowed)
    if milestone.state not in allowed:
        raise ResourceStateError(current_state=milestone.state or 'draft', allowed_states=allowed)


def call_adapter(method: str, project: Project, *args):
    """
    Mirror a transition on the project contract.

    Projects without a deployed contract have nothing to mirror.
    """
    if not project.contract_address:
        logger.debug(f"Project {project.pk} has no contract; skipping {method}")
        return None
    provider = get_identity_provider()
    try:
        return getattr(provider, method)(project.contract_address, *args)
    except IntegrationError as e:
        logger.error(f"Adapter {method} failed for project {project.pk}: {e}")
        raise ExternalServiceError(service_name=provider.provider_name, detail=str(e))


def log_milestone(milestone: Milestone, title: str, user=None, msg: str = '',
                  show_developer: bool = True) -> MilestoneLog:
    project = milestone.project
    return MilestoneLog.objects.create(
        milestone=milestone,
        author=user,
        from_client=bool(user) and is_project_client(user, project),
        from_consultant=bool(user) and is_project_consultant(user, project),
        title=title,
        msg=msg or '',
        show_developer=show_developer,
    )


# ============================================================================
# VISIBILITY
# ============================================================================

def visible_projects(user):
    """Projects the user takes part in; staff see everything."""
    queryset = Project.objects.select_related(
        'client__user', 'consultant__user', 'budget', 'delivery_time', 'project_type'
    )
    if is_dao(user):
        return queryset
    return queryset.filter(
        Q(client__user=user)
        | Q(consultant__user=user)
        | Q(milestones__developer__user=user)
    ).distinct()


def project_team(project: Project) -> List[Developer]:
    """Consultant first, then milestone developers in milestone order."""
    team = []
    if project.consultant is not None:
        team.append(project.consultant)
    for milestone in project.milestones.select_related('developer__user', 'developer__role'):
        if milestone.developer is not None and milestone.developer not in team:
            team.append(milestone.developer)
    return team


# ============================================================================
# PROPOSALS
# ============================================================================

def _set_items(project: Project, model, descriptions: Optional[List[str]]):
    if descriptions is None:
        return
    model.objects.filter(project=project).delete()
    for order, description in enumerate(descriptions):
        model.objects.create(project=project, description=description, display_order=order)


@transaction.atomic
def create_project(client, data: Dict[str, Any]) -> Project:
    """
    Create a proposal for ``client``.

    The project starts as ``draft``/``creating``; deployment runs in the
    background once the transaction commits (see ``projects.signals``).
    """
    project = Project.objects.create(
        client=client,
        state=Project.State.DRAFT,
        creation_status=Project.CreationStatus.CREATING,
        **{field: data[field] for field in PROJECT_FIELDS if field in data},
    )
    _set_items(project, Objective, data.get('objectives'))
    _set_items(project, Constraint, data.get('constraints'))
    logger.info(f"Client {client.pk} created project {project.pk}")
    return project


@transaction.atomic
def update_project(project: Project, user, data: Dict[str, Any]) -> Project:
    """Edit a proposal; editing a rejected proposal resubmits it."""
    require(is_project_client(user, project), 'project_client')
    require_flow(project, PROPOSAL_EDITABLE_FLOWS)

    for field in PROJECT_FIELDS:
        if field in data:
            setattr(project, field, data[field])

    if project.state == Project.State.REJECTED_BY_COORDINATOR:
        project.state = Project.State.DEPLOYED
        project.coordinator_approval_status = ''
        project.proposal_rejection_reason = ''

    project.full_clean(exclude=['client', 'consultant'])
    project.save()
    _set_items(project, Objective, data.get('objectives'))
    _set_items(project, Constraint, data.get('constraints'))
    return project


def redeploy_project(project: Project, user) -> Project:
    """Retry a failed contract deployment."""
    require(is_project_client(user, project) or is_dao(user), 'project_client')
    require_flow(project, [ProjectFlow.CREATION_ERROR])

    project.creation_error = ''
    project.creation_status = Project.CreationStatus.CREATING
    project.save(update_fields=['creation_error', 'creation_status', 'updated_at'])

    from .tasks import deploy_project
    transaction.on_commit(lambda: deploy_project.delay(project.pk))
    return project


def assign_consultant(project: Project, user, developer: Developer) -> Project:
    require(is_dao(user), 'dao')
    require_flow(project, [ProjectFlow.PROPOSAL_PENDING, ProjectFlow.WAITING_FOR_PROPOSAL_APPROVAL])

    project.consultant = developer
    project.save(update_fields=['consultant', 'updated_at'])
    logger.info(f"Developer {developer.pk} assigned as consultant of project {project.pk}")
    return project


def approve_proposal(project: Project, user, session) -> Project:
    """Consultant takes the proposal on and starts a fresh scope draft."""
    require(is_project_consultant(user, project), 'project_consultant')
    require_flow(project, [ProjectFlow.WAITING_FOR_PROPOSAL_APPROVAL], ScopeDraft(session).raw())

    project.coordinator_approval_status = Project.APPROVED
    project.save(update_fields=['coordinator_approval_status', 'updated_at'])
    ScopeDraft(session).start(project)
    return project


def reject_proposal(project: Project, user, reason: str, session=None) -> Project:
    require(is_project_consultant(user, project), 'project_consultant')
    scope = ScopeDraft(session).raw() if session is not None else None
    require_flow(project, [ProjectFlow.WAITING_FOR_PROPOSAL_APPROVAL], scope)

    project.state = Project.State.REJECTED_BY_COORDINATOR
    project.proposal_rejection_reason = reason
    project.save(update_fields=['state', 'proposal_rejection_reason', 'updated_at'])
    return project


# ============================================================================
# SCOPE DRAFT
# ============================================================================

class ScopeDraft:
    """
    The consultant's in-progress scope, kept in the session as
    ``{"project_id": ..., "milestones": [...]}``.

    Only one project can be scoped per session; touching another project
    starts over.
    """

    session_key = 'scope'

    def __init__(self, session):
        self.session = session

    def raw(self):
        return self.session.get(self.session_key)

    def start(self, project: Project, milestones: Optional[List[Dict]] = None):
        scope = {'project_id': project.pk, 'milestones': list(milestones or [])}
        self.session[self.session_key] = scope
        self.session.modified = True
        return scope

    def get(self, project: Project) -> Dict[str, Any]:
        scope = self.raw()
        if not scope or str(scope.get('project_id')) != str(project.pk):
            return {'project_id': project.pk, 'milestones': []}
        return scope

    def _save(self, scope):
        self.session[self.session_key] = scope
        self.session.modified = True
        return scope

    def _milestone_index(self, scope, index: int) -> int:
        if not 0 <= index < len(scope['milestones']):
            raise ResourceNotFoundError(resource_type='Scope milestone', resource_id=str(index))
        return index

    def add(self, project: Project, milestone: Dict[str, Any]):
        scope = self.get(project)
        scope['milestones'].append(milestone)
        return self._save(scope)

    def update(self, project: Project, index: int, milestone: Dict[str, Any], replace: bool = False):
        """Merge ``milestone`` into the draft at ``index``, or swap it in whole with ``replace``."""
        scope = self.get(project)
        index = self._milestone_index(scope, index)
        if replace:
            scope['milestones'][index] = milestone
        else:
            scope['milestones'][index] = {**scope['milestones'][index], **milestone}
        return self._save(scope)

    def delete(self, project: Project, index: int):
        scope = self.get(project)
        index = self._milestone_index(scope, index)
        del scope['milestones'][index]
        return self._save(scope)

    def swap(self, project: Project, first: int, second: int):
        scope = self.get(project)
        first = self._milestone_index(scope, first)
        second = self._milestone_index(scope, second)
        items = scope['milestones']
        items[first], items[second] = items[second], items[first]
        return self._save(scope)

    def clear(self):
        if self.session_key in self.session:
            del self.session[self.session_key]
            self.session.modified = True


def require_scoping(project: Project, user, session):
    require(is_project_consultant(user, project), 'project_consultant')
    require_flow(project, SCOPING_FLOWS, ScopeDraft(session).raw())


def _milestone_from_draft(project: Project, draft: Dict[str, Any]) -> Milestone:
    budget = draft.get('budget')
    delivery_date = draft.get('delivery_date')
    milestone = Milestone.objects.create(
        project=project,
        title=draft['title'],
        description=draft.get('description') or '',
        budget=parse_budget(budget) if budget not in (None, '') else None,
        delivery_time_id=draft.get('delivery_time'),
        delivery_date=parse_date(delivery_date) if isinstance(delivery_date, str) else delivery_date,
        role_id=draft.get('role'),
        proficiency_id=draft.get('proficiency'),
        availability=draft.get('availability') or '',
        needed_hours=draft.get('needed_hours'),
        state=Milestone.State.PENDING,
    )
    skills = draft.get('skills') or []
    if skills:
        milestone.skills.set(Skill.objects.filter(name__in=skills))
    return milestone


def submit_scope(project: Project, user, session, milestones: Optional[List[Dict]] = None,
                 consultant_comment: str = '') -> Project:
    """
    Turn the scope draft into pending milestones and propose it to the client.

    Milestones come from the request body when given, else from the
    session draft. Milestones from a previous (rejected) proposal that no
    developer has started are replaced.
    """
    require_scoping(project, user, session)

    draft = ScopeDraft(session)
    if milestones is None:
        milestones = draft.get(project)['milestones']
    if not milestones:
        raise ValidationError({'milestones': ['At least one milestone is required.']})

    with transaction.atomic():
        project.milestones.filter(
            Q(state__isnull=True) | Q(state='') | Q(state=Milestone.State.PENDING)
        ).delete()

        created = [_milestone_from_draft(project, item) for item in milestones]
        for milestone in created:
            log_milestone(milestone, 'Milestone scoped', user=user)

        project.state = Project.State.SCOPE_PROPOSED
        project.advance_payment_percentage = settings.ABAKO_ADVANCE_PAYMENT_PERCENTAGE
        project.document_hash = settings.ABAKO_SCOPE_DOCUMENT_HASH
        project.save(update_fields=['state', 'advance_payment_percentage', 'document_hash', 'updated_at'])

        Comment.objects.create(project=project, consultant_comment=consultant_comment or '')

        tasks = [
            {
                'id': milestone.pk,
                'title': milestone.title,
                'budget': str(milestone.budget) if milestone.budget is not None else None,
            }
            for milestone in created
        ]
        call_adapter('propose_scope', project, tasks,
                     project.advance_payment_percentage, project.document_hash)

    draft.clear()
    logger.info(f"Scope with {len(created)} milestones proposed for project {project.pk}")
    return project


def _answer_latest_comment(project: Project, response: str):
    comment = project.comments.order_by('-created_at', '-id').first()
    if comment is not None:
        comment.client_response = response or ''
        comment.save(update_fields=['client_response', 'updated_at'])


@transaction.atomic
def accept_scope(project: Project, user, client_response: str = '') -> Project:
    require(is_project_client(user, project), 'project_client')
    require_flow(project, [ProjectFlow.SCOPE_VALIDATION_NEEDED])

    project.state = Project.State.SCOPE_ACCEPTED
    project.save(update_fields=['state', 'updated_at'])
    _answer_latest_comment(project, client_response)
    call_adapter('approve_scope', project, list(project.milestones.values_list('pk', flat=True)))
    return project


@transaction.atomic
def reject_scope(project: Project, user, client_response: str = '') -> Project:
    require(is_project_client(user, project), 'project_client')
    require_flow(project, [ProjectFlow.SCOPE_VALIDATION_NEEDED])

    project.state = Project.State.SCOPE_REJECTED
    project.save(update_fields=['state', 'updated_at'])
    _answer_latest_comment(project, client_response)
    call_adapter('reject_scope', project, client_response or '')
    return project


# ============================================================================
# TEAM
# ============================================================================

@transaction.atomic
def assign_developer(milestone: Milestone, user, developer: Developer, comment: str = '') -> Milestone:
    """Offer a pending milestone to a developer."""
    project = milestone.project
    require(is_project_consultant(user, project), 'project_consultant')
    require_project_state(project, [Project.State.SCOPE_ACCEPTED, Project.State.TEAM_ASSIGNED])
    require_milestone_state(milestone, [Milestone.State.PENDING])

    Assignation.objects.update_or_create(
        milestone=milestone,
        defaults={
            'developer': developer,
            'state': Assignation.State.PENDING,
            'comment': comment or '',
        },
    )
    milestone.developer = developer
    milestone.save(update_fields=['developer', 'updated_at'])
    log_milestone(milestone, f"Milestone offered to {developer.name}", user=user, msg=comment)
    return milestone


def _pending_assignation(milestone: Milestone):
    assignation = Assignation.objects.filter(milestone=milestone).first()
    if assignation is None or assignation.state != Assignation.State.PENDING:
        raise ResourceStateError(
            current_state=assignation.state if assignation else Assignation.State.NONE,
            allowed_states=[Assignation.State.PENDING],
        )
    return assignation


@transaction.atomic
def accept_assignment(milestone: Milestone, user) -> Milestone:
    require(is_milestone_developer(user, milestone), 'milestone_developer')
    require_milestone_state(milestone, [Milestone.State.PENDING])
    assignation = _pending_assignation(milestone)

    assignation.state = assignation.State.ACCEPTED
    assignation.save(update_fields=['state', 'updated_at'])
    milestone.state = Milestone.State.TASK_IN_PROGRESS
    milestone.save(update_fields=['state', 'updated_at'])
    log_milestone(milestone, 'Developer accepted the milestone', user=user)
    return milestone


@transaction.atomic
def reject_assignment(milestone: Milestone, user, comment: str = '') -> Milestone:
    require(is_milestone_developer(user, milestone), 'milestone_developer')
    require_milestone_state(milestone, [Milestone.State.PENDING])
    assignation = _pending_assignation(milestone)

    assignation.state = assignation.State.REJECTED
    assignation.comment = comment or assignation.comment
    assignation.save(update_fields=['state', 'comment', 'updated_at'])
    milestone.developer = None
    milestone.save(update_fields=['developer', 'updated_at'])
    log_milestone(milestone, 'Developer declined the milestone', user=user, msg=comment)
    return milestone


def assign_team(project: Project, user) -> Project:
    require(is_project_consultant(user, project), 'project_consultant')
    require_flow(project, [ProjectFlow.WAITING_FOR_TEAM_ASSIGNMENT])

    unstaffed = project.milestones.filter(developer__isnull=True)
    if unstaffed.exists():
        raise ResourceStateError(
            detail=f"{unstaffed.count()} milestone(s) have no developer assigned."
        )

    project.state = Project.State.TEAM_ASSIGNED
    project.save(update_fields=['state', 'updated_at'])
    logger.info(f"Team assigned for project {project.pk}")
    return project


# ============================================================================
# MILESTONE DELIVERY
# ============================================================================

@transaction.atomic
def submit_milestone(milestone: Milestone, user, documentation: str = '', links: str = '') -> Milestone:
    allowed = check_permission(
        user,
        project_consultant=milestone.project,
        milestone_developer=milestone,
    )
    require(allowed, 'milestone_developer')
    require_milestone_state(milestone, [Milestone.State.TASK_IN_PROGRESS, Milestone.State.REJECTED])

    milestone.state = Milestone.State.IN_REVIEW
    milestone.documentation = documentation or milestone.documentation
    milestone.links = links or milestone.links
    milestone.save(update_fields=['state', 'documentation', 'links', 'updated_at'])
    log_milestone(milestone, 'Milestone submitted for review', user=user, msg=documentation)
    return milestone


@transaction.atomic
def accept_submission(milestone: Milestone, user, comment: str = '') -> Milestone:
    project = milestone.project
    require(is_project_client(user, project), 'project_client')
    require_milestone_state(milestone, [Milestone.State.IN_REVIEW])

    milestone.state = Milestone.State.COMPLETED
    milestone.save(update_fields=['state', 'updated_at'])
    log_milestone(milestone, 'Client accepted the submission', user=user, msg=comment)
    call_adapter('complete_task', project, milestone.pk)
    return milestone


@transaction.atomic
def reject_submission(milestone: Milestone, user, comment: str = '') -> Milestone:
    require(is_project_client(user, milestone.project), 'project_client')
    require_milestone_state(milestone, [Milestone.State.IN_REVIEW])

    milestone.state = Milestone.State.REJECTED
    milestone.save(update_fields=['state', 'updated_at'])
    log_milestone(milestone, 'Client rejected the submission', user=user, msg=comment)
    return milestone


@transaction.atomic
def rollback_rejection(milestone: Milestone, user) -> Milestone:
    """Client withdraws a rejection; the submission goes back to review."""
    require(is_project_client(user, milestone.project), 'project_client')
    require_milestone_state(milestone, [Milestone.State.REJECTED])

    milestone.state = Milestone.State.IN_REVIEW
    milestone.save(update_fields=['state', 'updated_at'])
    log_milestone(milestone, 'Client withdrew the rejection', user=user)
    return milestone


@transaction.atomic
def pay_milestone(milestone: Milestone, user) -> Milestone:
    require(is_dao(user), 'dao')
    require_milestone_state(milestone, [Milestone.State.COMPLETED])

    milestone.mark_paid()
    log_milestone(milestone, 'Milestone paid', user=user)
    return milestone


def add_history_comment(milestone: Milestone, user, msg: str, show_developer: bool = True) -> MilestoneLog:
    project = milestone.project
    require(check_permission(user, project_client=project, project_consultant=project),
            'project_client')
    return log_milestone(milestone, 'Comment', user=user, msg=msg, show_developer=show_developer)


# ============================================================================
# CLOSING
# ============================================================================

def _record_votes(project: Project, voter, votes: List[Dict[str, Any]]) -> List[Vote]:
    members = {developer.user_id for developer in project_team(project)}
    members.add(project.client.user_id)

    recorded = []
    for item in votes:
        target_id = int(item['user_id'])
        if target_id not in members:
            raise ValidationError({'votes': [f"User {target_id} is not a member of this project."]})
        record, _ = Vote.objects.update_or_create(
            project=project,
            voter=voter,
            target_id=target_id,
            defaults={'score': float(item['score']), 'comment': item.get('comment') or ''},
        )
        recorded.append(record)
    return recorded


def _require_finished_milestones(project: Project, action: str):
    unfinished = project.milestones.exclude(
        state__in=[Milestone.State.COMPLETED, Milestone.State.PAID]
    )
    if unfinished.exists():
        raise ResourceStateError(detail=f"Every milestone must be completed before {action}.")


@transaction.atomic
def vote(project: Project, user, votes: List[Dict[str, Any]]) -> Project:
    """Consultant rates the team once every milestone is done; closes the project."""
    require(is_project_consultant(user, project), 'project_consultant')
    require_flow(project, [ProjectFlow.PROJECT_IN_PROGRESS])
    _require_finished_milestones(project, 'voting')

    recorded = _record_votes(project, user, votes)

    project.state = Project.State.COMPLETED
    project.save(update_fields=['state', 'updated_at'])
    call_adapter('mark_completed', project, [[v.target_id, v.score] for v in recorded])
    logger.info(f"Project {project.pk} completed with {len(recorded)} votes")
    return project


@transaction.atomic
def release_payment(project: Project, user, ratings: Optional[List[Dict[str, Any]]] = None) -> Project:
    """
    Pay every completed milestone and close the project's books.

    A project still in progress is closed on the contract here, so all of
    its milestones must be finished first.
    """
    require(check_permission(user, project_client=project) or is_dao(user), 'project_client')
    require_project_state(project, [Project.State.COMPLETED, Project.State.TEAM_ASSIGNED])
    closing = project.state == Project.State.TEAM_ASSIGNED
    if closing:
        _require_finished_milestones(project, 'releasing payment')

    recorded = _record_votes(project, user, ratings) if ratings else []

    for milestone in project.milestones.filter(state=Milestone.State.COMPLETED):
        milestone.mark_paid()
        log_milestone(milestone, 'Payment released', user=user)

    project.state = Project.State.PAYMENT_RELEASED
    project.save(update_fields=['state', 'updated_at'])
    if closing:
        call_adapter('mark_completed', project, [[v.target_id, v.score] for v in recorded])
    logger.info(f"Payment released for project {project.pk}")
    return project
