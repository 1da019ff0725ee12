"""
Projects Models - Client proposals scoped into milestones.

This module defines models for the project lifecycle:
- Project: a client proposal, deployed as an on-chain contract
- Objective / Constraint: ordered proposal details
- Comment: consultant scope comment and the client's answer
- Milestone: a scoped unit of work with budget and developer
- Task: a line item inside a milestone
- Assignation: the offer of a milestone to a developer
- MilestoneLog: audit trail of every milestone transition
- Vote: post-completion ratings between team members

Architecture: ``state`` fields store the raw adapter state; the user-facing
flow state is derived in ``projects.flow_states``.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinLengthValidator, MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from catalog.models import Availability
from core.models import OrderedModel, TimestampedModel


# ============================================================================
# PROJECTS
# ============================================================================

class Project(TimestampedModel):
    """
    A client's project proposal.

    Lifecycle of ``state``:
    draft -> deployed -> scope_proposed -> scope_accepted -> team_assigned
    -> completed -> payment_released, with rejected_by_coordinator and
    scope_rejected as the rework branches.
    """

    class State(models.TextChoices):
        DRAFT = 'draft', _('Draft')
        DEPLOYED = 'deployed', _('Deployed')
        REJECTED_BY_COORDINATOR = 'rejected_by_coordinator', _('Rejected by coordinator')
        SCOPE_PROPOSED = 'scope_proposed', _('Scope proposed')
        SCOPE_REJECTED = 'scope_rejected', _('Scope rejected')
        SCOPE_ACCEPTED = 'scope_accepted', _('Scope accepted')
        TEAM_ASSIGNED = 'team_assigned', _('Team assigned')
        COMPLETED = 'completed', _('Completed')
        PAYMENT_RELEASED = 'payment_released', _('Payment released')

    class CreationStatus(models.TextChoices):
        CREATING = 'creating', _('Creating')
        CREATED = 'created', _('Created')
        FAILED = 'failed', _('Failed')

    APPROVED = 'approved'

    # Participants
    client = models.ForeignKey(
        'accounts.Client',
        on_delete=models.CASCADE,
        related_name='projects'
    )
    consultant = models.ForeignKey(
        'accounts.Developer',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='consulted_projects'
    )

    # Proposal
    title = models.CharField(
        max_length=255,
        validators=[MinLengthValidator(1, _('Title must not be empty.'))]
    )
    summary = models.TextField(blank=True)
    description = models.TextField(blank=True)
    url = models.URLField(blank=True)

    budget = models.ForeignKey(
        'catalog.Budget',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='projects'
    )
    delivery_time = models.ForeignKey(
        'catalog.DeliveryTime',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='projects'
    )
    project_type = models.ForeignKey(
        'catalog.ProjectType',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='projects'
    )
    delivery_date = models.DateField(null=True, blank=True)

    # Workflow
    state = models.CharField(
        max_length=32,
        choices=State.choices,
        default=State.DRAFT,
        db_index=True
    )
    creation_status = models.CharField(
        max_length=16,
        choices=CreationStatus.choices,
        blank=True
    )
    creation_error = models.TextField(blank=True)
    coordinator_approval_status = models.CharField(max_length=16, blank=True)
    proposal_rejection_reason = models.TextField(blank=True)

    # Contract
    advance_payment_percentage = models.PositiveSmallIntegerField(
        default=25,
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    document_hash = models.CharField(max_length=66, blank=True)
    contract_address = models.CharField(max_length=128, blank=True)

    class Meta:
        verbose_name = _('Project')
        verbose_name_plural = _('Projects')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['client', 'state'], name='projects_pr_client__c1a2b3_idx'),
            models.Index(fields=['consultant', 'state'], name='projects_pr_consult_d4e5f6_idx'),
        ]

    def __str__(self):
        return self.title

    @property
    def flow_state(self):
        from .flow_states import flow_project_state
        return flow_project_state(self)

    @property
    def is_deployed(self):
        return bool(self.contract_address)


class Objective(TimestampedModel, OrderedModel):
    """A goal the client lists on the proposal."""

    order_scope = 'project'

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='objectives'
    )
    description = models.TextField(
        validators=[MinLengthValidator(1, _('Description must not be empty.'))]
    )

    class Meta:
        verbose_name = _('Objective')
        verbose_name_plural = _('Objectives')
        ordering = ['display_order', 'id']

    def __str__(self):
        return self.description[:80]


class Constraint(TimestampedModel, OrderedModel):
    """A limitation the client lists on the proposal."""

    order_scope = 'project'

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='constraints'
    )
    description = models.TextField(
        validators=[MinLengthValidator(1, _('Description must not be empty.'))]
    )

    class Meta:
        verbose_name = _('Constraint')
        verbose_name_plural = _('Constraints')
        ordering = ['display_order', 'id']

    def __str__(self):
        return self.description[:80]


class Comment(TimestampedModel):
    """Consultant note sent with a scope proposal and the client's response."""

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='comments'
    )
    consultant_comment = models.TextField(blank=True)
    client_response = models.TextField(blank=True)

    class Meta:
        verbose_name = _('Comment')
        verbose_name_plural = _('Comments')
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"Comment on {self.project_id}"


# ============================================================================
# MILESTONES
# ============================================================================

class Milestone(TimestampedModel, OrderedModel):
    """
    Scoped unit of work within a project.

    ``state`` is empty while the milestone only exists in a scope draft;
    submitted scopes persist milestones as ``pending``.
    """

    class State(models.TextChoices):
        PENDING = 'pending', _('Pending')
        TASK_IN_PROGRESS = 'task_in_progress', _('In progress')
        IN_REVIEW = 'in_review', _('In review')
        COMPLETED = 'completed', _('Completed')
        REJECTED = 'rejected', _('Rejected')
        PAID = 'paid', _('Paid')

    order_scope = 'project'

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='milestones'
    )
    title = models.CharField(
        max_length=255,
        validators=[MinLengthValidator(1, _('Title must not be empty.'))]
    )
    description = models.TextField(blank=True)

    # Budget and timeline
    budget = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)]
    )
    delivery_time = models.ForeignKey(
        'catalog.DeliveryTime',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='milestones'
    )
    delivery_date = models.DateField(null=True, blank=True)

    # Workflow
    state = models.CharField(
        max_length=32,
        choices=State.choices,
        null=True,
        blank=True,
        db_index=True
    )

    # Staffing
    developer = models.ForeignKey(
        'accounts.Developer',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='milestones'
    )
    role = models.ForeignKey(
        'catalog.Role',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='milestones'
    )
    proficiency = models.ForeignKey(
        'catalog.Proficiency',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='milestones'
    )
    skills = models.ManyToManyField(
        'catalog.Skill',
        blank=True,
        related_name='milestones'
    )
    availability = models.CharField(
        max_length=32,
        choices=Availability.choices,
        blank=True
    )
    needed_hours = models.PositiveIntegerField(null=True, blank=True)

    # Delivery
    documentation = models.TextField(blank=True)
    links = models.TextField(blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _('Milestone')
        verbose_name_plural = _('Milestones')
        ordering = ['display_order', 'id']
        indexes = [
            models.Index(fields=['project', 'display_order'], name='projects_mi_project_a7b8c9_idx'),
        ]

    def __str__(self):
        return f"{self.project.title} - {self.title}"

    @property
    def flow_state(self):
        from .flow_states import flow_milestone_state
        return flow_milestone_state(self)

    def mark_paid(self):
        self.state = self.State.PAID
        self.paid_at = timezone.now()
        self.save(update_fields=['state', 'paid_at', 'updated_at'])


class Task(TimestampedModel, OrderedModel):
    """A line item of a milestone."""

    order_scope = 'milestone'

    milestone = models.ForeignKey(
        Milestone,
        on_delete=models.CASCADE,
        related_name='tasks'
    )
    title = models.CharField(
        max_length=255,
        validators=[MinLengthValidator(1, _('Title must not be empty.'))]
    )
    description = models.TextField(blank=True)
    budget = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)]
    )
    currency = models.CharField(max_length=3, default='USD')
    delivery_date = models.DateField(null=True, blank=True)
    role = models.ForeignKey(
        'catalog.Role',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='tasks'
    )

    class Meta:
        verbose_name = _('Task')
        verbose_name_plural = _('Tasks')
        ordering = ['display_order', 'id']

    def __str__(self):
        return self.title


class Assignation(TimestampedModel):
    """Offer of a milestone to a developer, answered by the developer."""

    class State(models.TextChoices):
        NONE = 'none', _('None')
        PENDING = 'pending', _('Pending')
        ACCEPTED = 'accepted', _('Accepted')
        REJECTED = 'rejected', _('Rejected')

    milestone = models.OneToOneField(
        Milestone,
        on_delete=models.CASCADE,
        related_name='assignation'
    )
    developer = models.ForeignKey(
        'accounts.Developer',
        on_delete=models.CASCADE,
        related_name='assignations'
    )
    state = models.CharField(
        max_length=16,
        choices=State.choices,
        default=State.PENDING
    )
    comment = models.TextField(blank=True)

    class Meta:
        verbose_name = _('Assignation')
        verbose_name_plural = _('Assignations')

    def __str__(self):
        return f"{self.developer} -> {self.milestone} ({self.state})"


class MilestoneLog(TimestampedModel):
    """One entry of a milestone's history."""

    milestone = models.ForeignKey(
        Milestone,
        on_delete=models.CASCADE,
        related_name='logs'
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='milestone_logs'
    )
    from_client = models.BooleanField(default=False)
    from_consultant = models.BooleanField(default=False)
    title = models.CharField(max_length=255)
    msg = models.TextField(blank=True)
    show_developer = models.BooleanField(default=True)

    class Meta:
        verbose_name = _('Milestone Log')
        verbose_name_plural = _('Milestone Logs')
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.title


# ============================================================================
# VOTES
# ============================================================================

class Vote(TimestampedModel):
    """Rating of a team member once the project is finished."""

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='votes'
    )
    voter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='votes_cast'
    )
    target = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='votes_received'
    )
    score = models.FloatField(
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    comment = models.TextField(blank=True)

    class Meta:
        verbose_name = _('Vote')
        verbose_name_plural = _('Votes')
        constraints = [
            models.UniqueConstraint(
                fields=['project', 'voter', 'target'],
                name='unique_vote_per_project_voter_target'
            ),
        ]

    def __str__(self):
        return f"{self.voter_id} -> {self.target_id}: {self.score}"
