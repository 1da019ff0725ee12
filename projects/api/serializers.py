"""
Projects Serializers - DRF serializers for API endpoints.

This module provides serializers for:
- Projects (list, detail, write)
- Milestones, tasks, assignations and milestone history
- Scope drafts kept in the session
- Lifecycle action payloads (reasons, responses, votes)
- Payment summaries
"""

from rest_framework import serializers
from django.utils.translation import gettext_lazy as _

from accounts.api.serializers import ClientSummarySerializer, DeveloperSummarySerializer
from accounts.models import Developer
from catalog.api.serializers import (
    BudgetSerializer,
    DeliveryTimeSerializer,
    ProjectTypeSerializer,
)
from catalog.models import (
    Availability,
    Budget,
    DeliveryTime,
    Proficiency,
    ProjectType,
    Role,
    Skill,
)

from ..flow_states import flow_milestone_state, flow_project_state
from ..models import (
    Assignation,
    Comment,
    Milestone,
    MilestoneLog,
    Project,
    Task,
)
from ..payments import compute_project_payment_summary


# ============================================================================
# MILESTONE SERIALIZERS
# ============================================================================

class TaskSerializer(serializers.ModelSerializer):
    """Serializer for milestone tasks."""

    class Meta:
        model = Task
        fields = [
            'id', 'milestone', 'title', 'description', 'budget', 'currency',
            'delivery_date', 'role', 'display_order', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'milestone', 'created_at', 'updated_at']


class AssignationSerializer(serializers.ModelSerializer):
    developer = DeveloperSummarySerializer(read_only=True)

    class Meta:
        model = Assignation
        fields = ['id', 'developer', 'state', 'comment', 'created_at', 'updated_at']
        read_only_fields = fields


class MilestoneSerializer(serializers.ModelSerializer):
    """Persisted milestone with its derived flow state."""

    project_id = serializers.IntegerField(read_only=True)
    flow_state = serializers.SerializerMethodField()
    developer = DeveloperSummarySerializer(read_only=True)
    skills = serializers.SlugRelatedField(slug_field='name', many=True, read_only=True)
    assignation = serializers.SerializerMethodField()
    tasks = TaskSerializer(many=True, read_only=True)

    class Meta:
        model = Milestone
        fields = [
            'id', 'project_id', 'title', 'description', 'budget',
            'delivery_time', 'delivery_date', 'state', 'flow_state',
            'developer', 'assignation', 'role', 'proficiency', 'skills',
            'availability', 'needed_hours', 'documentation', 'links',
            'paid_at', 'display_order', 'tasks', 'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_flow_state(self, obj):
        return flow_milestone_state(obj).value

    def get_assignation(self, obj):
        assignation = getattr(obj, 'assignation', None)
        if assignation is None:
            return None
        return AssignationSerializer(assignation).data


class MilestoneDraftSerializer(serializers.Serializer):
    """
    Milestone as edited in a scope draft.

    Validated drafts are stored in the session through ``draft``, so every
    value is kept JSON-friendly (ids for catalog entries, names for skills).
    """

    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    budget = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    delivery_time = serializers.PrimaryKeyRelatedField(
        queryset=DeliveryTime.objects.all(), required=False, allow_null=True
    )
    delivery_date = serializers.DateField(required=False, allow_null=True)
    role = serializers.PrimaryKeyRelatedField(
        queryset=Role.objects.all(), required=False, allow_null=True
    )
    proficiency = serializers.PrimaryKeyRelatedField(
        queryset=Proficiency.objects.all(), required=False, allow_null=True
    )
    skills = serializers.SlugRelatedField(
        slug_field='name', many=True, required=False, queryset=Skill.objects.all()
    )
    availability = serializers.ChoiceField(
        choices=Availability.choices, required=False, allow_blank=True
    )
    needed_hours = serializers.IntegerField(min_value=0, required=False, allow_null=True)

    def draft_from(self, validated):
        """Session copy of the submitted fields only (partial edits merge into the draft)."""
        return {
            name: None if value is None else self.fields[name].to_representation(value)
            for name, value in validated.items()
        }

    @property
    def draft(self):
        return self.draft_from(self.validated_data)


class MilestoneLogSerializer(serializers.ModelSerializer):
    author = serializers.SerializerMethodField()

    class Meta:
        model = MilestoneLog
        fields = [
            'id', 'title', 'msg', 'author', 'from_client', 'from_consultant',
            'show_developer', 'created_at',
        ]
        read_only_fields = fields

    def get_author(self, obj):
        if obj.author is None:
            return None
        return {'id': obj.author_id, 'name': obj.author.display_name}


# ============================================================================
# PROJECT SERIALIZERS
# ============================================================================

class CommentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Comment
        fields = ['id', 'consultant_comment', 'client_response', 'created_at', 'updated_at']
        read_only_fields = fields


class ProjectFlowMixin(serializers.Serializer):
    """Flow state computed with the requesting consultant's scope draft."""

    flow_state = serializers.SerializerMethodField()

    def get_flow_state(self, obj):
        return flow_project_state(obj, self.context.get('scope')).value


class ProjectListSerializer(ProjectFlowMixin, serializers.ModelSerializer):
    """Lightweight serializer for project lists."""

    client = ClientSummarySerializer(read_only=True)
    consultant = DeveloperSummarySerializer(read_only=True)
    budget = BudgetSerializer(read_only=True)
    delivery_time = DeliveryTimeSerializer(read_only=True)
    project_type = ProjectTypeSerializer(read_only=True)

    class Meta:
        model = Project
        fields = [
            'id', 'title', 'summary', 'state', 'flow_state', 'creation_status',
            'client', 'consultant', 'budget', 'delivery_time', 'project_type',
            'delivery_date', 'contract_address', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class ProjectDetailSerializer(ProjectListSerializer):
    """Full project with proposal details, milestones and comments."""

    objectives = serializers.SlugRelatedField(slug_field='description', many=True, read_only=True)
    constraints = serializers.SlugRelatedField(slug_field='description', many=True, read_only=True)
    milestones = MilestoneSerializer(many=True, read_only=True)
    comments = CommentSerializer(many=True, read_only=True)

    class Meta(ProjectListSerializer.Meta):
        fields = ProjectListSerializer.Meta.fields + [
            'description', 'url', 'creation_error', 'coordinator_approval_status',
            'proposal_rejection_reason', 'advance_payment_percentage', 'document_hash',
            'objectives', 'constraints', 'milestones', 'comments',
        ]
        read_only_fields = fields


class ProjectWriteSerializer(serializers.ModelSerializer):
    """Proposal fields the client edits."""

    budget = serializers.PrimaryKeyRelatedField(
        queryset=Budget.objects.all(), required=False, allow_null=True
    )
    delivery_time = serializers.PrimaryKeyRelatedField(
        queryset=DeliveryTime.objects.all(), required=False, allow_null=True
    )
    project_type = serializers.PrimaryKeyRelatedField(
        queryset=ProjectType.objects.all(), required=False, allow_null=True
    )
    objectives = serializers.ListField(
        child=serializers.CharField(), required=False
    )
    constraints = serializers.ListField(
        child=serializers.CharField(), required=False
    )

    class Meta:
        model = Project
        fields = [
            'title', 'summary', 'description', 'url', 'budget', 'delivery_time',
            'project_type', 'delivery_date', 'objectives', 'constraints',
        ]


class PaymentProjectSerializer(ProjectListSerializer):
    """Project with its milestones and payment summary."""

    milestones = MilestoneSerializer(many=True, read_only=True)
    payment_summary = serializers.SerializerMethodField()

    class Meta(ProjectListSerializer.Meta):
        fields = ProjectListSerializer.Meta.fields + [
            'advance_payment_percentage', 'milestones', 'payment_summary',
        ]
        read_only_fields = fields

    def get_payment_summary(self, obj):
        return compute_project_payment_summary(obj, obj.advance_payment_percentage).as_dict()


# ============================================================================
# ACTION PAYLOADS
# ============================================================================

class ReasonSerializer(serializers.Serializer):
    reason = serializers.CharField()


class ClientResponseSerializer(serializers.Serializer):
    client_response = serializers.CharField(required=False, allow_blank=True, default='')


class AssignConsultantSerializer(serializers.Serializer):
    consultant_id = serializers.PrimaryKeyRelatedField(queryset=Developer.objects.all())


class AssignDeveloperSerializer(serializers.Serializer):
    developer_id = serializers.PrimaryKeyRelatedField(queryset=Developer.objects.all())
    comment = serializers.CharField(required=False, allow_blank=True, default='')


class CommentInputSerializer(serializers.Serializer):
    comment = serializers.CharField(required=False, allow_blank=True, default='')


class SubmitMilestoneSerializer(serializers.Serializer):
    documentation = serializers.CharField(required=False, allow_blank=True, default='')
    links = serializers.CharField(required=False, allow_blank=True, default='')


class HistoryCommentSerializer(serializers.Serializer):
    msg = serializers.CharField()
    show_developer = serializers.BooleanField(required=False, default=True)


class SubmitScopeSerializer(serializers.Serializer):
    consultant_comment = serializers.CharField(required=False, allow_blank=True, default='')


class SwapSerializer(serializers.Serializer):
    first = serializers.IntegerField(min_value=0)
    second = serializers.IntegerField(min_value=0)


class VoteItemSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    score = serializers.FloatField(min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True, default='')


class ReleasePaymentSerializer(serializers.Serializer):
    ratings = VoteItemSerializer(many=True, required=False)

    def validate_ratings(self, value):
        user_ids = [item['user_id'] for item in value]
        if len(user_ids) != len(set(user_ids)):
            raise serializers.ValidationError(_('Each member can be rated once.'))
        return value
