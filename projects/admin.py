"""
Projects Admin - Django admin configuration.

Provides admin interface for:
- Projects (with objectives, constraints and comments inline)
- Milestones (with tasks and logs inline)
- Assignations
- Votes
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import (
    Assignation,
    Comment,
    Constraint,
    Milestone,
    MilestoneLog,
    Objective,
    Project,
    Task,
    Vote,
)


# ============================================================================
# PROJECTS
# ============================================================================

class ObjectiveInline(admin.TabularInline):
    model = Objective
    extra = 0
    fields = ['description', 'display_order']


class ConstraintInline(admin.TabularInline):
    model = Constraint
    extra = 0
    fields = ['description', 'display_order']


class CommentInline(admin.StackedInline):
    model = Comment
    extra = 0
    fields = ['consultant_comment', 'client_response']


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """Admin for projects."""

    list_display = ['title', 'client', 'consultant', 'state', 'flow_state_display',
                    'creation_status', 'created_at']
    list_filter = ['state', 'creation_status', 'project_type']
    search_fields = ['title', 'summary', 'client__name', 'consultant__name', 'contract_address']
    raw_id_fields = ['client', 'consultant']
    readonly_fields = ['contract_address', 'document_hash', 'created_at', 'updated_at']
    inlines = [ObjectiveInline, ConstraintInline, CommentInline]

    fieldsets = (
        (_('Proposal'), {
            'fields': ('title', 'summary', 'description', 'url',
                       'budget', 'delivery_time', 'project_type', 'delivery_date')
        }),
        (_('Participants'), {
            'fields': ('client', 'consultant')
        }),
        (_('Workflow'), {
            'fields': ('state', 'creation_status', 'creation_error',
                       'coordinator_approval_status', 'proposal_rejection_reason')
        }),
        (_('Contract'), {
            'fields': ('contract_address', 'advance_payment_percentage', 'document_hash'),
            'classes': ('collapse',)
        }),
        (_('Timestamps'), {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def flow_state_display(self, obj):
        return obj.flow_state.label
    flow_state_display.short_description = _('Flow state')


# ============================================================================
# MILESTONES
# ============================================================================

class TaskInline(admin.TabularInline):
    model = Task
    extra = 0
    fields = ['title', 'budget', 'currency', 'delivery_date', 'role', 'display_order']


class MilestoneLogInline(admin.TabularInline):
    model = MilestoneLog
    extra = 0
    fields = ['title', 'msg', 'author', 'from_client', 'from_consultant', 'show_developer', 'created_at']
    readonly_fields = fields
    can_delete = False


@admin.register(Milestone)
class MilestoneAdmin(admin.ModelAdmin):
    """Admin for milestones."""

    list_display = ['title', 'project', 'state', 'developer', 'budget', 'display_order', 'paid_at']
    list_filter = ['state', 'availability']
    search_fields = ['title', 'project__title', 'developer__name']
    raw_id_fields = ['project', 'developer']
    filter_horizontal = ['skills']
    readonly_fields = ['paid_at', 'created_at', 'updated_at']
    inlines = [TaskInline, MilestoneLogInline]


@admin.register(Assignation)
class AssignationAdmin(admin.ModelAdmin):
    list_display = ['milestone', 'developer', 'state', 'created_at']
    list_filter = ['state']
    raw_id_fields = ['milestone', 'developer']


@admin.register(Vote)
class VoteAdmin(admin.ModelAdmin):
    list_display = ['project', 'voter', 'target', 'score', 'created_at']
    raw_id_fields = ['project', 'voter', 'target']
