"""
Projects API Views - REST API endpoints.

This module provides REST API views using Django Rest Framework:
- ProjectViewSet: proposals, scoping and team assignment
- MilestoneViewSet: milestone delivery and history
- TaskViewSet: tasks nested under a milestone
- PaymentViewSet: payment summaries and release
- VoteView: team ratings that close a project
- DashboardView: the user's projects grouped by flow state

Business rules live in ``projects.services``; views validate payloads,
call the service and wrap the result in the response envelope.
"""

import logging
from collections import Counter

from django.conf import settings
from django.urls import reverse
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.views import APIView

from accounts.api.serializers import UserSerializer
from accounts.services import active_role
from api.base import APIResponse, EnvelopeViewSetMixin
from api.exceptions import (
    PermissionDeniedError,
    ResourceNotFoundError,
    UnprocessableError,
)
from catalog.api.serializers import (
    BudgetSerializer,
    DeliveryTimeSerializer,
    ProjectTypeSerializer,
)
from catalog.models import Budget, DeliveryTime, ProjectType
from core.permissions import (
    HasMarketplaceProfile,
    IsClient,
    IsProjectParticipant,
    check_permission,
    is_dao,
    is_project_consultant,
)

from .. import services
from ..flow_states import MilestoneFlow, ProjectFlow, flow_project_state
from ..models import Milestone, Project, Task
from .serializers import (
    AssignConsultantSerializer,
    AssignDeveloperSerializer,
    ClientResponseSerializer,
    CommentInputSerializer,
    HistoryCommentSerializer,
    MilestoneDraftSerializer,
    MilestoneLogSerializer,
    MilestoneSerializer,
    PaymentProjectSerializer,
    ProjectDetailSerializer,
    ProjectListSerializer,
    ProjectWriteSerializer,
    ReasonSerializer,
    ReleasePaymentSerializer,
    SubmitMilestoneSerializer,
    SubmitScopeSerializer,
    SwapSerializer,
    TaskSerializer,
    VoteItemSerializer,
)

logger = logging.getLogger(__name__)


def scope_context(request):
    return {'request': request, 'scope': services.ScopeDraft(request.session).raw()}


def get_visible_project(request, project_id) -> Project:
    project = services.visible_projects(request.user).filter(pk=project_id).first()
    if project is None:
        raise ResourceNotFoundError(resource_type='Project', resource_id=project_id)
    return project


# ============================================================================
# PROJECT VIEWSET
# ============================================================================

class ProjectViewSet(EnvelopeViewSetMixin,
                     mixins.ListModelMixin,
                     mixins.RetrieveModelMixin,
                     mixins.CreateModelMixin,
                     mixins.UpdateModelMixin,
                     viewsets.GenericViewSet):
    """
    ViewSet for projects.

    Provides:
    - list: GET /api/projects/ (projects the user takes part in, newest first)
    - create: POST /api/projects/ (clients only)
    - retrieve: GET /api/projects/{id}/
    - update: PUT/PATCH /api/projects/{id}/
    - redeploy, assign-consultant, approve, reject
    - scope, scope/milestones, scope/milestones/{index}, scope/swap
    - submit-scope, accept-scope, reject-scope, assign-team
    """

    permission_classes = [permissions.IsAuthenticated, IsProjectParticipant]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['state', 'project_type', 'budget']

    def get_queryset(self):
        return services.visible_projects(self.request.user).prefetch_related(
            'objectives', 'constraints', 'comments',
            'milestones__developer__user', 'milestones__skills', 'milestones__tasks',
        ).order_by('-created_at')

    def get_serializer_class(self):
        if self.action == 'list':
            return ProjectListSerializer
        if self.action in ('create', 'update', 'partial_update'):
            return ProjectWriteSerializer
        return ProjectDetailSerializer

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['scope'] = services.ScopeDraft(self.request.session).raw()
        return context

    def get_permissions(self):
        if self.action == 'create':
            return [permissions.IsAuthenticated(), IsClient()]
        return super().get_permissions()

    def _project_response(self, project, message=None, status_code=status.HTTP_200_OK):
        project = self.get_queryset().get(pk=project.pk)
        return APIResponse.success(
            data=ProjectDetailSerializer(project, context=scope_context(self.request)).data,
            message=message,
            status_code=status_code,
            request=self.request
        )

    def retrieve(self, request, *args, **kwargs):
        project = self.get_object()
        return APIResponse.success(
            data={
                'project': ProjectDetailSerializer(project, context=scope_context(request)).data,
                'all_budgets': BudgetSerializer(Budget.objects.all(), many=True).data,
                'all_delivery_times': DeliveryTimeSerializer(DeliveryTime.objects.all(), many=True).data,
                'all_project_types': ProjectTypeSerializer(ProjectType.objects.all(), many=True).data,
            },
            request=request
        )

    def create(self, request, *args, **kwargs):
        """
        Create a project proposal.

        POST /api/projects/

        Returns:
            201: {project_id}; contract deployment continues in the background
        """
        serializer = ProjectWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = services.create_project(request.user.client_profile, serializer.validated_data)
        return APIResponse.created(
            data={'project_id': project.pk},
            message="Project proposal created",
            request=request
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        project = self.get_object()
        serializer = ProjectWriteSerializer(project, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        project = services.update_project(project, request.user, serializer.validated_data)
        return self._project_response(project, message="Project updated")

    # ==================== PROPOSAL ====================

    @action(detail=True, methods=['post'])
    def redeploy(self, request, pk=None):
        """
        Retry a failed contract deployment.

        POST /api/projects/{id}/redeploy/
        """
        project = services.redeploy_project(self.get_object(), request.user)
        return self._project_response(project, message="Deployment restarted")

    @action(detail=True, methods=['post'], url_path='assign-consultant')
    def assign_consultant(self, request, pk=None):
        """
        Assign the consultant who will scope the project (staff only).

        POST /api/projects/{id}/assign-consultant/
        Body: {"consultant_id": <developer id>}
        """
        project = self.get_object()
        serializer = AssignConsultantSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = services.assign_consultant(
            project, request.user, serializer.validated_data['consultant_id']
        )
        return self._project_response(project, message="Consultant assigned")

    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """
        Consultant accepts the proposal and starts scoping.

        POST /api/projects/{id}/approve/

        Returns:
            200: Project in ScopingInProgress
            409: Project not waiting for approval
        """
        project = services.approve_proposal(self.get_object(), request.user, request.session)
        return self._project_response(project, message="Proposal approved")

    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        """
        Consultant turns the proposal down.

        POST /api/projects/{id}/reject/
        Body: {"reason": "..."}
        """
        project = self.get_object()
        serializer = ReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = services.reject_proposal(
            project, request.user, serializer.validated_data['reason'], request.session
        )
        return self._project_response(project, message="Proposal rejected")

    # ==================== SCOPE DRAFT ====================

    def _scope_response(self, project, scope, status_code=status.HTTP_200_OK):
        milestones = [
            {**item, 'index': index, 'flow_state': MilestoneFlow.CREATING_MILESTONE.value}
            for index, item in enumerate(scope['milestones'])
        ]
        return APIResponse.success(
            data={
                'project_id': project.pk,
                'flow_state': flow_project_state(project, scope).value,
                'milestones': milestones,
            },
            status_code=status_code,
            request=self.request
        )

    @action(detail=True, methods=['get'])
    def scope(self, request, pk=None):
        """
        The consultant's scope draft for this project.

        GET /api/projects/{id}/scope/
        """
        project = self.get_object()
        if not is_project_consultant(request.user, project):
            raise PermissionDeniedError(required_role='project_consultant')
        return self._scope_response(project, services.ScopeDraft(request.session).get(project))

    @action(detail=True, methods=['post'], url_path='scope/milestones')
    def add_scope_milestone(self, request, pk=None):
        """
        Append a milestone to the scope draft.

        POST /api/projects/{id}/scope/milestones/
        """
        project = self.get_object()
        services.require_scoping(project, request.user, request.session)
        serializer = MilestoneDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        scope = services.ScopeDraft(request.session).add(project, serializer.draft)
        return self._scope_response(project, scope, status_code=status.HTTP_201_CREATED)

    @action(detail=True, methods=['put', 'patch', 'delete'],
            url_path=r'scope/milestones/(?P<index>\d+)')
    def scope_milestone(self, request, pk=None, index=None):
        """
        Edit or drop a scope draft milestone by position.

        PUT/PATCH/DELETE /api/projects/{id}/scope/milestones/{index}/
        """
        project = self.get_object()
        services.require_scoping(project, request.user, request.session)
        draft = services.ScopeDraft(request.session)

        if request.method == 'DELETE':
            return self._scope_response(project, draft.delete(project, int(index)))

        partial = request.method == 'PATCH'
        serializer = MilestoneDraftSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        scope = draft.update(project, int(index), serializer.draft, replace=not partial)
        return self._scope_response(project, scope)

    @action(detail=True, methods=['post'], url_path='scope/swap')
    def swap_scope_milestones(self, request, pk=None):
        """
        Swap two scope draft milestones.

        POST /api/projects/{id}/scope/swap/
        Body: {"first": 0, "second": 1}
        """
        project = self.get_object()
        services.require_scoping(project, request.user, request.session)
        serializer = SwapSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        scope = services.ScopeDraft(request.session).swap(
            project, serializer.validated_data['first'], serializer.validated_data['second']
        )
        return self._scope_response(project, scope)

    @action(detail=True, methods=['post'], url_path='submit-scope')
    def submit_scope(self, request, pk=None):
        """
        Propose the scope to the client.

        POST /api/projects/{id}/submit-scope/
        Body: {"consultant_comment": "...", "milestones": [...] (optional, defaults to the draft)}

        Returns:
            200: Project in ScopeValidationNeeded
            400: No milestones
            409: Project not being scoped
        """
        project = self.get_object()
        serializer = SubmitScopeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        milestones = None
        if 'milestones' in request.data:
            drafts = MilestoneDraftSerializer(data=request.data['milestones'], many=True)
            if not drafts.is_valid():
                raise ValidationError({'milestones': drafts.errors})
            milestones = [drafts.child.draft_from(item) for item in drafts.validated_data]

        project = services.submit_scope(
            project,
            request.user,
            request.session,
            milestones=milestones,
            consultant_comment=serializer.validated_data['consultant_comment'],
        )
        return self._project_response(project, message="Scope proposed")

    @action(detail=True, methods=['post'], url_path='accept-scope')
    def accept_scope(self, request, pk=None):
        """POST /api/projects/{id}/accept-scope/ (project client)"""
        project = self.get_object()
        serializer = ClientResponseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = services.accept_scope(
            project, request.user, serializer.validated_data['client_response']
        )
        return self._project_response(project, message="Scope accepted")

    @action(detail=True, methods=['post'], url_path='reject-scope')
    def reject_scope(self, request, pk=None):
        """POST /api/projects/{id}/reject-scope/ (project client)"""
        project = self.get_object()
        serializer = ClientResponseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = services.reject_scope(
            project, request.user, serializer.validated_data['client_response']
        )
        return self._project_response(project, message="Scope rejected")

    @action(detail=True, methods=['post'], url_path='assign-team')
    def assign_team(self, request, pk=None):
        """
        Start development once every milestone has a developer.

        POST /api/projects/{id}/assign-team/
        """
        project = services.assign_team(self.get_object(), request.user)
        return self._project_response(project, message="Team assigned")


# ============================================================================
# MILESTONE VIEWSET
# ============================================================================

class ProjectScopedMixin:
    """Resolves ``project_id`` from the URL against the user's visible projects."""

    def get_project(self) -> Project:
        if not hasattr(self, '_project'):
            self._project = get_visible_project(self.request, self.kwargs['project_id'])
        return self._project


class MilestoneViewSet(EnvelopeViewSetMixin,
                       ProjectScopedMixin,
                       mixins.ListModelMixin,
                       mixins.RetrieveModelMixin,
                       viewsets.GenericViewSet):
    """
    ViewSet for the milestones of one project.

    Provides:
    - list: GET /api/milestones/{project_id}/
    - retrieve: GET /api/milestones/{project_id}/{id}/
    - submit, accept, reject, rollback, pay
    - assign, accept-assignment, reject-assignment
    - comment, history
    """

    serializer_class = MilestoneSerializer
    permission_classes = [permissions.IsAuthenticated, IsProjectParticipant]
    lookup_value_regex = r'\d+'
    pagination_class = None

    def get_queryset(self):
        return Milestone.objects.filter(project=self.get_project()).select_related(
            'project', 'developer__user', 'assignation__developer__user'
        ).prefetch_related('skills', 'tasks')

    def _milestone_response(self, milestone, message):
        milestone = self.get_queryset().get(pk=milestone.pk)
        return APIResponse.success(
            data=MilestoneSerializer(milestone).data,
            message=message,
            request=self.request
        )

    @action(detail=True, methods=['post'])
    def submit(self, request, project_id=None, pk=None):
        """
        Submit the work for client review.

        POST /api/milestones/{project_id}/{id}/submit/
        Body: {"documentation": "...", "links": "..."}
        """
        milestone = self.get_object()
        serializer = SubmitMilestoneSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        milestone = services.submit_milestone(milestone, request.user, **serializer.validated_data)
        return self._milestone_response(milestone, "Milestone submitted for review")

    @action(detail=True, methods=['post'])
    def accept(self, request, project_id=None, pk=None):
        """POST /api/milestones/{project_id}/{id}/accept/ (project client)"""
        milestone = self.get_object()
        serializer = CommentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        milestone = services.accept_submission(
            milestone, request.user, serializer.validated_data['comment']
        )
        return self._milestone_response(milestone, "Submission accepted")

    @action(detail=True, methods=['post'])
    def reject(self, request, project_id=None, pk=None):
        """POST /api/milestones/{project_id}/{id}/reject/ (project client)"""
        milestone = self.get_object()
        serializer = CommentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        milestone = services.reject_submission(
            milestone, request.user, serializer.validated_data['comment']
        )
        return self._milestone_response(milestone, "Submission rejected")

    @action(detail=True, methods=['post'])
    def rollback(self, request, project_id=None, pk=None):
        """POST /api/milestones/{project_id}/{id}/rollback/ (project client)"""
        milestone = services.rollback_rejection(self.get_object(), request.user)
        return self._milestone_response(milestone, "Rejection withdrawn")

    @action(detail=True, methods=['post'])
    def pay(self, request, project_id=None, pk=None):
        """POST /api/milestones/{project_id}/{id}/pay/ (staff)"""
        milestone = services.pay_milestone(self.get_object(), request.user)
        return self._milestone_response(milestone, "Milestone paid")

    @action(detail=True, methods=['post'])
    def assign(self, request, project_id=None, pk=None):
        """
        Offer the milestone to a developer.

        POST /api/milestones/{project_id}/{id}/assign/
        Body: {"developer_id": <developer id>, "comment": "..."}
        """
        milestone = self.get_object()
        serializer = AssignDeveloperSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        milestone = services.assign_developer(
            milestone,
            request.user,
            serializer.validated_data['developer_id'],
            serializer.validated_data['comment'],
        )
        return self._milestone_response(milestone, "Developer assigned")

    @action(detail=True, methods=['post'], url_path='accept-assignment')
    def accept_assignment(self, request, project_id=None, pk=None):
        """POST /api/milestones/{project_id}/{id}/accept-assignment/ (assigned developer)"""
        milestone = services.accept_assignment(self.get_object(), request.user)
        return self._milestone_response(milestone, "Assignment accepted")

    @action(detail=True, methods=['post'], url_path='reject-assignment')
    def reject_assignment(self, request, project_id=None, pk=None):
        """POST /api/milestones/{project_id}/{id}/reject-assignment/ (assigned developer)"""
        milestone = self.get_object()
        serializer = CommentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        milestone = services.reject_assignment(
            milestone, request.user, serializer.validated_data['comment']
        )
        return self._milestone_response(milestone, "Assignment rejected")

    @action(detail=True, methods=['post'])
    def comment(self, request, project_id=None, pk=None):
        """
        Add a comment to the milestone history.

        POST /api/milestones/{project_id}/{id}/comment/
        Body: {"msg": "...", "show_developer": true}
        """
        milestone = self.get_object()
        serializer = HistoryCommentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        log = services.add_history_comment(milestone, request.user, **serializer.validated_data)
        return APIResponse.created(
            data=MilestoneLogSerializer(log).data,
            message="Comment added",
            request=request
        )

    @action(detail=True, methods=['get'])
    def history(self, request, project_id=None, pk=None):
        """
        Milestone history.

        GET /api/milestones/{project_id}/{id}/history/

        Developers only see entries flagged for them.
        """
        project = self.get_project()
        milestone = self.get_object()
        logs = milestone.logs.select_related('author')
        if not check_permission(request.user, project_client=project, project_consultant=project) \
                and not is_dao(request.user):
            logs = logs.filter(show_developer=True)

        return APIResponse.success(
            data={
                'project': {'id': project.pk, 'title': project.title},
                'milestone': MilestoneSerializer(milestone).data,
                'milestone_logs': MilestoneLogSerializer(logs, many=True).data,
            },
            request=request
        )


class TaskViewSet(EnvelopeViewSetMixin, ProjectScopedMixin, viewsets.ModelViewSet):
    """
    Tasks of a milestone.

    GET/POST /api/milestones/{project_id}/{milestone_id}/tasks/
    GET/PUT/PATCH/DELETE /api/milestones/{project_id}/{milestone_id}/tasks/{id}/

    Any project participant may read; the project consultant edits.
    """

    serializer_class = TaskSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = r'\d+'
    pagination_class = None

    def get_milestone(self) -> Milestone:
        if not hasattr(self, '_milestone'):
            milestone = Milestone.objects.filter(
                project=self.get_project(), pk=self.kwargs['milestone_id']
            ).select_related('project').first()
            if milestone is None:
                raise ResourceNotFoundError(resource_type='Milestone', resource_id=self.kwargs['milestone_id'])
            self._milestone = milestone
        return self._milestone

    def get_queryset(self):
        return Task.objects.filter(milestone=self.get_milestone()).select_related('role')

    def _require_consultant(self):
        if not is_project_consultant(self.request.user, self.get_project()):
            raise PermissionDeniedError(required_role='project_consultant')

    def perform_create(self, serializer):
        self._require_consultant()
        serializer.save(milestone=self.get_milestone())

    def perform_update(self, serializer):
        self._require_consultant()
        serializer.save()

    def perform_destroy(self, instance):
        self._require_consultant()
        instance.delete()


# ============================================================================
# PAYMENTS
# ============================================================================

class PaymentViewSet(viewsets.GenericViewSet):
    """
    Payment overview.

    Provides:
    - list: GET /api/payments/
    - retrieve: GET /api/payments/{id}/
    - release: POST /api/payments/{id}/release/
    """

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = PaymentProjectSerializer

    def get_permissions(self):
        if self.action == 'list':
            return [permissions.IsAuthenticated(), HasMarketplaceProfile()]
        return super().get_permissions()

    def get_queryset(self):
        return services.visible_projects(self.request.user).prefetch_related(
            'milestones__developer__user', 'milestones__skills', 'milestones__tasks'
        ).order_by('-created_at')

    def list(self, request):
        projects = self.get_queryset()
        return APIResponse.success(
            data={
                'projects': PaymentProjectSerializer(projects, many=True, context={'request': request}).data,
                'advance_payment_percentage': settings.ABAKO_ADVANCE_PAYMENT_PERCENTAGE,
                'all_delivery_times': DeliveryTimeSerializer(DeliveryTime.objects.all(), many=True).data,
            },
            request=request
        )

    def retrieve(self, request, pk=None):
        project = get_visible_project(request, pk)
        return APIResponse.success(
            data=PaymentProjectSerializer(project, context={'request': request}).data,
            request=request
        )

    @action(detail=True, methods=['post'])
    def release(self, request, pk=None):
        """
        Release payment for every completed milestone.

        POST /api/payments/{id}/release/
        Body: {"ratings": [{"user_id": 1, "score": 5}]} (optional)
        """
        project = get_visible_project(request, pk)
        serializer = ReleasePaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = services.release_payment(
            project, request.user, serializer.validated_data.get('ratings')
        )
        project = self.get_queryset().get(pk=project.pk)
        return APIResponse.success(
            data=PaymentProjectSerializer(project, context={'request': request}).data,
            message="Payment released",
            request=request
        )


# ============================================================================
# VOTES
# ============================================================================

def member_payload(request, project, developer):
    image_url = None
    if developer.attachment_id:
        image_url = request.build_absolute_uri(
            reverse('accounts:developer-attachment', kwargs={'pk': developer.pk})
        )
    if developer.pk == project.consultant_id:
        role = 'Consultant'
    else:
        role = developer.role.name if developer.role else None
    return {
        'name': developer.name,
        'role': role,
        'proficiency': developer.proficiency.description if developer.proficiency else None,
        'user_id': developer.user_id,
        'email': developer.user.email,
        'image_url': image_url,
    }


class VoteView(APIView):
    """
    Team ratings.

    GET /api/votes/{project_id}/   project and the members to rate
    POST /api/votes/{project_id}/  {"votes": [{"user_id": ..., "score": 1-5}]}
    """

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, project_id):
        project = get_visible_project(request, project_id)
        members = [member_payload(request, project, dev) for dev in services.project_team(project)]
        return APIResponse.success(
            data={
                'project': {'id': project.pk, 'title': project.title, 'state': project.state},
                'members': members,
            },
            request=request
        )

    def post(self, request, project_id):
        project = get_visible_project(request, project_id)
        votes = request.data.get('votes') if hasattr(request.data, 'get') else None
        if votes is None or votes == '':
            votes = []
        if not isinstance(votes, list):
            raise UnprocessableError(detail="'votes' must be a list.")

        serializer = VoteItemSerializer(data=votes, many=True)
        if not serializer.is_valid():
            raise ValidationError({'votes': serializer.errors})
        project = services.vote(project, request.user, serializer.validated_data)

        return APIResponse.success(
            data={
                'project': {'id': project.pk, 'title': project.title, 'state': project.state},
                'votes': len(serializer.validated_data),
            },
            message="Votes recorded",
            request=request
        )


# ============================================================================
# DASHBOARD
# ============================================================================

class DashboardView(APIView):
    """
    GET /api/dashboard/

    The current user, their projects, and project counts per flow state.
    """

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        scope = services.ScopeDraft(request.session).raw()
        projects = list(services.visible_projects(request.user).order_by('-created_at'))

        by_state = Counter(flow_project_state(project, scope).value for project in projects)

        user_data = UserSerializer(request.user, context={'request': request}).data
        user_data['role'] = active_role(request)

        return APIResponse.success(
            data={
                'user': user_data,
                'projects': ProjectListSerializer(projects, many=True, context=scope_context(request)).data,
                'projects_by_state': {flow.value: by_state.get(flow.value, 0) for flow in ProjectFlow},
            },
            request=request
        )
