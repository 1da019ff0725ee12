"""
Catalog API Views - the ``/api/enums`` endpoints.

Provides:
- list: GET /api/enums/ (every option set in one response)
- budgets: GET /api/enums/budgets/
- delivery_times: GET /api/enums/delivery-times/
- project_types: GET /api/enums/project-types/
- skills: GET /api/enums/skills/
- roles: GET /api/enums/roles/
- availability: GET /api/enums/availability/
- languages: GET /api/enums/languages/
- proficiency: GET /api/enums/proficiency/

Reference data is public: forms on the registration pages need it before
the user has an account.
"""

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny

from api.base import APIResponse

from ..models import (
    Availability, Budget, DeliveryTime, Language, Proficiency, ProjectType, Role, Skill,
)
from .serializers import (
    BudgetSerializer,
    DeliveryTimeSerializer,
    LanguageSerializer,
    ProficiencySerializer,
    ProjectTypeSerializer,
    RoleSerializer,
    SkillSerializer,
)


def availability_options():
    return [{'value': value, 'label': str(label)} for value, label in Availability.choices]


def serialize_all_enums():
    """Every catalog option set keyed by its enum name."""
    return {
        'budgets': BudgetSerializer(Budget.objects.all(), many=True).data,
        'delivery_times': DeliveryTimeSerializer(DeliveryTime.objects.all(), many=True).data,
        'project_types': ProjectTypeSerializer(ProjectType.objects.all(), many=True).data,
        'skills': SkillSerializer(Skill.objects.all(), many=True).data,
        'roles': RoleSerializer(Role.objects.all(), many=True).data,
        'availability': availability_options(),
        'languages': LanguageSerializer(Language.objects.all(), many=True).data,
        'proficiency': ProficiencySerializer(Proficiency.objects.all(), many=True).data,
    }


class EnumsViewSet(viewsets.ViewSet):
    """Read-only reference data for forms."""

    permission_classes = [AllowAny]
    authentication_classes = []

    def list(self, request):
        return APIResponse.success(data=serialize_all_enums(), request=request)

    def _options(self, request, serializer_class, queryset):
        return APIResponse.success(
            data=serializer_class(queryset, many=True).data,
            request=request
        )

    @action(detail=False, methods=['get'])
    def budgets(self, request):
        return self._options(request, BudgetSerializer, Budget.objects.all())

    @action(detail=False, methods=['get'], url_path='delivery-times')
    def delivery_times(self, request):
        return self._options(request, DeliveryTimeSerializer, DeliveryTime.objects.all())

    @action(detail=False, methods=['get'], url_path='project-types')
    def project_types(self, request):
        return self._options(request, ProjectTypeSerializer, ProjectType.objects.all())

    @action(detail=False, methods=['get'])
    def skills(self, request):
        return self._options(request, SkillSerializer, Skill.objects.all())

    @action(detail=False, methods=['get'])
    def roles(self, request):
        return self._options(request, RoleSerializer, Role.objects.all())

    @action(detail=False, methods=['get'])
    def availability(self, request):
        return APIResponse.success(data=availability_options(), request=request)

    @action(detail=False, methods=['get'])
    def languages(self, request):
        return self._options(request, LanguageSerializer, Language.objects.all())

    @action(detail=False, methods=['get'])
    def proficiency(self, request):
        return self._options(request, ProficiencySerializer, Proficiency.objects.all())
