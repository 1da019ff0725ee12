"""
Accounts Serializers - users, profiles, attachments and auth payloads.
"""

from django.urls import reverse
from rest_framework import serializers

from catalog.models import Language, Proficiency, Role, Skill
from core.permissions import get_client_id, get_developer_id

from ..models import Attachment, Client, Developer, User
from ..services import ROLES


# ==================== USER SERIALIZERS ====================

class UserSerializer(serializers.ModelSerializer):
    """Current user with the ids of the profiles it holds."""

    client_id = serializers.SerializerMethodField()
    developer_id = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'uuid', 'email', 'name', 'address', 'is_staff', 'client_id', 'developer_id']
        read_only_fields = fields

    def get_client_id(self, obj):
        return get_client_id(obj)

    def get_developer_id(self, obj):
        return get_developer_id(obj)


class AttachmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Attachment
        fields = ['id', 'original_name', 'mime', 'size', 'created_at']
        read_only_fields = fields


# ==================== PROFILE SERIALIZERS ====================

class ProfileAttachmentMixin(serializers.Serializer):
    """Adds the download URL of the profile attachment."""

    attachment_url = serializers.SerializerMethodField()

    attachment_route = None

    def get_attachment_url(self, obj):
        if not obj.attachment_id:
            return None
        url = reverse(self.attachment_route, kwargs={'pk': obj.pk})
        request = self.context.get('request')
        return request.build_absolute_uri(url) if request else url


class ClientSerializer(ProfileAttachmentMixin, serializers.ModelSerializer):
    attachment_route = 'accounts:client-attachment'

    user_id = serializers.IntegerField(read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)
    languages = serializers.SlugRelatedField(
        slug_field='code', many=True, required=False, queryset=Language.objects.all()
    )

    class Meta:
        model = Client
        fields = [
            'id', 'user_id', 'email', 'name', 'company', 'department', 'website',
            'description', 'location', 'languages', 'attachment', 'attachment_url',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'attachment', 'created_at', 'updated_at']


class DeveloperSerializer(ProfileAttachmentMixin, serializers.ModelSerializer):
    """
    Developer profile.

    Skills are written by name and languages by ISO code; role and
    proficiency by catalog id.
    """

    attachment_route = 'accounts:developer-attachment'

    user_id = serializers.IntegerField(read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)
    address = serializers.CharField(source='user.address', read_only=True)
    role = serializers.PrimaryKeyRelatedField(
        queryset=Role.objects.all(), allow_null=True, required=False
    )
    role_name = serializers.CharField(source='role.name', read_only=True, default=None)
    proficiency = serializers.PrimaryKeyRelatedField(
        queryset=Proficiency.objects.all(), allow_null=True, required=False
    )
    proficiency_description = serializers.CharField(
        source='proficiency.description', read_only=True, default=None
    )
    skills = serializers.SlugRelatedField(
        slug_field='name', many=True, required=False, queryset=Skill.objects.all()
    )
    languages = serializers.SlugRelatedField(
        slug_field='code', many=True, required=False, queryset=Language.objects.all()
    )

    class Meta:
        model = Developer
        fields = [
            'id', 'user_id', 'email', 'address', 'name', 'bio', 'background',
            'github_username', 'portfolio_url', 'location',
            'is_available_for_hire', 'is_available_full_time',
            'is_available_part_time', 'is_available_hourly', 'available_hours_per_week',
            'role', 'role_name', 'proficiency', 'proficiency_description',
            'skills', 'languages', 'attachment', 'attachment_url',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'attachment', 'created_at', 'updated_at']


class DeveloperSummarySerializer(serializers.ModelSerializer):
    """Developer as embedded in projects and milestones."""

    email = serializers.EmailField(source='user.email', read_only=True)
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Developer
        fields = ['id', 'user_id', 'name', 'email']
        read_only_fields = fields


class ClientSummarySerializer(serializers.ModelSerializer):
    email = serializers.EmailField(source='user.email', read_only=True)
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Client
        fields = ['id', 'user_id', 'name', 'company', 'email']
        read_only_fields = fields


# ==================== AUTH SERIALIZERS ====================

class LoginSerializer(serializers.Serializer):
    """Body of POST /api/auth/login/ after the WebAuthn ceremony."""

    email = serializers.EmailField()
    token = serializers.CharField()
    role = serializers.ChoiceField(choices=ROLES)


class RegisterSerializer(serializers.Serializer):
    """Body of POST /api/auth/register/."""

    email = serializers.EmailField()
    name = serializers.CharField(max_length=255)
    role = serializers.ChoiceField(choices=ROLES)
    prepared_data = serializers.DictField()
