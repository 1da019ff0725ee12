"""
Accounts Admin - Admin configuration for users and profiles.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import Attachment, Client, Developer, User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ['email', 'name', 'address', 'is_staff', 'is_active', 'date_joined']
    search_fields = ['email', 'name', 'address']
    ordering = ['email']
    readonly_fields = ['uuid', 'last_login', 'date_joined']
    fieldsets = (
        (None, {'fields': ('email', 'username', 'password')}),
        (_('Profile'), {'fields': ('name', 'address', 'uuid')}),
        (_('Permissions'), {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        (_('Dates'), {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {'classes': ('wide',), 'fields': ('email', 'username', 'password1', 'password2')}),
    )


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ['name', 'company', 'user', 'location', 'created_at']
    search_fields = ['name', 'company', 'user__email']
    raw_id_fields = ['user', 'attachment']
    filter_horizontal = ['languages']


@admin.register(Developer)
class DeveloperAdmin(admin.ModelAdmin):
    list_display = ['name', 'user', 'role', 'proficiency', 'is_available_for_hire']
    list_filter = ['role', 'proficiency', 'is_available_for_hire']
    search_fields = ['name', 'github_username', 'user__email']
    raw_id_fields = ['user', 'attachment']
    filter_horizontal = ['skills', 'languages']


@admin.register(Attachment)
class AttachmentAdmin(admin.ModelAdmin):
    list_display = ['original_name', 'mime', 'size', 'uploaded_by', 'created_at']
    search_fields = ['original_name']
    readonly_fields = ['created_at', 'updated_at']
