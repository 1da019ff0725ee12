"""
Accounts Models - Users and marketplace profiles.

This module implements:
- User: email-identified account linked to an identity provider address
- Client: profile of users that post projects
- Developer: profile of users that scope (as consultants) and build milestones
- Attachment: uploaded files (profile pictures, documents)

A single user may hold both profiles; the role chosen at login decides
which one the session acts with.
"""

import mimetypes
import uuid

from django.conf import settings
from django.contrib.auth.models import AbstractUser, UserManager as DjangoUserManager
from django.core.validators import MinValueValidator, MinLengthValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import TimestampedModel


# ============================================================================
# USERS
# ============================================================================

class UserManager(DjangoUserManager):
    """Manager that fills ``username`` from the email address."""

    def create_user(self, email=None, password=None, **extra_fields):
        username = extra_fields.pop('username', None) or email
        return super().create_user(username, email, password, **extra_fields)

    def create_superuser(self, email=None, password=None, **extra_fields):
        username = extra_fields.pop('username', None) or email
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """
    Marketplace account.

    Email is the login identifier; ``address`` is the on-chain account the
    identity provider returned when the credential was registered.
    """

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    email = models.EmailField(
        unique=True,
        db_index=True,
        help_text=_('Email address (used for login)')
    )
    name = models.CharField(max_length=255, blank=True)
    address = models.CharField(
        max_length=128,
        blank=True,
        help_text=_('Account address returned by the identity provider')
    )

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = _('User')
        verbose_name_plural = _('Users')

    def __str__(self):
        return self.email

    @property
    def display_name(self):
        return self.name or self.get_full_name() or self.email


# ============================================================================
# ATTACHMENTS
# ============================================================================

def attachment_upload_to(instance, filename):
    return f"attachments/{uuid.uuid4().hex}/{filename}"


class Attachment(TimestampedModel):
    """An uploaded file with its detected MIME type."""

    file = models.FileField(upload_to=attachment_upload_to)
    original_name = models.CharField(max_length=255, blank=True)
    mime = models.CharField(max_length=100, blank=True)
    size = models.PositiveIntegerField(default=0)
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='attachments'
    )

    class Meta:
        verbose_name = _('Attachment')
        verbose_name_plural = _('Attachments')
        ordering = ['-created_at']

    def __str__(self):
        return self.original_name or self.file.name

    def save(self, *args, **kwargs):
        if not self.mime and self.original_name:
            self.mime = mimetypes.guess_type(self.original_name)[0] or 'application/octet-stream'
        super().save(*args, **kwargs)

    @property
    def is_image(self):
        return self.mime.startswith('image/')


# ============================================================================
# PROFILES
# ============================================================================

class Client(TimestampedModel):
    """Profile of a user that publishes project proposals."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='client_profile'
    )
    name = models.CharField(
        max_length=255,
        validators=[MinLengthValidator(1, _('Name must not be empty.'))]
    )
    company = models.CharField(max_length=255, blank=True)
    department = models.CharField(max_length=255, blank=True)
    website = models.URLField(blank=True)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=255, blank=True)

    attachment = models.ForeignKey(
        Attachment,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    languages = models.ManyToManyField(
        'catalog.Language',
        blank=True,
        related_name='clients'
    )

    class Meta:
        verbose_name = _('Client')
        verbose_name_plural = _('Clients')
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def email(self):
        return self.user.email


class Developer(TimestampedModel):
    """
    Profile of a user that builds milestones.

    Developers assigned to a project as its consultant scope the project
    into milestones and coordinate the team.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='developer_profile'
    )
    name = models.CharField(
        max_length=255,
        validators=[MinLengthValidator(1, _('Name must not be empty.'))]
    )
    bio = models.TextField(blank=True)
    background = models.TextField(blank=True)
    github_username = models.CharField(max_length=100, blank=True)
    portfolio_url = models.URLField(blank=True)
    location = models.CharField(max_length=255, blank=True)

    # Availability
    is_available_for_hire = models.BooleanField(default=False)
    is_available_full_time = models.BooleanField(default=False)
    is_available_part_time = models.BooleanField(default=False)
    is_available_hourly = models.BooleanField(default=False)
    available_hours_per_week = models.PositiveIntegerField(
        default=0,
        validators=[MinValueValidator(0)]
    )

    # Classification
    role = models.ForeignKey(
        'catalog.Role',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='developers'
    )
    proficiency = models.ForeignKey(
        'catalog.Proficiency',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='developers'
    )
    skills = models.ManyToManyField(
        'catalog.Skill',
        blank=True,
        related_name='developers'
    )
    languages = models.ManyToManyField(
        'catalog.Language',
        blank=True,
        related_name='developers'
    )

    attachment = models.ForeignKey(
        Attachment,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )

    class Meta:
        verbose_name = _('Developer')
        verbose_name_plural = _('Developers')
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def email(self):
        return self.user.email
