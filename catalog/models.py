"""
Catalog Models - Reference data for forms and filters.

This module defines the lookup tables shared by projects, milestones and
developer profiles:
- Budget, DeliveryTime, ProjectType, Proficiency: described options
- Skill, Role: unique named options
- Language: ISO code / name pairs
- Availability: fixed choices stored inline on milestones
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Availability(models.TextChoices):
    NOT_AVAILABLE = 'NotAvailable', _('Not available')
    PART_TIME = 'PartTime', _('Part time')
    FULL_TIME = 'FullTime', _('Full time')
    WEEKLY_HOURS = 'WeeklyHours', _('Weekly hours')


# ============================================================================
# DESCRIBED OPTIONS
# ============================================================================

class DescribedOption(models.Model):
    """Abstract base for options identified by a human description."""

    description = models.CharField(max_length=255)
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        abstract = True
        ordering = ['display_order', 'id']

    def __str__(self):
        return self.description


class Budget(DescribedOption):

    class Meta(DescribedOption.Meta):
        verbose_name = _('Budget')
        verbose_name_plural = _('Budgets')


class DeliveryTime(DescribedOption):

    class Meta(DescribedOption.Meta):
        verbose_name = _('Delivery Time')
        verbose_name_plural = _('Delivery Times')


class ProjectType(DescribedOption):

    class Meta(DescribedOption.Meta):
        verbose_name = _('Project Type')
        verbose_name_plural = _('Project Types')


class Proficiency(DescribedOption):

    class Meta(DescribedOption.Meta):
        verbose_name = _('Proficiency')
        verbose_name_plural = _('Proficiencies')


# ============================================================================
# NAMED OPTIONS
# ============================================================================

class Skill(models.Model):
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        verbose_name = _('Skill')
        verbose_name_plural = _('Skills')
        ordering = ['name']

    def __str__(self):
        return self.name


class Role(models.Model):
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        verbose_name = _('Role')
        verbose_name_plural = _('Roles')
        ordering = ['id']

    def __str__(self):
        return self.name


class Language(models.Model):
    """Spoken language, keyed by ISO 639-2 code (e.g. ``ENG``)."""

    code = models.CharField(max_length=8, unique=True)
    name = models.CharField(max_length=100)

    class Meta:
        verbose_name = _('Language')
        verbose_name_plural = _('Languages')
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.code})"
