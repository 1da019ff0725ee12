"""
Core Models - Shared abstract bases for all Abako apps.

This module provides:
- TimestampedModel: created_at/updated_at bookkeeping
- OrderedModel: explicit display ordering within a parent
"""

from django.db import models
from django.db.models import Max


class TimestampedModel(models.Model):
    """
    Abstract base class that adds timestamp fields.

    Provides:
    - created_at: Automatically set on creation
    - updated_at: Automatically updated on save

    Usage:
        class MyModel(TimestampedModel):
            # your fields here
            pass
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text='Timestamp when record was created'
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text='Timestamp when record was last updated'
    )

    class Meta:
        abstract = True
        get_latest_by = 'created_at'
        ordering = ['-created_at']


class OrderedModel(models.Model):
    """
    Abstract base for rows shown in a user-defined order.

    Subclasses set ``order_scope`` to the name of the field whose value
    groups siblings (e.g. ``'project'``). New rows without an explicit
    ``display_order`` are appended after the current maximum in their scope.
    """

    order_scope = None

    display_order = models.PositiveIntegerField(default=0, db_index=True)

    class Meta:
        abstract = True

    def siblings(self):
        queryset = type(self)._default_manager.all()
        if self.order_scope:
            queryset = queryset.filter(**{self.order_scope: getattr(self, self.order_scope)})
        return queryset

    def next_display_order(self):
        current = self.siblings().aggregate(top=Max('display_order'))['top']
        return 0 if current is None else current + 1

    def save(self, *args, **kwargs):
        if self._state.adding and not self.display_order:
            self.display_order = self.next_display_order()
        super().save(*args, **kwargs)
