"""
Management command to load the default catalog (budgets, delivery times,
project types, proficiencies, roles, skills, languages).

Idempotent: existing rows are matched by their natural key and left in place.

Usage:
    python manage.py seed_catalog
    python manage.py seed_catalog --reset
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from catalog import data
from catalog.models import (
    Budget, DeliveryTime, Language, Proficiency, ProjectType, Role, Skill,
)


class Command(BaseCommand):
    help = 'Load default reference data used by project and profile forms'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset',
            action='store_true',
            help='Delete existing catalog rows before loading'
        )

    @transaction.atomic
    def handle(self, *args, **options):
        described = [
            (Budget, data.BUDGETS),
            (DeliveryTime, data.DELIVERY_TIMES),
            (ProjectType, data.PROJECT_TYPES),
            (Proficiency, data.PROFICIENCIES),
        ]

        if options.get('reset'):
            for model, _values in described:
                model.objects.all().delete()
            for model in (Role, Skill, Language):
                model.objects.all().delete()
            self.stdout.write(self.style.WARNING('Existing catalog rows deleted'))

        created = 0
        for model, values in described:
            for order, description in enumerate(values):
                _obj, was_created = model.objects.get_or_create(
                    description=description,
                    defaults={'display_order': order},
                )
                created += int(was_created)

        for name in data.ROLES:
            created += int(Role.objects.get_or_create(name=name)[1])

        for name in data.SKILLS:
            created += int(Skill.objects.get_or_create(name=name)[1])

        for code, name in data.LANGUAGES.items():
            created += int(Language.objects.get_or_create(code=code, defaults={'name': name})[1])

        self.stdout.write(self.style.SUCCESS(f'Catalog loaded ({created} new rows)'))
