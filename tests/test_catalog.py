"""
Tests for the reference data catalog: the enums API and the seed command.
"""

from io import StringIO

import pytest
from django.core.management import call_command
from rest_framework import status

from catalog import data
from catalog.models import Budget, DeliveryTime, Language, Proficiency, ProjectType, Role, Skill
from conftest import BudgetFactory, LanguageFactory, SkillFactory


@pytest.mark.django_db
class TestSeedCatalog:

    def test_loads_default_catalog(self):
        out = StringIO()
        call_command('seed_catalog', stdout=out)

        assert Budget.objects.count() == len(data.BUDGETS)
        assert DeliveryTime.objects.count() == len(data.DELIVERY_TIMES)
        assert ProjectType.objects.count() == len(data.PROJECT_TYPES)
        assert Proficiency.objects.count() == len(data.PROFICIENCIES)
        assert Role.objects.count() == len(data.ROLES)
        assert Skill.objects.count() == len(data.SKILLS)
        assert Language.objects.count() == len(data.LANGUAGES)
        assert 'Catalog loaded' in out.getvalue()

    def test_is_idempotent(self):
        call_command('seed_catalog', stdout=StringIO())
        out = StringIO()
        call_command('seed_catalog', stdout=out)

        assert Budget.objects.count() == len(data.BUDGETS)
        assert '(0 new rows)' in out.getvalue()

    def test_keeps_declared_order(self):
        call_command('seed_catalog', stdout=StringIO())
        assert list(Budget.objects.values_list('description', flat=True)) == data.BUDGETS

    def test_reset_drops_custom_rows(self):
        BudgetFactory(description='Custom budget')
        call_command('seed_catalog', '--reset', stdout=StringIO())

        assert not Budget.objects.filter(description='Custom budget').exists()
        assert Budget.objects.count() == len(data.BUDGETS)


@pytest.mark.django_db
class TestEnumsAPI:

    def test_all_enums_are_public(self, api_client):
        call_command('seed_catalog', stdout=StringIO())

        response = api_client.get('/api/enums/')

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body['success'] is True
        assert set(body['data']) == {
            'budgets', 'delivery_times', 'project_types', 'skills',
            'roles', 'availability', 'languages', 'proficiency',
        }
        assert [item['description'] for item in body['data']['budgets']] == data.BUDGETS

    def test_availability_choices(self, api_client):
        response = api_client.get('/api/enums/availability/')

        values = [item['value'] for item in response.json()['data']]
        assert values == ['NotAvailable', 'PartTime', 'FullTime', 'WeeklyHours']

    def test_single_option_sets(self, api_client):
        SkillFactory(name='Rust')
        LanguageFactory(code='ENG', name='English')

        skills = api_client.get('/api/enums/skills/').json()['data']
        languages = api_client.get('/api/enums/languages/').json()['data']

        assert [skill['name'] for skill in skills] == ['Rust']
        assert languages[0]['code'] == 'ENG'

    @pytest.mark.parametrize('path', [
        'budgets', 'delivery-times', 'project-types', 'roles', 'proficiency',
    ])
    def test_option_endpoints_respond(self, api_client, path):
        response = api_client.get(f'/api/enums/{path}/')
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data'] == []
