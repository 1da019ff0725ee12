"""
Abako Test Configuration - pytest fixtures and factories

This module provides:
- pytest-django configuration
- factory_boy factories for accounts, catalog and projects models
- API clients authenticated as a client, a consultant, a developer and staff

RUNNING TESTS:
# Run all tests
pytest tests/ -v

# Run by module
pytest tests/test_flow_states.py -v
pytest tests/test_project_lifecycle.py -v

# Run by marker
pytest -m workflow -v
pytest -m integration -v

Projects built by ProjectFactory default to an already deployed contract,
so the post_save deployment hook does not fire. Tests that exercise
deployment create a ``draft`` project inside
``django_capture_on_commit_callbacks(execute=True)``.
"""

from decimal import Decimal

import pytest

import factory
from factory.django import DjangoModelFactory
from rest_framework.test import APIClient


# ============================================================================
# USER FACTORIES
# ============================================================================

class UserFactory(DjangoModelFactory):
    """Factory for the marketplace User model."""

    class Meta:
        model = 'accounts.User'
        django_get_or_create = ('email',)

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    username = factory.LazyAttribute(lambda o: o.email)
    name = factory.Faker('name')
    address = factory.Sequence(lambda n: f"0x{n:040x}")
    is_active = True


class StaffUserFactory(UserFactory):
    """Staff users act as the DAO coordinator."""

    is_staff = True


class ClientFactory(DjangoModelFactory):
    """Factory for Client profiles."""

    class Meta:
        model = 'accounts.Client'

    user = factory.SubFactory(UserFactory)
    name = factory.Faker('company')
    company = factory.Faker('company')
    location = 'Barcelona'


class DeveloperFactory(DjangoModelFactory):
    """Factory for Developer profiles."""

    class Meta:
        model = 'accounts.Developer'

    user = factory.SubFactory(UserFactory)
    name = factory.Faker('name')
    bio = 'Smart contract developer'
    is_available_for_hire = True


# ============================================================================
# CATALOG FACTORIES
# ============================================================================

class BudgetFactory(DjangoModelFactory):
    class Meta:
        model = 'catalog.Budget'

    description = factory.Sequence(lambda n: f"Budget option {n}")
    display_order = factory.Sequence(lambda n: n)


class DeliveryTimeFactory(DjangoModelFactory):
    class Meta:
        model = 'catalog.DeliveryTime'

    description = factory.Sequence(lambda n: f"Delivery option {n}")
    display_order = factory.Sequence(lambda n: n)


class ProjectTypeFactory(DjangoModelFactory):
    class Meta:
        model = 'catalog.ProjectType'

    description = factory.Sequence(lambda n: f"Project type {n}")
    display_order = factory.Sequence(lambda n: n)


class ProficiencyFactory(DjangoModelFactory):
    class Meta:
        model = 'catalog.Proficiency'

    description = factory.Sequence(lambda n: f"Proficiency {n}")
    display_order = factory.Sequence(lambda n: n)


class RoleFactory(DjangoModelFactory):
    class Meta:
        model = 'catalog.Role'
        django_get_or_create = ('name',)

    name = factory.Sequence(lambda n: f"Role {n}")


class SkillFactory(DjangoModelFactory):
    class Meta:
        model = 'catalog.Skill'
        django_get_or_create = ('name',)

    name = factory.Sequence(lambda n: f"Skill {n}")


class LanguageFactory(DjangoModelFactory):
    class Meta:
        model = 'catalog.Language'
        django_get_or_create = ('code',)

    code = factory.Sequence(lambda n: f"L{n:02d}")
    name = factory.Sequence(lambda n: f"Language {n}")


# ============================================================================
# PROJECT FACTORIES
# ============================================================================

class ProjectFactory(DjangoModelFactory):
    """
    Factory for deployed projects.

    Pass ``consultant=...`` to get a project waiting for approval and
    ``state=...`` for any later raw state.
    """

    class Meta:
        model = 'projects.Project'

    client = factory.SubFactory(ClientFactory)
    consultant = None
    title = factory.Sequence(lambda n: f"Project {n}")
    summary = 'A decentralized marketplace'
    description = 'Build and audit the contracts'
    budget = factory.SubFactory(BudgetFactory)
    delivery_time = factory.SubFactory(DeliveryTimeFactory)
    project_type = factory.SubFactory(ProjectTypeFactory)
    state = 'deployed'
    creation_status = 'created'
    contract_address = factory.Sequence(lambda n: f"0xcontract{n:032x}")


class MilestoneFactory(DjangoModelFactory):
    """Factory for persisted (pending) milestones."""

    class Meta:
        model = 'projects.Milestone'

    project = factory.SubFactory(ProjectFactory)
    title = factory.Sequence(lambda n: f"Milestone {n}")
    description = 'Deliver the feature'
    budget = Decimal('1000.00')
    state = 'pending'


class TaskFactory(DjangoModelFactory):
    class Meta:
        model = 'projects.Task'

    milestone = factory.SubFactory(MilestoneFactory)
    title = factory.Sequence(lambda n: f"Task {n}")
    budget = Decimal('250.00')


class AssignationFactory(DjangoModelFactory):
    class Meta:
        model = 'projects.Assignation'

    milestone = factory.SubFactory(MilestoneFactory)
    developer = factory.SubFactory(DeveloperFactory)
    state = 'pending'


# ============================================================================
# PYTEST FIXTURES
# ============================================================================

@pytest.fixture
def user_factory():
    return UserFactory


@pytest.fixture
def client_factory():
    return ClientFactory


@pytest.fixture
def developer_factory():
    return DeveloperFactory


@pytest.fixture
def project_factory():
    return ProjectFactory


@pytest.fixture
def milestone_factory():
    return MilestoneFactory


@pytest.fixture
def task_factory():
    return TaskFactory


@pytest.fixture
def client_profile(db):
    """A user acting as a client."""
    return ClientFactory()


@pytest.fixture
def consultant(db):
    """A developer that will be assigned as project consultant."""
    return DeveloperFactory(name='Carla Consultant')


@pytest.fixture
def developer(db):
    """A developer that builds milestones."""
    return DeveloperFactory(name='Dani Developer', role=RoleFactory(name='BackEnd'))


@pytest.fixture
def staff_user(db):
    return StaffUserFactory()


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def api_client_for():
    """Build a separate authenticated APIClient (with its own session) per user."""

    def make(user):
        api = APIClient()
        api.force_authenticate(user=user)
        return api

    return make


@pytest.fixture
def client_api(api_client_for, client_profile):
    return api_client_for(client_profile.user)


@pytest.fixture
def consultant_api(api_client_for, consultant):
    return api_client_for(consultant.user)


@pytest.fixture
def developer_api(api_client_for, developer):
    return api_client_for(developer.user)


@pytest.fixture
def staff_api(api_client_for, staff_user):
    return api_client_for(staff_user)


@pytest.fixture
def awaiting_project(client_profile, consultant):
    """Deployed project with a consultant, waiting for proposal approval."""
    return ProjectFactory(client=client_profile, consultant=consultant)


@pytest.fixture
def scoped_project(client_profile, consultant):
    """Project whose scope the client must validate, with two pending milestones."""
    project = ProjectFactory(
        client=client_profile,
        consultant=consultant,
        state='scope_proposed',
        coordinator_approval_status='approved',
    )
    MilestoneFactory(project=project, title='Contracts', budget=Decimal('1000.00'))
    MilestoneFactory(project=project, title='Frontend', budget=Decimal('500.00'))
    return project


@pytest.fixture
def running_project(client_profile, consultant, developer):
    """Project in progress with one milestone being built by ``developer``."""
    project = ProjectFactory(
        client=client_profile,
        consultant=consultant,
        state='team_assigned',
        coordinator_approval_status='approved',
    )
    milestone = MilestoneFactory(
        project=project,
        developer=developer,
        state='task_in_progress',
        budget=Decimal('1000.00'),
    )
    AssignationFactory(milestone=milestone, developer=developer, state='accepted')
    return project
