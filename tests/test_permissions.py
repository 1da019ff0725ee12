"""
Tests for marketplace role predicates and DRF permission classes.
"""

import pytest
from django.contrib.auth.models import AnonymousUser
from rest_framework.test import APIRequestFactory

from api.exceptions import MissingProfileError
from conftest import ClientFactory, DeveloperFactory, MilestoneFactory, ProjectFactory, UserFactory
from core.permissions import (
    HasMarketplaceProfile,
    IsClient,
    IsProfileOwnerOrReadOnly,
    IsProjectParticipant,
    can_view_project,
    check_permission,
    get_client_id,
    get_developer_id,
    is_client,
    is_dao,
    is_developer,
    is_milestone_developer,
    is_project_client,
    is_project_consultant,
)


def drf_request(user, method='get'):
    request = getattr(APIRequestFactory(), method)('/')
    request.user = user
    return request


@pytest.mark.django_db
class TestProfileLookups:

    def test_client_profile(self):
        client = ClientFactory()
        assert get_client_id(client.user) == client.pk
        assert get_developer_id(client.user) is None
        assert is_client(client.user)
        assert not is_developer(client.user)

    def test_user_holding_both_profiles(self):
        user = UserFactory()
        client = ClientFactory(user=user)
        developer = DeveloperFactory(user=user)
        assert get_client_id(user) == client.pk
        assert get_developer_id(user) == developer.pk

    def test_anonymous_user_has_no_profile(self):
        anonymous = AnonymousUser()
        assert get_client_id(anonymous) is None
        assert not is_client(anonymous)
        assert not is_dao(anonymous)
        assert not is_client(None)

    def test_staff_is_dao(self, staff_user):
        assert is_dao(staff_user)
        assert not is_dao(UserFactory())


@pytest.mark.django_db
class TestProjectPredicates:

    def test_project_client_and_consultant(self, awaiting_project, client_profile, consultant):
        assert is_project_client(client_profile.user, awaiting_project)
        assert not is_project_client(consultant.user, awaiting_project)
        assert is_project_consultant(consultant.user, awaiting_project)
        assert not is_project_consultant(client_profile.user, awaiting_project)

    def test_project_without_consultant(self, consultant):
        project = ProjectFactory()
        assert not is_project_consultant(consultant.user, project)

    def test_milestone_developer(self, developer):
        milestone = MilestoneFactory(developer=developer)
        assert is_milestone_developer(developer.user, milestone)
        assert not is_milestone_developer(DeveloperFactory().user, milestone)
        assert not is_milestone_developer(developer.user, MilestoneFactory())

    def test_check_permission_is_any_of(self, awaiting_project, client_profile, consultant):
        stranger = DeveloperFactory().user

        assert check_permission(client_profile.user, project_client=awaiting_project,
                                project_consultant=awaiting_project)
        assert check_permission(consultant.user, project_client=awaiting_project,
                                project_consultant=awaiting_project)
        assert not check_permission(stranger, project_client=awaiting_project,
                                    project_consultant=awaiting_project)
        assert check_permission(stranger, developer=True)
        assert not check_permission(stranger, client=True)
        assert not check_permission(stranger)

    def test_can_view_project(self, running_project, client_profile, consultant, developer, staff_user):
        assert can_view_project(client_profile.user, running_project)
        assert can_view_project(consultant.user, running_project)
        assert can_view_project(developer.user, running_project)
        assert can_view_project(staff_user, running_project)
        assert not can_view_project(DeveloperFactory().user, running_project)
        assert not can_view_project(ClientFactory().user, running_project)


@pytest.mark.django_db
class TestPermissionClasses:

    def test_is_client(self, client_profile, developer):
        assert IsClient().has_permission(drf_request(client_profile.user), None)
        assert not IsClient().has_permission(drf_request(developer.user), None)

    def test_has_marketplace_profile(self, staff_user, developer):
        assert HasMarketplaceProfile().has_permission(drf_request(staff_user), None)
        assert HasMarketplaceProfile().has_permission(drf_request(developer.user), None)
        with pytest.raises(MissingProfileError):
            HasMarketplaceProfile().has_permission(drf_request(UserFactory()), None)

    def test_profile_owner_or_read_only(self, developer):
        other = UserFactory()
        permission = IsProfileOwnerOrReadOnly()

        assert permission.has_object_permission(drf_request(other), None, developer)
        assert not permission.has_object_permission(drf_request(other, 'patch'), None, developer)
        assert permission.has_object_permission(drf_request(developer.user, 'patch'), None, developer)

    def test_project_participant(self, running_project, developer):
        permission = IsProjectParticipant()
        milestone = running_project.milestones.get()

        assert permission.has_object_permission(drf_request(developer.user), None, running_project)
        assert permission.has_object_permission(drf_request(developer.user), None, milestone)
        assert not permission.has_object_permission(drf_request(ClientFactory().user), None, milestone)
