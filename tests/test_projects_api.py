"""
Tests for the project endpoints: proposals, visibility and state guards.
"""

import pytest
from rest_framework import status

from conftest import ClientFactory, DeveloperFactory, MilestoneFactory, ProjectFactory
from projects.models import Project


# =============================================================================
# CREATION AND VISIBILITY
# =============================================================================

@pytest.mark.django_db
class TestProjectCreation:

    def test_only_clients_create_projects(self, developer_api):
        response = developer_api.post('/api/projects/', {'title': 'Nope'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()['error_code'] == 'FORBIDDEN'

    def test_title_is_required(self, client_api):
        response = client_api.post('/api/projects/', {'title': ''}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body['error_code'] == 'VALIDATION_ERROR'
        assert body['errors'][0]['field'] == 'title'

    def test_new_project_waits_for_deployment(self, client_api, client_profile):
        response = client_api.post('/api/projects/', {'title': 'Wallet'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        project = Project.objects.get(pk=response.json()['data']['project_id'])
        assert project.client == client_profile
        assert project.state == Project.State.DRAFT
        assert project.creation_status == Project.CreationStatus.CREATING

    def test_unauthenticated(self, api_client):
        response = api_client.get('/api/projects/')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestProjectVisibility:

    def test_client_lists_own_projects(self, client_api, client_profile):
        own = ProjectFactory(client=client_profile)
        ProjectFactory()

        body = client_api.get('/api/projects/').json()

        assert [item['id'] for item in body['data']] == [own.pk]
        assert body['meta']['pagination']['count'] == 1

    def test_developer_sees_projects_with_own_milestones(self, developer_api, developer):
        project = ProjectFactory(state='team_assigned', consultant=DeveloperFactory())
        MilestoneFactory(project=project, developer=developer)
        MilestoneFactory(project=project, developer=developer)
        ProjectFactory()

        body = developer_api.get('/api/projects/').json()

        assert [item['id'] for item in body['data']] == [project.pk]

    def test_staff_sees_everything(self, staff_api):
        ProjectFactory.create_batch(3)
        body = staff_api.get('/api/projects/').json()
        assert body['meta']['pagination']['count'] == 3

    def test_filter_by_state(self, client_api, client_profile):
        ProjectFactory(client=client_profile)
        completed = ProjectFactory(client=client_profile, state='completed')

        body = client_api.get('/api/projects/?state=completed').json()

        assert [item['id'] for item in body['data']] == [completed.pk]

    def test_outsiders_get_not_found(self, api_client_for, awaiting_project):
        outsider = api_client_for(ClientFactory().user)

        response = outsider.get(f'/api/projects/{awaiting_project.pk}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()['error_code'] == 'NOT_FOUND'

    def test_detail_carries_catalog_options(self, client_api, awaiting_project):
        data = client_api.get(f'/api/projects/{awaiting_project.pk}/').json()['data']

        assert data['project']['id'] == awaiting_project.pk
        assert data['project']['consultant']['id'] == awaiting_project.consultant_id
        assert data['all_budgets'][0]['description'] == awaiting_project.budget.description
        assert 'all_delivery_times' in data
        assert 'all_project_types' in data


# =============================================================================
# PROPOSAL EDITS
# =============================================================================

@pytest.mark.django_db
class TestProposalEdits:

    def test_client_edits_waiting_proposal(self, client_api, awaiting_project):
        response = client_api.patch(f'/api/projects/{awaiting_project.pk}/', {
            'title': 'Renamed',
            'objectives': ['Ship it'],
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        data = response.json()['data']
        assert data['title'] == 'Renamed'
        assert data['objectives'] == ['Ship it']

    def test_consultant_cannot_edit_proposal(self, consultant_api, awaiting_project):
        response = consultant_api.patch(f'/api/projects/{awaiting_project.pk}/', {'title': 'x'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()['meta']['required_role'] == 'project_client'

    def test_scoped_proposal_is_frozen(self, client_api, scoped_project):
        response = client_api.patch(f'/api/projects/{scoped_project.pk}/', {'title': 'x'}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        body = response.json()
        assert body['error_code'] == 'INVALID_STATE'
        assert body['meta']['current_state'] == 'ScopeValidationNeeded'


# =============================================================================
# CONSULTANT ASSIGNMENT AND APPROVAL
# =============================================================================

@pytest.mark.django_db
class TestConsultantAssignment:

    def test_only_staff_assign_consultants(self, client_api, client_profile, consultant):
        project = ProjectFactory(client=client_profile)

        response = client_api.post(f'/api/projects/{project.pk}/assign-consultant/',
                                   {'consultant_id': consultant.pk}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_consultant(self, staff_api):
        project = ProjectFactory()

        response = staff_api.post(f'/api/projects/{project.pk}/assign-consultant/',
                                  {'consultant_id': 999999}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['errors'][0]['field'] == 'consultant_id'

    def test_cannot_reassign_once_scoping(self, staff_api, scoped_project, developer):
        response = staff_api.post(f'/api/projects/{scoped_project.pk}/assign-consultant/',
                                  {'consultant_id': developer.pk}, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_approve_only_by_consultant(self, client_api, awaiting_project):
        response = client_api.post(f'/api/projects/{awaiting_project.pk}/approve/')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_approve_twice(self, consultant_api, awaiting_project):
        consultant_api.post(f'/api/projects/{awaiting_project.pk}/approve/')
        response = consultant_api.post(f'/api/projects/{awaiting_project.pk}/approve/')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()['meta']['allowed_states'] == ['WaitingForProposalApproval']

    def test_reject_requires_reason(self, consultant_api, awaiting_project):
        response = consultant_api.post(f'/api/projects/{awaiting_project.pk}/reject/', {}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# REDEPLOYMENT
# =============================================================================

@pytest.mark.django_db
class TestRedeploy:

    def test_redeploy_failed_project(self, client_api, client_profile, django_capture_on_commit_callbacks):
        project = ProjectFactory(client=client_profile, state='draft', contract_address='',
                                 creation_status='failed', creation_error='adapter timeout')

        with django_capture_on_commit_callbacks(execute=True):
            response = client_api.post(f'/api/projects/{project.pk}/redeploy/')

        assert response.status_code == status.HTTP_200_OK
        project.refresh_from_db()
        assert project.creation_error == ''
        assert project.creation_status == Project.CreationStatus.CREATED
        assert project.state == Project.State.DEPLOYED
        assert project.contract_address

    def test_redeploy_healthy_project(self, client_api, awaiting_project):
        response = client_api.post(f'/api/projects/{awaiting_project.pk}/redeploy/')
        assert response.status_code == status.HTTP_409_CONFLICT


# =============================================================================
# SCOPE VALIDATION AND TEAM
# =============================================================================

@pytest.mark.django_db
class TestScopeValidation:

    def test_consultant_cannot_accept_own_scope(self, consultant_api, scoped_project):
        response = consultant_api.post(f'/api/projects/{scoped_project.pk}/accept-scope/')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_accept_scope_only_when_proposed(self, client_api, awaiting_project):
        response = client_api.post(f'/api/projects/{awaiting_project.pk}/accept-scope/')
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_team_assignment_requires_developers(self, consultant_api, scoped_project):
        scoped_project.state = Project.State.SCOPE_ACCEPTED
        scoped_project.save()

        response = consultant_api.post(f'/api/projects/{scoped_project.pk}/assign-team/')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert '2 milestone(s)' in response.json()['message']
