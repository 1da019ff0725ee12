"""
Tests for the consultant's session scope draft.
"""

import pytest
from django.contrib.sessions.backends.cache import SessionStore
from rest_framework import status

from api.exceptions import ResourceNotFoundError
from conftest import ProjectFactory
from projects.services import ScopeDraft


@pytest.fixture
def session():
    return SessionStore()


@pytest.mark.django_db
class TestScopeDraft:

    def test_empty_draft_for_project(self, session):
        project = ProjectFactory()
        assert ScopeDraft(session).get(project) == {'project_id': project.pk, 'milestones': []}
        assert ScopeDraft(session).raw() is None

    def test_add_update_delete(self, session):
        project = ProjectFactory()
        draft = ScopeDraft(session)

        draft.add(project, {'title': 'A', 'budget': '10.00'})
        draft.add(project, {'title': 'B'})
        draft.update(project, 0, {'budget': '20.00'})

        assert draft.get(project)['milestones'] == [
            {'title': 'A', 'budget': '20.00'},
            {'title': 'B'},
        ]

        draft.delete(project, 0)
        assert [m['title'] for m in draft.get(project)['milestones']] == ['B']
        assert session.modified

    def test_swap(self, session):
        project = ProjectFactory()
        draft = ScopeDraft(session)
        draft.start(project, [{'title': 'A'}, {'title': 'B'}, {'title': 'C'}])

        draft.swap(project, 0, 2)

        assert [m['title'] for m in draft.get(project)['milestones']] == ['C', 'B', 'A']

    def test_out_of_range_index(self, session):
        project = ProjectFactory()
        draft = ScopeDraft(session)
        draft.add(project, {'title': 'A'})

        with pytest.raises(ResourceNotFoundError):
            draft.update(project, 1, {'title': 'x'})
        with pytest.raises(ResourceNotFoundError):
            draft.swap(project, 0, 5)

    def test_one_project_per_session(self, session):
        first = ProjectFactory()
        second = ProjectFactory()
        draft = ScopeDraft(session)
        draft.add(first, {'title': 'A'})

        draft.add(second, {'title': 'B'})

        assert draft.raw()['project_id'] == second.pk
        assert draft.get(first)['milestones'] == []

    def test_clear(self, session):
        project = ProjectFactory()
        draft = ScopeDraft(session)
        draft.add(project, {'title': 'A'})

        draft.clear()

        assert draft.raw() is None


@pytest.mark.django_db
class TestScopeDraftAPI:

    @pytest.fixture
    def scoping(self, consultant_api, awaiting_project):
        consultant_api.post(f'/api/projects/{awaiting_project.pk}/approve/')
        return awaiting_project

    def url(self, project, suffix=''):
        return f'/api/projects/{project.pk}/scope/{suffix}'

    def test_edit_draft(self, consultant_api, scoping):
        consultant_api.post(self.url(scoping, 'milestones/'), {'title': 'A'}, format='json')
        consultant_api.post(self.url(scoping, 'milestones/'), {'title': 'B', 'needed_hours': 10}, format='json')

        response = consultant_api.patch(self.url(scoping, 'milestones/1/'), {'needed_hours': 20}, format='json')
        milestones = response.json()['data']['milestones']
        assert milestones[1]['title'] == 'B'
        assert milestones[1]['needed_hours'] == 20
        assert milestones[1]['index'] == 1

        response = consultant_api.post(self.url(scoping, 'swap/'), {'first': 0, 'second': 1}, format='json')
        assert [m['title'] for m in response.json()['data']['milestones']] == ['B', 'A']

        response = consultant_api.delete(self.url(scoping, 'milestones/0/'))
        assert [m['title'] for m in response.json()['data']['milestones']] == ['A']

    def test_put_replaces_fields(self, consultant_api, scoping):
        consultant_api.post(self.url(scoping, 'milestones/'), {'title': 'A', 'budget': '5.00'}, format='json')

        response = consultant_api.put(self.url(scoping, 'milestones/0/'),
                                      {'title': 'A2', 'budget': '7.50'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        milestone = response.json()['data']['milestones'][0]
        assert milestone['title'] == 'A2'
        assert milestone['budget'] == '7.50'

    def test_put_drops_omitted_fields(self, consultant_api, scoping):
        consultant_api.post(self.url(scoping, 'milestones/'),
                            {'title': 'A', 'budget': '5.00', 'needed_hours': 8}, format='json')

        response = consultant_api.put(self.url(scoping, 'milestones/0/'), {'title': 'A2'}, format='json')

        milestone = response.json()['data']['milestones'][0]
        assert milestone['title'] == 'A2'
        assert 'budget' not in milestone
        assert 'needed_hours' not in milestone

    def test_invalid_milestone(self, consultant_api, scoping):
        response = consultant_api.post(self.url(scoping, 'milestones/'),
                                       {'title': 'A', 'budget': '-1'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['errors'][0]['field'] == 'budget'

    def test_missing_index(self, consultant_api, scoping):
        response = consultant_api.delete(self.url(scoping, 'milestones/3/'))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_draft_belongs_to_consultant(self, client_api, scoping):
        response = client_api.get(self.url(scoping))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_scoping_requires_approval(self, consultant_api, awaiting_project):
        response = consultant_api.post(self.url(awaiting_project, 'milestones/'), {'title': 'A'}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()['meta']['current_state'] == 'WaitingForProposalApproval'

    def test_submit_empty_scope(self, consultant_api, scoping):
        response = consultant_api.post(f'/api/projects/{scoping.pk}/submit-scope/', {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body['error_code'] == 'VALIDATION_ERROR'
        assert body['errors'][0]['field'] == 'milestones'

    def test_draft_drives_dashboard_flow(self, consultant_api, scoping):
        data = consultant_api.get('/api/dashboard/').json()['data']
        assert data['projects_by_state']['ScopingInProgress'] == 1
