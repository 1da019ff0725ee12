"""
Tests for project and milestone flow state derivation.

Flow states are computed from plain mappings (as kept in session scope
drafts) and from model instances.
"""

import pytest

from projects.flow_states import (
    MilestoneFlow,
    ProjectFlow,
    flow_milestone_state,
    flow_project_state,
)


def project_data(**overrides):
    data = {
        'id': 7,
        'state': 'deployed',
        'consultant_id': 3,
        'creation_error': '',
        'coordinator_approval_status': '',
        'milestones': [],
    }
    data.update(overrides)
    return data


# =============================================================================
# PROJECT FLOW (MAPPINGS)
# =============================================================================

class TestProjectFlowFromMappings:

    def test_creation_error_wins_over_everything(self):
        project = project_data(creation_error='adapter down', state='team_assigned')
        assert flow_project_state(project) == ProjectFlow.CREATION_ERROR

    def test_no_consultant_means_proposal_pending(self):
        project = project_data(consultant_id=None, state='scope_proposed')
        assert flow_project_state(project) == ProjectFlow.PROPOSAL_PENDING

    def test_rejected_by_coordinator(self):
        project = project_data(state='rejected_by_coordinator')
        assert flow_project_state(project) == ProjectFlow.PROPOSAL_REJECTED

    def test_deployed_without_approval_waits_for_consultant(self):
        assert flow_project_state(project_data()) == ProjectFlow.WAITING_FOR_PROPOSAL_APPROVAL

    def test_deployed_and_approved_is_scoping(self):
        project = project_data(coordinator_approval_status='approved')
        assert flow_project_state(project) == ProjectFlow.SCOPING_IN_PROGRESS

    def test_scope_draft_for_the_project_means_scoping(self):
        scope = {'project_id': '7', 'milestones': []}
        assert flow_project_state(project_data(), scope) == ProjectFlow.SCOPING_IN_PROGRESS

    def test_scope_draft_for_another_project_is_ignored(self):
        scope = {'project_id': 99, 'milestones': [{'title': 'x'}]}
        assert flow_project_state(project_data(), scope) == ProjectFlow.WAITING_FOR_PROPOSAL_APPROVAL

    def test_persisted_milestones_mean_scoping(self):
        project = project_data(milestones=[{'id': 3, 'title': 'Contracts', 'state': 'pending'}])
        assert flow_project_state(project) == ProjectFlow.SCOPING_IN_PROGRESS

    def test_unsaved_milestones_are_not_persisted(self):
        project = project_data(milestones=[{'title': 'draft only'}])
        assert flow_project_state(project) == ProjectFlow.WAITING_FOR_PROPOSAL_APPROVAL

    @pytest.mark.parametrize('state,expected', [
        ('scope_proposed', ProjectFlow.SCOPE_VALIDATION_NEEDED),
        ('scope_rejected', ProjectFlow.SCOPE_REJECTED),
        ('scope_accepted', ProjectFlow.WAITING_FOR_TEAM_ASSIGNMENT),
        ('team_assigned', ProjectFlow.PROJECT_IN_PROGRESS),
        ('completed', ProjectFlow.COMPLETED),
        ('payment_released', ProjectFlow.PAYMENT_RELEASED),
    ])
    def test_raw_states_map_directly(self, state, expected):
        assert flow_project_state(project_data(state=state)) == expected

    def test_unknown_state_is_invalid(self):
        assert flow_project_state(project_data(state='exploded')) == ProjectFlow.INVALID

    def test_team_assignment_label_keeps_frontend_spelling(self):
        assert ProjectFlow.WAITING_FOR_TEAM_ASSIGNMENT.value == 'WaitingForTeamAssigment'
        assert ProjectFlow.COMPLETED.value == 'completed'


# =============================================================================
# PROJECT FLOW (MODELS)
# =============================================================================

@pytest.mark.django_db
class TestProjectFlowFromModels:

    def test_project_without_consultant(self, project_factory):
        project = project_factory()
        assert project.flow_state == ProjectFlow.PROPOSAL_PENDING

    def test_waiting_for_approval(self, awaiting_project):
        assert flow_project_state(awaiting_project) == ProjectFlow.WAITING_FOR_PROPOSAL_APPROVAL

    def test_milestones_move_project_to_scoping(self, awaiting_project, milestone_factory):
        milestone_factory(project=awaiting_project, state=None)
        assert flow_project_state(awaiting_project) == ProjectFlow.SCOPING_IN_PROGRESS

    def test_session_scope_moves_project_to_scoping(self, awaiting_project):
        scope = {'project_id': awaiting_project.pk, 'milestones': []}
        assert flow_project_state(awaiting_project, scope) == ProjectFlow.SCOPING_IN_PROGRESS

    def test_failed_deployment(self, project_factory):
        project = project_factory(state='draft', contract_address='',
                                  creation_status='failed', creation_error='timeout')
        assert flow_project_state(project) == ProjectFlow.CREATION_ERROR


# =============================================================================
# MILESTONE FLOW
# =============================================================================

class TestMilestoneFlow:

    @pytest.mark.parametrize('state', [None, ''])
    def test_stateless_milestone_is_being_created(self, state):
        assert flow_milestone_state({'state': state}) == MilestoneFlow.CREATING_MILESTONE

    def test_missing_state_key_is_being_created(self):
        assert flow_milestone_state({'title': 'draft'}) == MilestoneFlow.CREATING_MILESTONE

    @pytest.mark.parametrize('state,expected', [
        ('pending', MilestoneFlow.WAITING_DEVELOPER_ASSIGNATION),
        ('task_in_progress', MilestoneFlow.MILESTONE_IN_PROGRESS),
        ('in_review', MilestoneFlow.WAITING_CLIENT_ACCEPT_SUBMISSION),
        ('completed', MilestoneFlow.MILESTONE_COMPLETED),
        ('rejected', MilestoneFlow.SUBMISSION_REJECTED_BY_CLIENT),
        ('paid', MilestoneFlow.PAID),
    ])
    def test_raw_states_map_directly(self, state, expected):
        assert flow_milestone_state({'state': state}) == expected

    def test_unknown_state_is_invalid(self):
        assert flow_milestone_state({'state': 'lost'}) == MilestoneFlow.INVALID

    def test_awaiting_payment_is_never_derived(self):
        states = [None, 'pending', 'task_in_progress', 'in_review', 'completed', 'rejected', 'paid', 'x']
        derived = {flow_milestone_state({'state': state}) for state in states}
        assert MilestoneFlow.AWAITING_PAYMENT not in derived

    @pytest.mark.django_db
    def test_model_instance(self, milestone_factory):
        milestone = milestone_factory(state='in_review')
        assert milestone.flow_state == MilestoneFlow.WAITING_CLIENT_ACCEPT_SUBMISSION
