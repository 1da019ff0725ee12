"""
Tests for the Abako accounts app.

This module tests:
1. Registration through the identity provider
2. Login (session + JWT with the active role)
3. Current user, logout and registration lookups
4. Client and developer profiles
5. Profile attachments
"""

from unittest.mock import patch

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework import status
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import Client, Developer, User
from accounts.services import active_role, authenticate_account, issue_tokens, register_account
from api.exceptions import RegistrationFailedError
from conftest import ClientFactory, DeveloperFactory, LanguageFactory, RoleFactory, SkillFactory, UserFactory
from integrations.providers import IntegrationError
from integrations.providers.mock import MockIdentityProvider


REGISTER_URL = '/api/auth/register/'
LOGIN_URL = '/api/auth/login/'


def register_payload(**overrides):
    payload = {
        'email': 'ada@example.com',
        'name': 'Ada',
        'role': 'client',
        'prepared_data': {'userId': 'ada'},
    }
    payload.update(overrides)
    return payload


# =============================================================================
# REGISTRATION
# =============================================================================

@pytest.mark.django_db
class TestRegistration:

    def test_register_client(self, api_client):
        response = api_client.post(REGISTER_URL, register_payload(), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body['success'] is True
        assert body['data']['address'].startswith('0x')
        assert body['data']['user']['role'] == 'client'

        user = User.objects.get(email='ada@example.com')
        assert Client.objects.filter(user=user, name='Ada').exists()
        assert not user.has_usable_password()
        assert user.address == body['data']['address']

    def test_register_second_role_keeps_account(self, api_client):
        api_client.post(REGISTER_URL, register_payload(), format='json')
        response = api_client.post(REGISTER_URL, register_payload(role='developer'), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.filter(email='ada@example.com').count() == 1
        assert Developer.objects.filter(user__email='ada@example.com').exists()

    def test_duplicate_profile_is_refused(self, api_client):
        api_client.post(REGISTER_URL, register_payload(), format='json')
        response = api_client.post(REGISTER_URL, register_payload(), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['error_code'] == 'REGISTRATION_FAILED'

    def test_provider_refusal(self, api_client):
        response = api_client.post(REGISTER_URL, register_payload(prepared_data={}), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['error_code'] == 'REGISTRATION_FAILED'
        assert not User.objects.filter(email='ada@example.com').exists()

    def test_invalid_role(self, api_client):
        response = api_client.post(REGISTER_URL, register_payload(role='admin'), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body['error_code'] == 'VALIDATION_ERROR'
        assert body['errors'][0]['field'] == 'role'

    def test_provider_failure_is_a_registration_failure(self):
        with patch('integrations.providers.mock.MockIdentityProvider.complete_registration',
                   side_effect=IntegrationError('adapter down', status_code=503)):
            with pytest.raises(RegistrationFailedError):
                register_account(email='bob@example.com', name='Bob', role='developer',
                                 prepared_data={'userId': 'bob'})
        assert not User.objects.filter(email='bob@example.com').exists()


# =============================================================================
# LOGIN
# =============================================================================

@pytest.mark.django_db
class TestLogin:

    def test_login_returns_tokens_with_role(self, api_client, client_profile):
        response = api_client.post(LOGIN_URL, {
            'email': client_profile.user.email,
            'token': 'session-token',
            'role': 'client',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        data = response.json()['data']
        assert data['user']['role'] == 'client'
        assert data['user']['client_id'] == client_profile.pk
        assert data['refresh']
        assert AccessToken(data['token'])['role'] == 'client'
        assert api_client.session['role'] == 'client'
        assert api_client.session['identity_token'] == 'session-token'

    def test_login_with_email_in_other_case(self, api_client, client_profile):
        response = api_client.post(LOGIN_URL, {
            'email': client_profile.user.email.upper(),
            'token': 't',
            'role': 'client',
        }, format='json')
        assert response.status_code == status.HTTP_200_OK

    def test_login_without_profile_for_role(self, api_client, client_profile):
        response = api_client.post(LOGIN_URL, {
            'email': client_profile.user.email,
            'token': 't',
            'role': 'developer',
        }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()['error_code'] == 'AUTH_FAILED'

    def test_login_unknown_email(self, api_client):
        response = api_client.post(LOGIN_URL, {
            'email': 'nobody@example.com', 'token': 't', 'role': 'client',
        }, format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_missing_fields(self, api_client):
        response = api_client.post(LOGIN_URL, {'email': 'x@example.com'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body['error_code'] == 'VALIDATION_ERROR'
        assert {error['field'] for error in body['errors']} == {'token', 'role'}

    def test_login_when_provider_is_down(self, api_client, developer):
        with patch('integrations.providers.mock.MockIdentityProvider.check_registered',
                   side_effect=IntegrationError('timeout')):
            response = api_client.post(LOGIN_URL, {
                'email': developer.user.email, 'token': 't', 'role': 'developer',
            }, format='json')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()['error_code'] == 'IDENTITY_PROVIDER_ERROR'

    def test_login_with_unregistered_credential(self, api_client, developer):
        with patch('integrations.providers.mock.MockIdentityProvider.check_registered',
                   return_value=False):
            response = api_client.post(LOGIN_URL, {
                'email': developer.user.email, 'token': 't', 'role': 'developer',
            }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_authenticate_account_checks_provider_by_email(self, developer):
        provider = MockIdentityProvider()

        with patch.object(provider, 'check_registered', return_value=True) as check:
            user = authenticate_account(email=developer.user.email, role='developer', provider=provider)

        assert user == developer.user
        check.assert_called_once_with(developer.user.email)


# =============================================================================
# CURRENT USER
# =============================================================================

@pytest.mark.django_db
class TestCurrentUser:

    def test_me_requires_authentication(self, api_client):
        response = api_client.get('/api/auth/me/')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()['error_code'] == 'AUTH_REQUIRED'

    def test_me_uses_role_claim_of_bearer_token(self, api_client):
        user = UserFactory()
        ClientFactory(user=user)
        DeveloperFactory(user=user)
        tokens = issue_tokens(user, 'developer')

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        response = api_client.get('/api/auth/me/')

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data']['role'] == 'developer'

    def test_me_falls_back_to_first_profile(self, client_api, client_profile):
        response = client_api.get('/api/auth/me/')
        assert response.json()['data']['role'] == 'client'
        assert response.json()['data']['email'] == client_profile.user.email

    def test_active_role_without_profiles(self, rf):
        request = rf.get('/')
        request.user = UserFactory()
        request.session = {}
        assert active_role(request) is None

    def test_logout_ends_session(self, api_client, client_profile):
        api_client.post(LOGIN_URL, {
            'email': client_profile.user.email, 'token': 't', 'role': 'client',
        }, format='json')

        response = api_client.post('/api/auth/logout/')

        assert response.status_code == status.HTTP_200_OK
        assert 'role' not in api_client.session
        assert api_client.get('/api/auth/me/').status_code == status.HTTP_401_UNAUTHORIZED

    def test_check_registered_is_public(self, api_client):
        response = api_client.get('/api/auth/check-registered/ada@example.com/')

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data'] == {'user_id': 'ada@example.com', 'is_registered': True}

    def test_jwt_refresh(self, api_client, client_profile):
        tokens = issue_tokens(client_profile.user, 'client')
        response = api_client.post('/api/auth/token/refresh/', {'refresh': tokens['refresh']}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.json()


# =============================================================================
# PROFILES
# =============================================================================

@pytest.mark.django_db
class TestProfiles:

    def test_any_user_reads_client_profile(self, developer_api, client_profile):
        response = developer_api.get(f'/api/clients/{client_profile.pk}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data']['email'] == client_profile.user.email

    def test_owner_updates_client_profile(self, client_api, client_profile):
        LanguageFactory(code='ENG', name='English')

        response = client_api.patch(f'/api/clients/{client_profile.pk}/', {
            'company': 'Abako Labs',
            'languages': ['ENG'],
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        client_profile.refresh_from_db()
        assert client_profile.company == 'Abako Labs'
        assert list(client_profile.languages.values_list('code', flat=True)) == ['ENG']

    def test_other_user_cannot_update_profile(self, developer_api, client_profile):
        response = developer_api.patch(f'/api/clients/{client_profile.pk}/', {'company': 'x'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()['error_code'] == 'FORBIDDEN'

    def test_developer_directory_filters_by_role(self, client_api, developer, consultant):
        response = client_api.get(f'/api/developers/?role={developer.role_id}')

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert [item['id'] for item in body['data']] == [developer.pk]
        assert body['meta']['pagination']['count'] == 1

    def test_developer_updates_skills_by_name(self, developer_api, developer):
        SkillFactory(name='Rust')
        SkillFactory(name='Node')
        role = RoleFactory(name='Full Stack')

        response = developer_api.patch(f'/api/developers/{developer.pk}/', {
            'skills': ['Rust', 'Node'],
            'role': role.pk,
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        data = response.json()['data']
        assert sorted(data['skills']) == ['Node', 'Rust']
        assert data['role_name'] == 'Full Stack'

    def test_unknown_skill_is_rejected(self, developer_api, developer):
        response = developer_api.patch(f'/api/developers/{developer.pk}/', {'skills': ['COBOL']}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# ATTACHMENTS
# =============================================================================

@pytest.mark.django_db
class TestAttachments:

    def upload(self, api, developer, content=b'png-bytes', name='avatar.png'):
        return api.post(
            f'/api/developers/{developer.pk}/attachment/',
            {'file': SimpleUploadedFile(name, content, content_type='image/png')},
            format='multipart',
        )

    def test_upload_and_download(self, developer_api, developer, client_api):
        response = self.upload(developer_api, developer)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()['data']['mime'] == 'image/png'
        assert response.json()['data']['size'] == len(b'png-bytes')

        download = client_api.get(f'/api/developers/{developer.pk}/attachment/')
        assert download.status_code == status.HTTP_200_OK
        assert download['Content-Type'] == 'image/png'
        assert b''.join(download.streaming_content) == b'png-bytes'

    def test_profile_exposes_attachment_url(self, developer_api, developer):
        self.upload(developer_api, developer)
        data = developer_api.get(f'/api/developers/{developer.pk}/').json()['data']
        assert data['attachment_url'].endswith(f'/api/developers/{developer.pk}/attachment/')

    def test_download_without_attachment(self, client_api, developer):
        response = client_api.get(f'/api/developers/{developer.pk}/attachment/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()['error_code'] == 'NOT_FOUND'

    def test_upload_requires_file(self, developer_api, developer):
        response = developer_api.post(f'/api/developers/{developer.pk}/attachment/', {}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['error_code'] == 'VALIDATION_ERROR'

    def test_upload_too_large(self, developer_api, developer, settings):
        settings.ABAKO_MAX_ATTACHMENT_SIZE = 4
        response = self.upload(developer_api, developer, content=b'12345')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['errors'][0]['field'] == 'file'

    def test_only_owner_uploads(self, client_api, developer):
        response = self.upload(client_api, developer)
        assert response.status_code == status.HTTP_403_FORBIDDEN
