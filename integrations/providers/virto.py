"""
Virto / SEDA identity provider over HTTP.

Proxies registration, connection and project contract calls to the hosted
adapter at ``settings.BACKEND_API_URL`` (default https://dev.abako.xyz).
"""

import logging
from typing import Any, Dict, List

import requests
from django.conf import settings

from .base import (
    AuthenticationError,
    BaseIdentityProvider,
    ConfigurationError,
    IntegrationError,
    RegistrationError,
)

logger = logging.getLogger(__name__)


class VirtoIdentityProvider(BaseIdentityProvider):
    """HTTP client for the hosted adapter API."""

    provider_name = 'virto'
    display_name = 'Virto adapter'

    contract_version = 'v5'

    ENDPOINTS = {
        'check_registered': '/adapter/v1/auth/check-registered/{user_id}',
        'custom_register': '/adapter/v1/auth/custom-register',
        'deploy': '/adapter/v1/projects/deploy/{version}',
        'propose_scope': '/adapter/v1/projects/{address}/propose_scope',
        'approve_scope': '/adapter/v1/projects/{address}/approve_scope',
        'reject_scope': '/adapter/v1/projects/{address}/reject_scope',
        'complete_task': '/adapter/v1/projects/{address}/complete_task',
        'mark_completed': '/adapter/v1/projects/{address}/mark_completed',
    }

    def __init__(self, base_url: str = None, timeout: int = None, api_key: str = None):
        self.api_base_url = (base_url or settings.BACKEND_API_URL or '').rstrip('/')
        if not self.api_base_url:
            raise ConfigurationError("BACKEND_API_URL is not configured")
        self.request_timeout = timeout or getattr(settings, 'IDENTITY_PROVIDER_TIMEOUT', 30)
        self.api_key = api_key if api_key is not None else getattr(settings, 'IDENTITY_PROVIDER_API_KEY', '')
        self._session = None

    @property
    def session(self) -> requests.Session:
        """Get or create requests session with default configuration."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({
                'User-Agent': f"Abako/{getattr(settings, 'APP_VERSION', '1.0')}",
                'Accept': 'application/json',
                'Content-Type': 'application/json',
            })
            if self.api_key:
                self._session.headers['Authorization'] = f"Bearer {self.api_key}"
        return self._session

    def make_request(self, method: str, endpoint: str, data: Dict = None, context: str = '') -> Dict[str, Any]:
        """
        Call the adapter and return its decoded JSON body.

        Raises:
            AuthenticationError: on 401/403
            IntegrationError: on transport errors, other non-2xx statuses,
                or a body flagged with ``"error": true``
        """
        url = f"{self.api_base_url}/{endpoint.lstrip('/')}"

        try:
            response = self.session.request(
                method=method,
                url=url,
                json=data,
                timeout=self.request_timeout
            )
        except requests.RequestException as e:
            logger.error(f"Adapter request failed ({context}): {e}")
            raise IntegrationError(f"Request failed: {e}", context=context)

        try:
            body = response.json()
        except ValueError:
            body = {}

        message = body.get('message') if isinstance(body, dict) else None

        if response.status_code in (401, 403):
            logger.warning(f"Adapter rejected credentials ({context}): {response.status_code}")
            raise AuthenticationError(message or "Authentication failed",
                                      status_code=response.status_code, context=context)

        if response.status_code >= 400:
            logger.error(f"Adapter error ({context}): {response.status_code} {message or response.text[:200]}")
            raise IntegrationError(message or f"Adapter returned {response.status_code}",
                                   status_code=response.status_code, context=context)

        if isinstance(body, dict) and body.get('error') is True:
            logger.error(f"Adapter reported failure ({context}): {message}")
            raise IntegrationError(message or "Adapter reported an error",
                                   status_code=response.status_code, context=context)

        return body

    # ==================== AUTH ====================

    def check_registered(self, user_id: str) -> bool:
        endpoint = self.ENDPOINTS['check_registered'].format(user_id=user_id)
        body = self.make_request('GET', endpoint, context=f"check_registered({user_id})")
        return bool(body.get('isRegistered', body.get('is_registered', False)))

    def complete_registration(self, prepared_data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            body = self.make_request('POST', self.ENDPOINTS['custom_register'], prepared_data,
                                     context='custom_register')
        except AuthenticationError:
            raise
        except IntegrationError as e:
            raise RegistrationError(str(e), status_code=e.status_code, context=e.context)
        if not body.get('address'):
            raise RegistrationError("Registration response carries no address", context='custom_register')
        return {'address': body['address'], 'user_id': body.get('userId')}

    # ==================== PROJECT CONTRACT ====================

    def deploy_project(self, project_data: Dict[str, Any], client_id: Any) -> Dict[str, Any]:
        endpoint = self.ENDPOINTS['deploy'].format(version=self.contract_version)
        body = self.make_request('POST', endpoint, {**project_data, 'clientId': client_id},
                                 context=f"deploy_project({self.contract_version})")
        contract_address = body.get('contractAddress') or body.get('address') or body.get('projectId')
        if not contract_address:
            raise IntegrationError("Deploy response carries no contract address", context='deploy_project')
        return {'contract_address': contract_address, 'creation_status': body.get('creationStatus')}

    def propose_scope(self, contract_address, tasks, advance_payment_percentage, document_hash):
        endpoint = self.ENDPOINTS['propose_scope'].format(address=contract_address)
        return self.make_request('POST', endpoint, {
            'tasks': tasks,
            'advance_payment_percentage': advance_payment_percentage,
            'document_hash': document_hash,
        }, context=f"propose_scope({contract_address})")

    def approve_scope(self, contract_address: str, approved_task_ids: List[Any]) -> Dict[str, Any]:
        endpoint = self.ENDPOINTS['approve_scope'].format(address=contract_address)
        return self.make_request('POST', endpoint, {'approved_task_ids': approved_task_ids},
                                 context=f"approve_scope({contract_address})")

    def reject_scope(self, contract_address: str, client_response: str) -> Dict[str, Any]:
        endpoint = self.ENDPOINTS['reject_scope'].format(address=contract_address)
        return self.make_request('POST', endpoint, {'clientResponse': client_response},
                                 context=f"reject_scope({contract_address})")

    def complete_task(self, contract_address: str, task_id: Any) -> Dict[str, Any]:
        endpoint = self.ENDPOINTS['complete_task'].format(address=contract_address)
        return self.make_request('POST', endpoint, {'task_id': task_id},
                                 context=f"complete_task({contract_address})")

    def mark_completed(self, contract_address: str, ratings: List[List[Any]]) -> Dict[str, Any]:
        endpoint = self.ENDPOINTS['mark_completed'].format(address=contract_address)
        return self.make_request('POST', endpoint, {'ratings': ratings},
                                 context=f"mark_completed({contract_address})")
