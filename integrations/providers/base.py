"""
Base Identity Provider

Abstract base class for the identity provider / contract adapter that backs
account registration (WebAuthn through the SEDA/Virto service) and mirrors
the project lifecycle on chain.

Two implementations ship with the project:
- MockIdentityProvider: deterministic, in-process (development and tests)
- VirtoIdentityProvider: HTTP proxy to ``settings.BACKEND_API_URL``
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class IntegrationError(Exception):
    """Base exception for identity provider errors."""

    def __init__(self, message, status_code=None, context=''):
        super().__init__(message)
        self.status_code = status_code
        self.context = context


class AuthenticationError(IntegrationError):
    """Raised when the provider rejects credentials or a session token."""
    pass


class RegistrationError(IntegrationError):
    """Raised when the provider refuses to complete a registration."""
    pass


class ConfigurationError(IntegrationError):
    """Raised when the provider is misconfigured."""
    pass


class BaseIdentityProvider(ABC):
    """
    Abstract base class for identity providers.

    Subclasses must implement the auth calls (registration, connection,
    registration lookup) and the project contract calls used by the
    project lifecycle.
    """

    # Provider identification - override in subclasses
    provider_name: str = ''
    display_name: str = ''

    # ==================== AUTH ====================

    @abstractmethod
    def check_registered(self, user_id: str) -> bool:
        """Return True when ``user_id`` has a registered credential."""

    @abstractmethod
    def complete_registration(self, prepared_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Complete a WebAuthn registration prepared by the browser.

        Returns:
            Dictionary with at least ``address`` (the on-chain account)
        """

    # ==================== PROJECT CONTRACT ====================

    @abstractmethod
    def deploy_project(self, project_data: Dict[str, Any], client_id: Any) -> Dict[str, Any]:
        """
        Deploy the contract backing a new project proposal.

        Returns:
            Dictionary with ``contract_address``
        """

    @abstractmethod
    def propose_scope(
        self,
        contract_address: str,
        tasks: List[Dict[str, Any]],
        advance_payment_percentage: int,
        document_hash: str,
    ) -> Dict[str, Any]:
        """Publish the consultant's milestones for client validation."""

    @abstractmethod
    def approve_scope(self, contract_address: str, approved_task_ids: List[Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def reject_scope(self, contract_address: str, client_response: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def complete_task(self, contract_address: str, task_id: Any) -> Dict[str, Any]:
        pass

    @abstractmethod
    def mark_completed(self, contract_address: str, ratings: List[List[Any]]) -> Dict[str, Any]:
        """Close the project with ``[[user_id, score], ...]`` ratings."""
