"""
In-process identity provider.

Behaves like the hosted adapter without any network access: addresses and
contract addresses are derived deterministically from their inputs, every
registration succeeds unless the prepared data is empty, and every user id
counts as registered.
"""

import hashlib
import logging
import uuid
from typing import Any, Dict, List

from .base import BaseIdentityProvider, RegistrationError

logger = logging.getLogger(__name__)


def _derive_address(seed: str) -> str:
    return '0x' + hashlib.sha256(seed.encode('utf-8')).hexdigest()[:40]


class MockIdentityProvider(BaseIdentityProvider):
    """Deterministic provider used for development and tests."""

    provider_name = 'mock'
    display_name = 'Mock adapter'

    def check_registered(self, user_id: str) -> bool:
        return bool(user_id)

    def complete_registration(self, prepared_data: Dict[str, Any]) -> Dict[str, Any]:
        if not prepared_data:
            raise RegistrationError("Prepared registration data is empty", status_code=400,
                                    context='complete_registration')
        user_id = str(prepared_data.get('userId') or prepared_data.get('user_id') or uuid.uuid4())
        address = _derive_address(f"user:{user_id}")
        logger.info(f"Mock registration completed for {user_id}")
        return {'user_id': user_id, 'address': address}

    def deploy_project(self, project_data: Dict[str, Any], client_id: Any) -> Dict[str, Any]:
        seed = f"project:{client_id}:{project_data.get('id')}:{project_data.get('title')}"
        contract_address = _derive_address(seed)
        logger.info(f"Mock deployed project contract {contract_address}")
        return {'contract_address': contract_address, 'creation_status': 'created'}

    def propose_scope(self, contract_address, tasks, advance_payment_percentage, document_hash):
        return {'contract_address': contract_address, 'task_count': len(tasks)}

    def approve_scope(self, contract_address: str, approved_task_ids: List[Any]) -> Dict[str, Any]:
        return {'contract_address': contract_address, 'approved': list(approved_task_ids)}

    def reject_scope(self, contract_address: str, client_response: str) -> Dict[str, Any]:
        return {'contract_address': contract_address, 'rejected': True}

    def complete_task(self, contract_address: str, task_id: Any) -> Dict[str, Any]:
        return {'contract_address': contract_address, 'task_id': task_id, 'completed': True}

    def mark_completed(self, contract_address: str, ratings: List[List[Any]]) -> Dict[str, Any]:
        return {'contract_address': contract_address, 'ratings': len(ratings)}
