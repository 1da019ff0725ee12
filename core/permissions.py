"""
Core Permissions - Marketplace role checks and DRF permission classes.

A user acts as a *client* when it owns a Client profile and as a
*developer* when it owns a Developer profile (a consultant is a developer
assigned to a project). Staff users act for the DAO that assigns
consultants and releases milestone payments.

USAGE:
    from core.permissions import check_permission, IsClient

    if not check_permission(request.user, project_client=project, project_consultant=project):
        raise PermissionDenied()

The predicate helpers never raise: a missing profile or a missing id on the
object simply yields ``False``.
"""

import logging
from typing import Any, Optional

from rest_framework import permissions
from rest_framework.request import Request
from rest_framework.views import APIView

from api.exceptions import MissingProfileError

logger = logging.getLogger(__name__)


# =============================================================================
# PROFILE LOOKUPS
# =============================================================================

def _profile_id(user, attr: str) -> Optional[int]:
    if user is None or not getattr(user, 'is_authenticated', False):
        return None
    # A missing reverse one-to-one raises RelatedObjectDoesNotExist (an AttributeError)
    profile = getattr(user, attr, None)
    return getattr(profile, 'pk', None)


def get_client_id(user) -> Optional[int]:
    """Return the id of the user's Client profile, if any."""
    return _profile_id(user, 'client_profile')


def get_developer_id(user) -> Optional[int]:
    """Return the id of the user's Developer profile, if any."""
    return _profile_id(user, 'developer_profile')


# =============================================================================
# PREDICATES
# =============================================================================

def is_client(user) -> bool:
    return get_client_id(user) is not None


def is_developer(user) -> bool:
    return get_developer_id(user) is not None


def is_dao(user) -> bool:
    """Staff users perform the DAO/coordinator duties."""
    return bool(user and getattr(user, 'is_authenticated', False) and user.is_staff)


def is_project_client(user, project) -> bool:
    client_id = get_client_id(user)
    if client_id is None or project is None or project.client_id is None:
        return False
    return project.client_id == client_id


def is_project_consultant(user, project) -> bool:
    developer_id = get_developer_id(user)
    if developer_id is None or project is None or project.consultant_id is None:
        return False
    return project.consultant_id == developer_id


def is_milestone_developer(user, milestone) -> bool:
    developer_id = get_developer_id(user)
    if developer_id is None or milestone is None or milestone.developer_id is None:
        return False
    return milestone.developer_id == developer_id


def check_permission(
    user,
    client: bool = False,
    project_client: Any = None,
    developer: bool = False,
    project_consultant: Any = None,
    milestone_developer: Any = None,
) -> bool:
    """
    Return True when ANY of the requested conditions holds.

    Args:
        client: accept any user with a client profile
        project_client: project whose client may pass
        developer: accept any user with a developer profile
        project_consultant: project whose consultant may pass
        milestone_developer: milestone whose developer may pass
    """
    if client and is_client(user):
        return True
    if project_client is not None and is_project_client(user, project_client):
        return True
    if developer and is_developer(user):
        return True
    if project_consultant is not None and is_project_consultant(user, project_consultant):
        return True
    if milestone_developer is not None and is_milestone_developer(user, milestone_developer):
        return True
    return False


def can_view_project(user, project) -> bool:
    """Clients, consultants, assigned developers and staff can see a project."""
    if is_dao(user):
        return True
    if check_permission(user, project_client=project, project_consultant=project):
        return True
    developer_id = get_developer_id(user)
    if developer_id is None:
        return False
    return project.milestones.filter(developer_id=developer_id).exists()


# =============================================================================
# DRF PERMISSION CLASSES
# =============================================================================

class IsClient(permissions.BasePermission):
    """Only users with a client profile."""

    message = "Only clients can perform this action."

    def has_permission(self, request: Request, view: APIView) -> bool:
        return is_client(request.user)


class HasMarketplaceProfile(permissions.BasePermission):
    """
    Users with a client or developer profile, plus staff.

    A missing profile is a bad request rather than a denial.
    """

    def has_permission(self, request: Request, view: APIView) -> bool:
        user = request.user
        if not (is_dao(user) or is_client(user) or is_developer(user)):
            raise MissingProfileError()
        return True


class IsProjectParticipant(permissions.BasePermission):
    """
    Object-level permission for projects (or objects exposing ``project``).
    """

    message = "You must be a participant to access this project."

    def has_object_permission(self, request: Request, view: APIView, obj: Any) -> bool:
        project = getattr(obj, 'project', obj)
        allowed = can_view_project(request.user, project)
        if not allowed:
            logger.info(
                f"Denied project {project.pk} to user {getattr(request.user, 'pk', None)}"
            )
        return allowed


class IsProfileOwnerOrReadOnly(permissions.BasePermission):
    """Profiles are readable by any authenticated user, writable by the owner."""

    message = "You can only modify your own profile."

    def has_object_permission(self, request: Request, view: APIView, obj: Any) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return True
        return obj.user_id == request.user.pk
