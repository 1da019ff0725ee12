"""
API URLs - REST API routing for every app under /api/
"""

from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView
from rest_framework_simplejwt.views import TokenRefreshView, TokenVerifyView

from .views import health_check

urlpatterns = [
    path('health/', health_check, name='health'),
    path('schema/', SpectacularAPIView.as_view(), name='schema'),

    # JWT token maintenance (tokens are issued by /api/auth/login/)
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('auth/token/verify/', TokenVerifyView.as_view(), name='token_verify'),

    path('', include('catalog.api.urls')),
    path('', include('accounts.api.urls')),
    path('', include('projects.api.urls')),
]

"""
API Endpoints Available:

Authentication:
- POST /api/auth/login/ - Log in after the WebAuthn ceremony
- POST /api/auth/register/ - Complete an identity provider registration
- GET /api/auth/me/ - Current user and active role
- POST /api/auth/logout/ - End the session
- GET /api/auth/check-registered/{user_id}/ - Ask the identity provider
- POST /api/auth/token/refresh/ - Refresh access token

Reference data:
- GET /api/enums/ and /api/enums/{budgets,delivery-times,project-types,skills,roles,availability,languages,proficiency}/

Profiles:
- GET/PUT/PATCH /api/clients/{id}/, GET/POST /api/clients/{id}/attachment/
- GET /api/developers/, GET/PUT/PATCH /api/developers/{id}/, GET/POST /api/developers/{id}/attachment/

Projects:
- GET/POST /api/projects/, GET/PUT/PATCH /api/projects/{id}/
- POST /api/projects/{id}/{redeploy,assign-consultant,approve,reject}/
- GET /api/projects/{id}/scope/, POST /api/projects/{id}/scope/milestones/
- PUT/PATCH/DELETE /api/projects/{id}/scope/milestones/{index}/, POST /api/projects/{id}/scope/swap/
- POST /api/projects/{id}/{submit-scope,accept-scope,reject-scope,assign-team}/

Milestones:
- GET /api/milestones/{project_id}/, GET /api/milestones/{project_id}/{id}/
- POST /api/milestones/{project_id}/{id}/{submit,accept,reject,rollback,pay}/
- POST /api/milestones/{project_id}/{id}/{assign,accept-assignment,reject-assignment,comment}/
- GET /api/milestones/{project_id}/{id}/history/
- /api/milestones/{project_id}/{milestone_id}/tasks/ - task CRUD

Payments, votes and dashboard:
- GET /api/payments/, GET /api/payments/{id}/, POST /api/payments/{id}/release/
- GET/POST /api/votes/{project_id}/
- GET /api/dashboard/
- GET /api/health/, GET /api/schema/
"""
