"""
Accounts API URLs

- /api/auth/...          login, register, me, logout, check-registered
- /api/clients/<id>/     client profile and attachment
- /api/developers/...    developer directory, profile and attachment
"""

from rest_framework.routers import SimpleRouter

from .viewsets import AuthViewSet, ClientViewSet, DeveloperViewSet

app_name = 'accounts'

router = SimpleRouter()
router.register(r'auth', AuthViewSet, basename='auth')
router.register(r'clients', ClientViewSet, basename='client')
router.register(r'developers', DeveloperViewSet, basename='developer')

urlpatterns = router.urls
