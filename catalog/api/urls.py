"""
Catalog API URLs
"""

from rest_framework.routers import SimpleRouter

from .viewsets import EnumsViewSet

app_name = 'catalog'

router = SimpleRouter()
router.register(r'enums', EnumsViewSet, basename='enums')

urlpatterns = router.urls
