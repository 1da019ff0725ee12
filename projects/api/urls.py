"""
Projects API URLs

- /api/projects/...                                    proposals and scoping
- /api/milestones/<project_id>/<id>/...                milestone delivery
- /api/milestones/<project_id>/<milestone_id>/tasks/   milestone tasks
- /api/payments/...                                    payment summaries
- /api/votes/<project_id>/                             team ratings
- /api/dashboard/
"""

from django.urls import path
from rest_framework.routers import SimpleRouter

from .viewsets import (
    DashboardView,
    MilestoneViewSet,
    PaymentViewSet,
    ProjectViewSet,
    TaskViewSet,
    VoteView,
)

app_name = 'projects'

router = SimpleRouter()
router.register(r'projects', ProjectViewSet, basename='project')
router.register(r'milestones/(?P<project_id>\d+)/(?P<milestone_id>\d+)/tasks', TaskViewSet, basename='task')
router.register(r'milestones/(?P<project_id>\d+)', MilestoneViewSet, basename='milestone')
router.register(r'payments', PaymentViewSet, basename='payment')

urlpatterns = [
    path('votes/<int:project_id>/', VoteView.as_view(), name='votes'),
    path('dashboard/', DashboardView.as_view(), name='dashboard'),
] + router.urls
