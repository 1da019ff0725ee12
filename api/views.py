"""
API Views - service-level endpoints that belong to no app.
"""

import logging
import time

from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Health check endpoint for load balancers and monitoring.

    GET /api/health/ -> 200 when healthy, 503 when the database is unreachable
    """
    health_status = {
        'status': 'healthy',
        'timestamp': time.time(),
        'version': getattr(settings, 'APP_VERSION', '1.0.0'),
        'identity_provider': getattr(settings, 'IDENTITY_PROVIDER', 'mock'),
    }

    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        health_status['database'] = 'connected'
    except DatabaseError as e:
        logger.error(f"Health check database failure: {e}")
        health_status['database'] = 'error'
        health_status['status'] = 'degraded'

    cache.set('health_check', 'ok', 1)
    health_status['cache'] = 'connected' if cache.get('health_check') == 'ok' else 'error'

    status_code = 200 if health_status['status'] == 'healthy' else 503
    return JsonResponse(health_status, status=status_code)
