"""
Celery configuration for the Abako project.

This module configures Celery for async task processing with:
- Auto-discovery of tasks from all registered Django apps
- Task routing to the adapter queue
- Retry policies for identity provider calls
"""

import os
from celery import Celery
from kombu import Exchange, Queue

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'abako.settings')

app = Celery('abako')

# - namespace='CELERY' means all celery-related configuration keys
#   should have a `CELERY_` prefix.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django apps.
app.autodiscover_tasks()


# ==================== QUEUE CONFIGURATION ====================

default_exchange = Exchange('default', type='direct')
adapter_exchange = Exchange('adapter', type='direct')

app.conf.task_queues = (
    Queue('default', default_exchange, routing_key='default'),
    Queue('adapter', adapter_exchange, routing_key='adapter'),
)

app.conf.task_default_queue = 'default'
app.conf.task_default_exchange = 'default'
app.conf.task_default_routing_key = 'default'


# ==================== TASK ROUTING ====================

app.conf.task_routes = {
    # Calls that reach the identity provider / contract adapter
    'projects.tasks.deploy_project': {'queue': 'adapter', 'routing_key': 'adapter'},
}


# ==================== RETRY CONFIGURATION ====================

app.conf.task_default_retry_delay = 30
app.conf.task_max_retries = 3


# ==================== SERIALIZATION ====================

app.conf.task_serializer = 'json'
app.conf.result_serializer = 'json'
app.conf.accept_content = ['json']
app.conf.timezone = 'UTC'
app.conf.enable_utc = True
