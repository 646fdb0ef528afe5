from datetime import timedelta

from celery import Celery
from .core.config import settings

# Create Celery instance
celery_app = Celery(
    "shop_accounts",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=["shop_accounts.tasks"]
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    result_expires=3600,  # 1 hour
    task_routes={
        "shop_accounts.tasks.prune_inactive_users": {"queue": "maintenance"},
    },
    beat_schedule={
        "prune-inactive-users": {
            "task": "shop_accounts.tasks.prune_inactive_users",
            "schedule": timedelta(hours=settings.PRUNE_INTERVAL_HOURS),
        },
    },
    worker_prefetch_multiplier=1,
    task_acks_late=True,
)
