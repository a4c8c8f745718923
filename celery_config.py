# 📄 File: celery_config.py
#
# 🧭 Purpose (Layman Explanation):
# Configuration for the background task system (Celery) that runs the authentication
# service's scheduled housekeeping: clearing old sessions and codes and lifting expired
# account locks.
#
# 🧪 Purpose (Technical Summary):
# Celery configuration for queue routing, beat scheduling and worker behaviour, with
# Redis as message broker and result backend (URLs from application settings).
#
# 🔗 Dependencies:
# - celery, kombu
# - Redis server (message broker)
# - app.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - celery worker / celery beat (-A celery_config)
# - app/background_jobs/tasks/maintenance.py (task definitions)

from datetime import timedelta

from celery import Celery
from kombu import Queue

from app.shared.config.settings import get_settings

settings = get_settings()

MAINTENANCE_TASKS = "app.background_jobs.tasks.maintenance"

# =============================================================================
# CELERY CONFIGURATION CLASS
# =============================================================================


class CeleryConfig:
    """
    Celery configuration for the authentication service.

    Defines all settings for task execution, routing and scheduling.
    """

    # =========================================================================
    # BROKER AND BACKEND SETTINGS
    # =========================================================================

    broker_url = settings.CELERY_BROKER_URL
    result_backend = settings.CELERY_RESULT_BACKEND

    broker_connection_retry_on_startup = True
    broker_connection_max_retries = 10
    broker_heartbeat = 30
    broker_pool_limit = 10

    result_expires = timedelta(hours=24)

    # =========================================================================
    # TASK SETTINGS
    # =========================================================================

    task_serializer = "json"
    result_serializer = "json"
    accept_content = ["json"]
    timezone = "UTC"
    enable_utc = True

    task_default_queue = "default"
    task_default_exchange = "default"
    task_default_exchange_type = "direct"
    task_default_routing_key = "default"

    # Task execution limits
    task_time_limit = 300  # 5 minutes hard limit
    task_soft_time_limit = 240  # 4 minutes soft limit
    task_acks_late = True
    task_reject_on_worker_lost = True
    worker_prefetch_multiplier = 1

    # =========================================================================
    # QUEUE DEFINITIONS
    # =========================================================================

    task_routes = {
        # Lockout release affects users waiting to log in
        f"{MAINTENANCE_TASKS}.unlock_expired_lockouts": {"queue": "high_priority"},
        f"{MAINTENANCE_TASKS}.revoke_excess_sessions": {"queue": "high_priority"},
        f"{MAINTENANCE_TASKS}.*": {"queue": "maintenance"},
    }

    task_queues = (
        Queue("high_priority", routing_key="high_priority"),
        Queue("maintenance", routing_key="maintenance"),
        Queue("default", routing_key="default"),
    )

    # =========================================================================
    # WORKER SETTINGS
    # =========================================================================

    worker_max_tasks_per_child = 1000
    worker_hijack_root_logger = False
    worker_log_format = "[%(asctime)s: %(levelname)s/%(processName)s] %(message)s"
    worker_task_log_format = "[%(asctime)s: %(levelname)s/%(processName)s][%(task_name)s(%(task_id)s)] %(message)s"

    # =========================================================================
    # BEAT SCHEDULER SETTINGS
    # =========================================================================

    beat_schedule = {
        "cleanup-expired-sessions": {
            "task": f"{MAINTENANCE_TASKS}.cleanup_expired_sessions",
            "schedule": timedelta(hours=12),  # Twice daily
            "options": {"queue": "maintenance"},
        },
        "cleanup-expired-verification-codes": {
            "task": f"{MAINTENANCE_TASKS}.cleanup_expired_verification_codes",
            "schedule": timedelta(hours=6),
            "options": {"queue": "maintenance"},
        },
        "unlock-expired-lockouts": {
            "task": f"{MAINTENANCE_TASKS}.unlock_expired_lockouts",
            "schedule": timedelta(minutes=15),
            "options": {"queue": "high_priority"},
        },
    }

    beat_scheduler = "celery.beat:PersistentScheduler"
    beat_schedule_filename = "celerybeat-schedule"

    # =========================================================================
    # MONITORING
    # =========================================================================

    task_track_started = True
    task_send_sent_event = True
    worker_send_task_events = True
    event_serializer = "json"


# =============================================================================
# ENVIRONMENT-SPECIFIC CONFIGURATIONS
# =============================================================================

class DevelopmentCeleryConfig(CeleryConfig):
    """Development-specific Celery configuration."""

    worker_log_color = True


class ProductionCeleryConfig(CeleryConfig):
    """Production-specific Celery configuration."""

    worker_log_color = False
    worker_max_tasks_per_child = 5000

    broker_use_ssl = settings.CELERY_BROKER_URL.startswith("rediss://")
    redis_backend_use_ssl = settings.CELERY_RESULT_BACKEND.startswith("rediss://")


# =============================================================================
# CONFIG FACTORY
# =============================================================================

def get_celery_config() -> CeleryConfig:
    """
    Get the Celery configuration for the current environment.

    Returns:
        CeleryConfig: Configuration instance for current environment
    """
    config_map = {
        "development": DevelopmentCeleryConfig,
        "test": DevelopmentCeleryConfig,
        "staging": ProductionCeleryConfig,
        "production": ProductionCeleryConfig,
    }

    config_class = config_map.get(settings.ENVIRONMENT, DevelopmentCeleryConfig)
    return config_class()


# =============================================================================
# CELERY APPLICATION INSTANCE
# =============================================================================

app = Celery("sigma_auth", include=[MAINTENANCE_TASKS])
app.config_from_object(get_celery_config())
