# 📄 File: app/background_jobs/tasks/maintenance.py
# 🧭 Purpose (Layman Explanation):
# Housekeeping jobs for the authentication service: delete ended sessions and old
# verification codes, unlock accounts whose lock time is over, and trim a user's
# sessions back under the limit.
#
# 🧪 Purpose (Technical Summary):
# Celery tasks wrapping the maintenance use cases. Each run builds an AuthContainer from
# settings, executes one use case in a fresh event loop with asyncio.run, and shuts the
# container down. UseCaseFailedError triggers a Celery retry.
#
# 🔗 Dependencies:
# - celery (shared_task)
# - app.modules.authentication.container (build_container)
#
# 🔄 Connected Modules / Calls From:
# - celery_config.py (beat_schedule, task_routes)

import asyncio
import logging
from typing import Any, Dict, Optional

from celery import shared_task

from app.modules.authentication.application.commands import (
    MaintenanceCommand,
    RevokeExcessSessionsCommand,
)
from app.modules.authentication.container import build_container
from app.shared.config.settings import get_settings
from app.shared.core.exceptions import UseCaseFailedError

logger = logging.getLogger(__name__)

TASK_PREFIX = "app.background_jobs.tasks.maintenance"


async def _execute_maintenance(use_case_name: str, command: Any) -> Dict[str, Any]:
    settings = get_settings()
    if settings.STORAGE_BACKEND == "memory":
        logger.warning(f"{use_case_name} running against in-memory storage; nothing is shared with the API")

    container = build_container(settings)
    await container.startup()
    try:
        result = await getattr(container, use_case_name).execute(command)
    finally:
        await container.shutdown()
    return result.model_dump()


def run_maintenance(use_case_name: str, command: Any = None) -> Dict[str, Any]:
    """
    Run one container use case to completion from synchronous worker code.

    Args:
        use_case_name: AuthContainer attribute holding the use case
        command: Command for the use case, defaults to a scheduler MaintenanceCommand

    Returns:
        Dict: The MaintenanceResult as a JSON-serializable dict
    """
    return asyncio.run(_execute_maintenance(use_case_name, command or MaintenanceCommand()))


def _run_with_retry(task, use_case_name: str, command: Any = None) -> Dict[str, Any]:
    try:
        result = run_maintenance(use_case_name, command)
    except UseCaseFailedError as e:
        logger.error(f"Task {task.name} failed: {e.details.get('originalError')}")
        raise task.retry(exc=e)

    logger.info(f"Task {task.name} finished: affected={result['affected']} skipped={result['skipped']}")
    return result


@shared_task(bind=True, name=f"{TASK_PREFIX}.cleanup_expired_sessions", max_retries=3, default_retry_delay=60)
def cleanup_expired_sessions(self) -> Dict[str, Any]:
    """Delete expired and revoked sessions."""
    return _run_with_retry(self, "cleanup_expired_sessions")


@shared_task(bind=True, name=f"{TASK_PREFIX}.cleanup_expired_verification_codes", max_retries=3, default_retry_delay=60)
def cleanup_expired_verification_codes(self) -> Dict[str, Any]:
    """Delete expired and used verification codes."""
    return _run_with_retry(self, "cleanup_expired_verification_codes")


@shared_task(bind=True, name=f"{TASK_PREFIX}.unlock_expired_lockouts", max_retries=3, default_retry_delay=30)
def unlock_expired_lockouts(self) -> Dict[str, Any]:
    """Clear lockouts whose lock time has passed."""
    return _run_with_retry(self, "unlock_expired_lockouts")


@shared_task(bind=True, name=f"{TASK_PREFIX}.revoke_excess_sessions", max_retries=3, default_retry_delay=30)
def revoke_excess_sessions(self, user_id: str, keep_count: Optional[int] = None) -> Dict[str, Any]:
    """Revoke a user's least recently used sessions beyond the cap."""
    command = RevokeExcessSessionsCommand(user_id=user_id, keep_count=keep_count)
    return _run_with_retry(self, "revoke_excess_sessions", command)
