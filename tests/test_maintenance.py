"""
Tests for the housekeeping use cases and their Celery wiring.
"""

from datetime import timedelta

import pytest

from app.background_jobs.tasks import maintenance as maintenance_tasks
from app.modules.authentication.application.commands import (
    MaintenanceCommand,
    RevokeExcessSessionsCommand,
)
from app.modules.authentication.domain.models import Email
from app.shared.core.exceptions import UseCaseFailedError
from tests.helpers import login_command


class TestCleanupUseCases:
    async def test_cleanup_expired_sessions(self, container, register_and_verify):
        await register_and_verify()
        kept = await container.login_user.execute(login_command(device_id="kept"))
        gone = await container.login_user.execute(login_command(device_id="gone"))
        session = await container.session_repository.find_by_id(gone.session_id)
        session.revoke()
        await container.session_repository.update(session)

        result = await container.cleanup_expired_sessions.execute(MaintenanceCommand())

        assert result.task == "cleanup_expired_sessions"
        assert result.affected == 1
        assert await container.session_repository.find_by_id(gone.session_id) is None
        assert await container.session_repository.find_by_id(kept.session_id) is not None

    async def test_cleanup_expired_verification_codes(self, container, register_and_verify):
        # Verification uses the code and revokes the rest
        await register_and_verify()

        result = await container.cleanup_expired_verification_codes.execute(MaintenanceCommand())

        assert result.affected == 1

    async def test_unlock_expired_lockouts(self, container, register_and_verify):
        user_id = await register_and_verify()
        user = await container.user_repository.find_by_email(Email.create("ana@example.com"))
        user.record_failed_login(max_attempts=1, lock_duration=timedelta(seconds=-1))
        await container.user_repository.update(user)

        result = await container.unlock_expired_lockouts.execute(MaintenanceCommand())

        assert result.affected == 1
        assert result.skipped == 0
        user = await container.user_repository.find_by_id(user_id)
        assert user.locked_until is None
        assert user.failed_login_attempts == 0

    async def test_unlock_skips_concurrently_modified_user(self, container, register_and_verify, monkeypatch):
        await register_and_verify()
        user = await container.user_repository.find_by_email(Email.create("ana@example.com"))
        user.record_failed_login(max_attempts=1, lock_duration=timedelta(seconds=-1))
        await container.user_repository.update(user)

        repository = container.user_repository
        find_locked = repository.find_locked_users_to_unlock

        async def find_then_touch():
            due = await find_locked()
            fresh = await repository.find_by_id(due[0].id)
            fresh.update_profile(city="Sevilla")
            await repository.update(fresh)
            return due

        monkeypatch.setattr(repository, "find_locked_users_to_unlock", find_then_touch)

        result = await container.unlock_expired_lockouts.execute(MaintenanceCommand())

        assert result.affected == 0
        assert result.skipped == 1

    async def test_revoke_excess_sessions(self, container, register_and_verify):
        user_id = await register_and_verify()
        for device in ("d1", "d2", "d3"):
            await container.login_user.execute(login_command(device_id=device))

        result = await container.revoke_excess_sessions.execute(
            RevokeExcessSessionsCommand(user_id=user_id, keep_count=1)
        )

        assert result.affected == 2
        assert await container.session_repository.count_active_by_user_id(user_id) == 1

    async def test_revoke_excess_defaults_to_session_cap(self, container, register_and_verify):
        user_id = await register_and_verify()
        await container.login_user.execute(login_command())

        result = await container.revoke_excess_sessions.execute(RevokeExcessSessionsCommand(user_id=user_id))

        assert result.affected == 0


class TestMaintenanceTasks:
    def test_run_maintenance_returns_result_dict(self, monkeypatch, settings):
        monkeypatch.setattr(maintenance_tasks, "get_settings", lambda: settings)

        result = maintenance_tasks.run_maintenance("cleanup_expired_sessions")

        assert result == {"task": "cleanup_expired_sessions", "affected": 0, "skipped": 0}

    def test_task_retries_on_use_case_failure(self, monkeypatch):
        failure = UseCaseFailedError("MAINTENANCE_FAILED", "Session cleanup failed", RuntimeError("db down"))

        def failing_run(use_case_name, command=None):
            raise failure

        class RetryRequested(Exception):
            pass

        class FakeTask:
            name = "cleanup"

            def retry(self, exc):
                assert exc is failure
                return RetryRequested()

        monkeypatch.setattr(maintenance_tasks, "run_maintenance", failing_run)

        with pytest.raises(RetryRequested):
            maintenance_tasks._run_with_retry(FakeTask(), "cleanup_expired_sessions")

    def test_beat_schedule(self):
        import celery_config

        schedule = celery_config.CeleryConfig.beat_schedule
        tasks = {entry["task"] for entry in schedule.values()}
        assert tasks == {
            f"{maintenance_tasks.TASK_PREFIX}.cleanup_expired_sessions",
            f"{maintenance_tasks.TASK_PREFIX}.cleanup_expired_verification_codes",
            f"{maintenance_tasks.TASK_PREFIX}.unlock_expired_lockouts",
        }
        assert schedule["unlock-expired-lockouts"]["schedule"] == timedelta(minutes=15)
        assert maintenance_tasks.cleanup_expired_sessions.name in tasks