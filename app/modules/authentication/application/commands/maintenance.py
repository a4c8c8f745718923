# 📄 File: app/modules/authentication/application/commands/maintenance.py
# 🧭 Purpose (Layman Explanation):
# Inputs for the housekeeping jobs that clean up old sessions and codes and unlock
# accounts whose lock period is over.
# 🧪 Purpose (Technical Summary):
# Command records for the maintenance use cases run by Celery beat or by operators.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# application.use_cases.maintenance, app.background_jobs.tasks.maintenance

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MaintenanceCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    triggered_by: str = "scheduler"


class RevokeExcessSessionsCommand(BaseModel):
    """Bring one user back under the concurrent session cap."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    keep_count: Optional[int] = Field(default=None, ge=0)
