# 📄 File: app/modules/authentication/application/commands/verify_user.py
# 🧭 Purpose (Layman Explanation):
# The 5-digit code the user received by email.
# 🧪 Purpose (Technical Summary):
# Command record for VerifyUserUseCase; verification is keyed by the code alone.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# application.use_cases.verify_user, presentation.api.v1.auth

from pydantic import BaseModel, ConfigDict, Field


class VerifyUserCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="5-digit verification code")
