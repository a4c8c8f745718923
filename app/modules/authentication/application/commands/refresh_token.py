# 📄 File: app/modules/authentication/application/commands/refresh_token.py
# 🧭 Purpose (Layman Explanation):
# The refresh token a device presents to get a fresh access token.
# 🧪 Purpose (Technical Summary):
# Command record for RefreshTokenUseCase. An empty token is allowed here so the use
# case can answer with TOKEN_NOT_FOUND.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# application.use_cases.refresh_token, presentation.api.v1.auth

from pydantic import BaseModel, ConfigDict


class RefreshTokenCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    refresh_token: str = ""

    def __repr__(self) -> str:
        return "RefreshTokenCommand(refresh_token=[PROTECTED])"
