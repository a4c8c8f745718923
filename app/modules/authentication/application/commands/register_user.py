# 📄 File: app/modules/authentication/application/commands/register_user.py
# 🧭 Purpose (Layman Explanation):
# Everything needed to sign up a new account: email, phone, name, location, password
# and whether the account is for a professional or a company.
#
# 🧪 Purpose (Technical Summary):
# Command record for RegisterUserUseCase. Fields stay raw strings; the use case turns
# them into validated value objects so malformed input surfaces as typed domain errors.
#
# 🔗 Dependencies:
# - pydantic for command structure
#
# 🔄 Connected Modules / Calls From:
# - application.use_cases.register_user
# - presentation.api.v1.auth (registration endpoint)

from pydantic import BaseModel, ConfigDict, Field


class RegisterUserCommand(BaseModel):
    """Command for registering a new user account."""

    model_config = ConfigDict(frozen=True)

    email: str = Field(..., description="Email address, normalized by the use case")
    phone: str = Field(..., description="Phone number in international format")
    name: str = Field(..., min_length=1, max_length=200)
    country: str = Field(..., min_length=1, max_length=100)
    city: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., description="Plain-text password, checked against the policy")
    tenant_type: str = Field(..., description="professional or company")

    def __repr__(self) -> str:
        return f"RegisterUserCommand(tenant_type={self.tenant_type!r})"
