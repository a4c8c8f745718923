# 📄 File: app/modules/authentication/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# The heart of the authentication rules: what users, sessions and codes are and how
# they are allowed to change.
# 🧪 Purpose (Technical Summary):
# Domain layer package: entities, value objects, repository and service interfaces.
# No infrastructure imports allowed here.
# 🔗 Dependencies:
# pydantic, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# Application use cases, infrastructure implementations
