# 📄 File: app/modules/authentication/application/__init__.py
# 🧭 Purpose (Layman Explanation):
# The "what happens when" layer: one place per action a user can take (sign up,
# verify, log in, refresh, log out) plus the housekeeping jobs.
# 🧪 Purpose (Technical Summary):
# Application layer package: commands (inputs), DTOs (results) and use cases that
# orchestrate entities, repositories and domain services.
# 🔗 Dependencies:
# Domain layer, pydantic
# 🔄 Connected Modules / Calls From:
# container.py, presentation routes, celery maintenance tasks
