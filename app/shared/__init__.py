# 📄 File: app/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Common tools every part of the service uses: settings, error types, logging and
# the database connection.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for cross-cutting concerns.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - app.modules.authentication
# - app.api, app.main, celery_config

"""
Shared Kernel

- config: environment-based settings
- core: domain error hierarchy
- infrastructure: async SQLAlchemy connection and repository base
- utils: structured logging
"""

__all__ = []
