# 📄 File: app/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Holds the settings that tell the service how to behave: token lifetimes, session
# limits, storage and email backends.
#
# 🧪 Purpose (Technical Summary):
# Configuration package exporting the pydantic-settings Settings class and its
# cached accessor.
#
# 🔗 Dependencies:
# - settings.py (application settings)
#
# 🔄 Connected Modules / Calls From:
# - app.main (application startup)
# - container.py, celery_config.py, migrations/env.py

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
