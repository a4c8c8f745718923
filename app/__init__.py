# 📄 File: app/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'app' folder as the SIGma authentication service and records its version.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version and package metadata.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - main.py (application entry point)
# - Health endpoints (version reporting)

"""
SIGma Auth - Multi-tenant Authentication Service

Registration with email verification, device-scoped sessions with refresh
token rotation, and logout for one device or all of them.
"""

__version__ = "1.0.0"
__title__ = "SIGma Auth API"
__description__ = "Multi-tenant authentication service with device-scoped sessions"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
]
