# 📄 File: app/modules/authentication/presentation/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the authentication endpoints.
# 🧪 Purpose (Technical Summary):
# Exports the auth router for inclusion under /api/v1/auth.
# 🔗 Dependencies:
# FastAPI
# 🔄 Connected Modules / Calls From:
# app/api/v1/router.py

from .auth import auth_router

__all__ = ["auth_router"]
