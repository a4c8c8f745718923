# 📄 File: app/modules/authentication/presentation/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# HTTP API of the authentication module.
# 🧪 Purpose (Technical Summary):
# Versioned routers and schemas.
# 🔗 Dependencies:
# FastAPI
# 🔄 Connected Modules / Calls From:
# app/api/v1/router.py
