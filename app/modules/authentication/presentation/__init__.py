# 📄 File: app/modules/authentication/presentation/__init__.py
# 🧭 Purpose (Layman Explanation):
# The web-facing part of the authentication module.
# 🧪 Purpose (Technical Summary):
# FastAPI routers, request/response schemas and dependency providers.
# 🔗 Dependencies:
# FastAPI, pydantic
# 🔄 Connected Modules / Calls From:
# app/api/v1/router.py
