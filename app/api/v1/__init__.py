# 📄 File: app/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the API, kept separate so a later version can be added without breaking
# existing clients.
# 🧪 Purpose (Technical Summary):
# Route prefixes and OpenAPI tags for the v1 routers.
# 🔗 Dependencies:
# None
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, app.main.py

__api_version__ = "v1"

# Route prefixes for each module
ROUTE_PREFIXES = {
    "auth": "/auth",
}

# OpenAPI tags for each module
API_TAGS = {
    "auth": "Authentication",
}
