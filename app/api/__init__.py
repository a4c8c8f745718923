# 📄 File: app/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# The web layer shared by every module: middleware, error handling and the versioned
# route collections.
# 🧪 Purpose (Technical Summary):
# Package initialization for the API layer.
# 🔗 Dependencies:
# None (package initialization)
# 🔄 Connected Modules / Calls From:
# app.main.py

"""
API Package

Structure:
    api/
    ├── middleware/
    │   ├── logging.py         # Request logging and X-Request-ID
    │   └── error_handling.py  # Exception handlers
    └── v1/
        ├── router.py          # Main v1 router
        └── health.py          # Health check endpoints
"""
