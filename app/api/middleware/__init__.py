# 📄 File: app/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Helpers that run around every request: request logging and error formatting.
# 🧪 Purpose (Technical Summary):
# Exports the request logging middleware and the exception handler registration.
# 🔗 Dependencies:
# FastAPI, Starlette
# 🔄 Connected Modules / Calls From:
# app.main.py

from .error_handling import register_exception_handlers
from .logging import RequestLoggingMiddleware, get_request_id

__all__ = ["register_exception_handlers", "RequestLoggingMiddleware", "get_request_id"]
