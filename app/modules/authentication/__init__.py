# 📄 File: app/modules/authentication/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the authentication system: signing up, confirming the email, logging in from
# several devices, refreshing access and logging out.
# 🧪 Purpose (Technical Summary):
# Package initialization for the authentication module, laid out in domain-driven layers
# (domain, application, infrastructure, presentation) wired by container.py.
# 🔗 Dependencies:
# FastAPI, pydantic, SQLAlchemy, passlib, python-jose, httpx
# 🔄 Connected Modules / Calls From:
# app.main, celery_config, API v1 router

"""
Authentication Module

Architecture follows Domain-Driven Design:
- Domain: User, Session and VerificationCode entities, value objects,
  repository and service contracts
- Application: one use case per business transaction
- Infrastructure: in-memory and SQLAlchemy repositories, argon2 hashing,
  JWT tokens, email backends
- Presentation: FastAPI routes and request/response schemas
"""

__version__ = "1.0.0"
__module_name__ = "authentication"
