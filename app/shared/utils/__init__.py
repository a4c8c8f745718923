# 📄 File: app/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# Helpful tools other parts of the service use, mainly for writing logs.

# 🧪 Purpose (Technical Summary):
# Utilities package re-exporting the structured logging helpers.

# 🔗 Dependencies:
# - logging: Structured logging utilities

# 🔄 Connected Modules / Calls From:
# Used by: app.main, celery_config, use cases and infrastructure services

from .logging import (
    SecurityLogger,
    get_logger,
    log_context,
    mask_email,
    setup_logging,
)

__all__ = [
    "SecurityLogger",
    "get_logger",
    "log_context",
    "mask_email",
    "setup_logging",
]
