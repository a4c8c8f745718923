# 📄 File: app/background_jobs/tasks/__init__.py
# 🧭 Purpose (Layman Explanation):
# The individual background jobs.
# 🧪 Purpose (Technical Summary):
# Celery task modules.
# 🔗 Dependencies:
# celery
# 🔄 Connected Modules / Calls From:
# celery_config.py
