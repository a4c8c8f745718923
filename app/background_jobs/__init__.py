# 📄 File: app/background_jobs/__init__.py
# 🧭 Purpose (Layman Explanation):
# Jobs that run on a schedule in the background, such as clearing out old sessions.
# 🧪 Purpose (Technical Summary):
# Celery task package; the Celery application itself lives in celery_config.py.
# 🔗 Dependencies:
# celery
# 🔄 Connected Modules / Calls From:
# celery_config.py (task include list)
