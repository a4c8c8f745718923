# 📄 File: app/modules/authentication/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# The concrete machinery behind the authentication rules: where data is stored, how
# passwords are hashed, how tokens are signed and how emails go out.
# 🧪 Purpose (Technical Summary):
# Infrastructure layer package implementing the domain repository and service contracts.
# 🔗 Dependencies:
# SQLAlchemy, passlib, python-jose, httpx
# 🔄 Connected Modules / Calls From:
# container.py
