# 📄 File: app/modules/authentication/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# This file defines how users, device sessions and verification codes are stored in the
# database, including the rules the database itself enforces (one account per email,
# one live session per device, unique refresh tokens).
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the authentication aggregates. Uniqueness invariants are
# storage constraints: unique users.email, unique sessions.refresh_token and a partial
# unique index on (user_id, device_id) for active sessions. Every table carries a
# version column used for compare-and-swap updates.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.infrastructure.database.connection (Base)
#
# 🔄 Connected Modules / Calls From:
# - user_repository_impl.py, session_repository_impl.py,
#   verification_code_repository_impl.py
# - DatabaseConnectionManager.create_tables (schema creation)

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.infrastructure.database.connection import Base

ACTIVE_SESSION_CLAUSE = text("status = 'active'")


# =============================================================================
# USER MODEL
# =============================================================================

class UserModel(Base):
    """SQLAlchemy model for user accounts."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(
        String(320),
        unique=True,
        nullable=False,
        index=True,
        comment="Normalized (lowercased) email address",
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    tenant_type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)

    last_login_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    failed_login_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    locked_until: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __table_args__ = (
        Index("ix_users_status_tenant_type", "status", "tenant_type"),
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, status={self.status}, version={self.version})>"


# =============================================================================
# SESSION MODEL
# =============================================================================

class SessionModel(Base):
    """SQLAlchemy model for device sessions."""

    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    device_id: Mapped[str] = mapped_column(String(255), nullable=False)
    device_meta: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    refresh_token: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    last_access_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __table_args__ = (
        Index("ix_sessions_user_id_status", "user_id", "status"),
        Index(
            "uq_sessions_active_device",
            "user_id",
            "device_id",
            unique=True,
            postgresql_where=ACTIVE_SESSION_CLAUSE,
            sqlite_where=ACTIVE_SESSION_CLAUSE,
        ),
    )

    def __repr__(self) -> str:
        return f"<SessionModel(id={self.id}, user_id={self.user_id}, status={self.status})>"


# =============================================================================
# VERIFICATION CODE MODEL
# =============================================================================

class VerificationCodeModel(Base):
    """SQLAlchemy model for email verification codes."""

    __tablename__ = "verification_codes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    code: Mapped[str] = mapped_column(String(5), nullable=False, index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __table_args__ = (
        Index("ix_verification_codes_email_is_used", "email", "is_used"),
    )
