"""SQLAlchemy models for registry persistence."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class RegistryUser(Base):
    __tablename__ = "registry_users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[Optional[str]] = mapped_column(String(150), unique=True, nullable=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    display_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    avatar_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, onupdate=_now
    )

    tokens: Mapped[list["RegistryApiToken"]] = relationship(
        "RegistryApiToken",
        back_populates="owner",
        cascade="all, delete-orphan",
    )


class RegistryEntry(Base):
    __tablename__ = "registry_entries"
    __table_args__ = (UniqueConstraint("kind", "name", name="uq_registry_entry_kind_name"),)

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    kind: Mapped[str] = mapped_column(String(16), index=True)
    name: Mapped[str] = mapped_column(String(100))
    categories: Mapped[list[str]] = mapped_column(JSON, default=list)
    primary_owner_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("registry_users.id", ondelete="RESTRICT"),
        index=True,
    )
    default_version_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    keywords: Mapped[list[str]] = mapped_column(JSON, default=list)
    keyword_text: Mapped[str] = mapped_column(Text, default="")
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    homepage: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    repository: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    is_deprecated: Mapped[bool] = mapped_column(Boolean, default=False)
    deprecation_message: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, index=True
    )

    primary_owner: Mapped[RegistryUser] = relationship("RegistryUser")
    owners: Mapped[list["RegistryEntryOwner"]] = relationship(
        "RegistryEntryOwner",
        back_populates="entry",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    versions: Mapped[list["RegistryVersion"]] = relationship(
        "RegistryVersion",
        back_populates="entry",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    audits: Mapped[list["RegistryAudit"]] = relationship(
        "RegistryAudit",
        back_populates="entry",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class RegistryEntryOwner(Base):
    __tablename__ = "registry_entry_owners"

    entry_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("registry_entries.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("registry_users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)

    entry: Mapped[RegistryEntry] = relationship("RegistryEntry", back_populates="owners")
    user: Mapped[RegistryUser] = relationship("RegistryUser")


class RegistryVersion(Base):
    __tablename__ = "registry_versions"
    __table_args__ = (
        UniqueConstraint("entry_id", "version", name="uq_registry_version_entry_version"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    entry_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("registry_entries.id", ondelete="CASCADE"),
        index=True,
    )
    version: Mapped[str] = mapped_column(String(64))
    publisher_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        ForeignKey("registry_users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_stable: Mapped[bool] = mapped_column(Boolean, default=True)
    size: Mapped[int] = mapped_column(BigInteger)
    license: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    authors: Mapped[list[str]] = mapped_column(JSON, default=list)
    readme_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    changelog_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    digest: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    tarball: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    downloads: Mapped[int] = mapped_column(BigInteger, default=0)
    is_yanked: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    yank_message: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    yanked_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    yanked_by_user_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        ForeignKey("registry_users.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)

    entry: Mapped[RegistryEntry] = relationship("RegistryEntry", back_populates="versions")
    publisher: Mapped[Optional[RegistryUser]] = relationship(
        "RegistryUser", foreign_keys=[publisher_id]
    )
    contributors: Mapped[list["RegistryVersionContributor"]] = relationship(
        "RegistryVersionContributor",
        back_populates="version",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class RegistryVersionContributor(Base):
    __tablename__ = "registry_version_contributors"

    version_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("registry_versions.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("registry_users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    entry_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("registry_entries.id", ondelete="CASCADE"),
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)

    version: Mapped[RegistryVersion] = relationship(
        "RegistryVersion", back_populates="contributors"
    )
    user: Mapped[RegistryUser] = relationship("RegistryUser")


class RegistryAudit(Base):
    __tablename__ = "registry_audits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    action: Mapped[str] = mapped_column(String(32), index=True)
    user_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        ForeignKey("registry_users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    entry_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("registry_entries.id", ondelete="CASCADE"),
        index=True,
    )
    version_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("registry_versions.id", ondelete="CASCADE"),
        nullable=True,
    )
    metadata_json: Mapped[Optional[dict[str, object]]] = mapped_column(
        "metadata", JSON, nullable=True
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, index=True
    )

    entry: Mapped[RegistryEntry] = relationship("RegistryEntry", back_populates="audits")
    user: Mapped[Optional[RegistryUser]] = relationship("RegistryUser")


class RegistryApiToken(Base):
    __tablename__ = "registry_api_tokens"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_registry_api_token_name"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("registry_users.id", ondelete="CASCADE"),
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100))
    token_hash: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    revoked: Mapped[bool] = mapped_column(Boolean, default=False)
    revoked_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    last_used_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    owner: Mapped[RegistryUser] = relationship("RegistryUser", back_populates="tokens")
