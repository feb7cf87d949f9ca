"""Initial registry schema: users, catalog entries, versions, audits, tokens."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "registry_users",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("email", sa.String(length=150), nullable=True, unique=True),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )
    op.create_index(
        "ix_registry_users_username", "registry_users", ["username"], unique=True
    )

    op.create_table(
        "registry_entries",
        sa.Column("id", sa.String(length=100), primary_key=True),
        sa.Column("kind", sa.String(length=16), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("categories", sa.JSON(), nullable=False),
        sa.Column(
            "primary_owner_id",
            sa.String(length=64),
            sa.ForeignKey("registry_users.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("default_version_id", sa.String(length=36), nullable=True),
        sa.Column("keywords", sa.JSON(), nullable=False),
        sa.Column("keyword_text", sa.Text(), nullable=False, server_default=""),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("homepage", sa.Text(), nullable=True),
        sa.Column("repository", sa.Text(), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_deprecated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deprecation_message", sa.String(length=500), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("kind", "name", name="uq_registry_entry_kind_name"),
    )
    op.create_index("ix_registry_entries_kind", "registry_entries", ["kind"])
    op.create_index(
        "ix_registry_entries_primary_owner_id", "registry_entries", ["primary_owner_id"]
    )
    op.create_index("ix_registry_entries_is_verified", "registry_entries", ["is_verified"])
    op.create_index("ix_registry_entries_updated_at", "registry_entries", ["updated_at"])

    op.create_table(
        "registry_entry_owners",
        sa.Column(
            "entry_id",
            sa.String(length=100),
            sa.ForeignKey("registry_entries.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_id",
            sa.String(length=64),
            sa.ForeignKey("registry_users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        _timestamp("created_at"),
    )
    op.create_index(
        "ix_registry_entry_owners_user_id", "registry_entry_owners", ["user_id"]
    )

    op.create_table(
        "registry_versions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "entry_id",
            sa.String(length=100),
            sa.ForeignKey("registry_entries.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("version", sa.String(length=64), nullable=False),
        sa.Column(
            "publisher_id",
            sa.String(length=64),
            sa.ForeignKey("registry_users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("is_stable", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("size", sa.BigInteger(), nullable=False),
        sa.Column("license", sa.String(length=100), nullable=True),
        sa.Column("authors", sa.JSON(), nullable=False),
        sa.Column("readme_url", sa.Text(), nullable=True),
        sa.Column("changelog_url", sa.Text(), nullable=True),
        sa.Column("digest", sa.String(length=100), nullable=True),
        sa.Column("tarball", sa.String(length=512), nullable=True),
        sa.Column("downloads", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("is_yanked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("yank_message", sa.String(length=200), nullable=True),
        sa.Column("yanked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "yanked_by_user_id",
            sa.String(length=64),
            sa.ForeignKey("registry_users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint(
            "entry_id", "version", name="uq_registry_version_entry_version"
        ),
    )
    op.create_index("ix_registry_versions_entry_id", "registry_versions", ["entry_id"])
    op.create_index(
        "ix_registry_versions_publisher_id", "registry_versions", ["publisher_id"]
    )
    op.create_index("ix_registry_versions_is_yanked", "registry_versions", ["is_yanked"])
    op.create_index("ix_registry_versions_created_at", "registry_versions", ["created_at"])

    op.create_table(
        "registry_version_contributors",
        sa.Column(
            "version_id",
            sa.String(length=36),
            sa.ForeignKey("registry_versions.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_id",
            sa.String(length=64),
            sa.ForeignKey("registry_users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "entry_id",
            sa.String(length=100),
            sa.ForeignKey("registry_entries.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _timestamp("created_at"),
    )
    op.create_index(
        "ix_registry_version_contributors_user_id",
        "registry_version_contributors",
        ["user_id"],
    )
    op.create_index(
        "ix_registry_version_contributors_entry_id",
        "registry_version_contributors",
        ["entry_id"],
    )

    op.create_table(
        "registry_audits",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("action", sa.String(length=32), nullable=False),
        sa.Column(
            "user_id",
            sa.String(length=64),
            sa.ForeignKey("registry_users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "entry_id",
            sa.String(length=100),
            sa.ForeignKey("registry_entries.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "version_id",
            sa.String(length=36),
            sa.ForeignKey("registry_versions.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("metadata", sa.JSON(), nullable=True),
        _timestamp("timestamp"),
    )
    op.create_index("ix_registry_audits_action", "registry_audits", ["action"])
    op.create_index("ix_registry_audits_user_id", "registry_audits", ["user_id"])
    op.create_index("ix_registry_audits_entry_id", "registry_audits", ["entry_id"])
    op.create_index("ix_registry_audits_timestamp", "registry_audits", ["timestamp"])

    op.create_table(
        "registry_api_tokens",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(length=64),
            sa.ForeignKey("registry_users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("token_hash", sa.String(length=64), nullable=False),
        sa.Column("revoked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        _timestamp("created_at"),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("user_id", "name", name="uq_registry_api_token_name"),
    )
    op.create_index("ix_registry_api_tokens_user_id", "registry_api_tokens", ["user_id"])
    op.create_index(
        "ix_registry_api_tokens_token_hash",
        "registry_api_tokens",
        ["token_hash"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index("ix_registry_api_tokens_token_hash", table_name="registry_api_tokens")
    op.drop_index("ix_registry_api_tokens_user_id", table_name="registry_api_tokens")
    op.drop_table("registry_api_tokens")
    op.drop_index("ix_registry_audits_timestamp", table_name="registry_audits")
    op.drop_index("ix_registry_audits_entry_id", table_name="registry_audits")
    op.drop_index("ix_registry_audits_user_id", table_name="registry_audits")
    op.drop_index("ix_registry_audits_action", table_name="registry_audits")
    op.drop_table("registry_audits")
    op.drop_index(
        "ix_registry_version_contributors_entry_id",
        table_name="registry_version_contributors",
    )
    op.drop_index(
        "ix_registry_version_contributors_user_id",
        table_name="registry_version_contributors",
    )
    op.drop_table("registry_version_contributors")
    op.drop_index("ix_registry_versions_created_at", table_name="registry_versions")
    op.drop_index("ix_registry_versions_is_yanked", table_name="registry_versions")
    op.drop_index("ix_registry_versions_publisher_id", table_name="registry_versions")
    op.drop_index("ix_registry_versions_entry_id", table_name="registry_versions")
    op.drop_table("registry_versions")
    op.drop_index("ix_registry_entry_owners_user_id", table_name="registry_entry_owners")
    op.drop_table("registry_entry_owners")
    op.drop_index("ix_registry_entries_updated_at", table_name="registry_entries")
    op.drop_index("ix_registry_entries_is_verified", table_name="registry_entries")
    op.drop_index("ix_registry_entries_primary_owner_id", table_name="registry_entries")
    op.drop_index("ix_registry_entries_kind", table_name="registry_entries")
    op.drop_table("registry_entries")
    op.drop_index("ix_registry_users_username", table_name="registry_users")
    op.drop_table("registry_users")
