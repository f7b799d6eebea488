"""Initial schema: users (auth and RBAC) and filmografias (catalog).

Revision ID: 20251019000000
Revises:
Create Date: 2025-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20251019000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("username", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False, server_default="editor"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "filmografias",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("tipo", sa.String(length=16), nullable=False, server_default="película"),
        sa.Column("fecha", sa.String(length=64), nullable=False),
        sa.Column("duracion", sa.String(length=64), nullable=True),
        sa.Column("url_poster", sa.String(length=2048), nullable=False),
        sa.Column("titulo", sa.String(length=512), nullable=False),
        sa.Column("titulo_en", sa.String(length=512), nullable=True),
        sa.Column("titulo_cat", sa.String(length=512), nullable=True),
        sa.Column("sinopsis", sa.Text(), nullable=False),
        sa.Column("sinopsis_en", sa.Text(), nullable=True),
        sa.Column("sinopsis_cat", sa.Text(), nullable=True),
        sa.Column("genero", sa.String(length=255), nullable=True),
        sa.Column("genero_en", sa.String(length=255), nullable=True),
        sa.Column("genero_cat", sa.String(length=255), nullable=True),
        sa.Column("director", sa.String(length=512), nullable=True),
        sa.Column("guionistas", sa.Text(), nullable=True),
        sa.Column("reparto", sa.Text(), nullable=True),
        sa.Column("link_imdb", sa.String(length=2048), nullable=True),
        sa.Column("url_youtube", sa.String(length=2048), nullable=True),
        sa.Column("url_making_of", sa.String(length=2048), nullable=True),
        sa.Column("plataformas", sa.Text(), nullable=True),
        sa.Column("created_by_id", sa.String(length=32), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.ForeignKeyConstraint(["created_by_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_filmografias_tipo"), "filmografias", ["tipo"], unique=False)
    op.create_index(
        op.f("ix_filmografias_created_by_id"), "filmografias", ["created_by_id"], unique=False
    )
    op.create_index(
        op.f("ix_filmografias_created_at"), "filmografias", ["created_at"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_filmografias_created_at"), table_name="filmografias")
    op.drop_index(op.f("ix_filmografias_created_by_id"), table_name="filmografias")
    op.drop_index(op.f("ix_filmografias_tipo"), table_name="filmografias")
    op.drop_table("filmografias")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
