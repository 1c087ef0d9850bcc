"""create voting tables

Revision ID: 5c1e2a9d7b40
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, posts, comments and the vote ledger."""
    op.create_table(
        "forum_user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("karma", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_table(
        "post",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("author_user_id", sa.Integer(), nullable=True),
        sa.Column("anonymous_id", sa.String(length=128), nullable=True),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False),
        sa.Column("downvotes", sa.Integer(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("hot_score", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("upvotes >= 0", name="ck_post_upvotes_non_negative"),
        sa.CheckConstraint("downvotes >= 0", name="ck_post_downvotes_non_negative"),
        sa.ForeignKeyConstraint(["author_user_id"], ["forum_user.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_post_hot_score", "post", ["hot_score", "created_at"])
    op.create_index("ix_post_author_user_id", "post", ["author_user_id"])

    op.create_table(
        "comment",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("author_user_id", sa.Integer(), nullable=True),
        sa.Column("anonymous_id", sa.String(length=128), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False),
        sa.Column("downvotes", sa.Integer(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("upvotes >= 0", name="ck_comment_upvotes_non_negative"),
        sa.CheckConstraint("downvotes >= 0", name="ck_comment_downvotes_non_negative"),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["comment.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_user_id"], ["forum_user.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_comment_post_id", "comment", ["post_id"])
    op.create_index("ix_comment_author_user_id", "comment", ["author_user_id"])

    op.create_table(
        "vote",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("target_kind", sa.String(length=16), nullable=False),
        sa.Column("target_id", sa.Integer(), nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=True),
        sa.Column("comment_id", sa.Integer(), nullable=True),
        sa.Column("voter_kind", sa.String(length=16), nullable=False),
        sa.Column("voter_key", sa.String(length=128), nullable=False),
        sa.Column("voter_user_id", sa.Integer(), nullable=True),
        sa.Column("anonymous_id", sa.String(length=128), nullable=True),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("value IN (1, -1)", name="ck_vote_value"),
        sa.CheckConstraint("target_kind IN ('post', 'comment')", name="ck_vote_target_kind"),
        sa.CheckConstraint("voter_kind IN ('user', 'anonymous')", name="ck_vote_voter_kind"),
        sa.CheckConstraint(
            "(target_kind = 'post' AND post_id IS NOT NULL AND comment_id IS NULL)"
            " OR (target_kind = 'comment' AND comment_id IS NOT NULL AND post_id IS NULL)",
            name="ck_vote_single_target",
        ),
        sa.CheckConstraint(
            "(voter_kind = 'user' AND voter_user_id IS NOT NULL AND anonymous_id IS NULL)"
            " OR (voter_kind = 'anonymous' AND anonymous_id IS NOT NULL AND voter_user_id IS NULL)",
            name="ck_vote_single_voter",
        ),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["comment_id"], ["comment.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["voter_user_id"], ["forum_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "target_kind", "target_id", "voter_kind", "voter_key", name="uq_vote_target_voter"
        ),
    )
    op.create_index("ix_vote_post_id", "vote", ["post_id"])
    op.create_index("ix_vote_comment_id", "vote", ["comment_id"])
    op.create_index("ix_vote_voter_user_id", "vote", ["voter_user_id"])


def downgrade() -> None:
    """Drop the voting schema."""
    op.drop_index("ix_vote_voter_user_id", table_name="vote")
    op.drop_index("ix_vote_comment_id", table_name="vote")
    op.drop_index("ix_vote_post_id", table_name="vote")
    op.drop_table("vote")
    op.drop_index("ix_comment_author_user_id", table_name="comment")
    op.drop_index("ix_comment_post_id", table_name="comment")
    op.drop_table("comment")
    op.drop_index("ix_post_author_user_id", table_name="post")
    op.drop_index("ix_post_hot_score", table_name="post")
    op.drop_table("post")
    op.drop_table("forum_user")
