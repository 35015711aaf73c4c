"""Initial skills dashboard schema."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "20250301_01_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=None if nullable else sa.text("CURRENT_TIMESTAMP"),
        nullable=nullable,
    )


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.Column("full_name", sa.Text(), nullable=False, server_default=""),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="learner"),
        sa.Column("linkedin_url", sa.Text(), nullable=True),
    )

    op.create_table(
        "skills",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("difficulty_level", sa.String(length=32), nullable=False, server_default="beginner"),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        _timestamp("created_at"),
    )

    op.create_table(
        "user_skills",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("skill_id", sa.String(length=36), sa.ForeignKey("skills.id", ondelete="CASCADE"), nullable=False),
        sa.Column("proficiency_level", sa.Integer(), nullable=False),
        sa.Column("source", sa.String(length=32), nullable=False),
        sa.UniqueConstraint("user_id", "skill_id", name="uq_user_skills_user_skill"),
    )
    op.create_index("ix_user_skills_user", "user_skills", ["user_id"])

    op.create_table(
        "assessments",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("difficulty_level", sa.String(length=32), nullable=False, server_default="beginner"),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="15"),
        _timestamp("created_at"),
    )

    op.create_table(
        "assessment_questions",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column(
            "assessment_id",
            sa.String(length=36),
            sa.ForeignKey("assessments.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("question_type", sa.String(length=32), nullable=False, server_default="multiple_choice"),
        sa.Column("options", sa.JSON(), nullable=False),
        sa.Column("correct_answer", sa.Text(), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False, server_default="10"),
        sa.Column("skill_id", sa.String(length=36), sa.ForeignKey("skills.id", ondelete="SET NULL"), nullable=True),
        sa.Column("order_number", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_assessment_questions_assessment", "assessment_questions", ["assessment_id"])

    op.create_table(
        "user_assessments",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column(
            "assessment_id",
            sa.String(length=36),
            sa.ForeignKey("assessments.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("total_points", sa.Integer(), nullable=False),
        _timestamp("completed_at"),
        sa.Column("time_taken_minutes", sa.Integer(), nullable=True),
    )
    op.create_index("ix_user_assessments_user", "user_assessments", ["user_id"])
    op.create_index("ix_user_assessments_completed", "user_assessments", ["completed_at"])

    op.create_table(
        "learning_resources",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("resource_type", sa.String(length=32), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("provider", sa.String(length=128), nullable=False, server_default=""),
        sa.Column("skill_id", sa.String(length=36), sa.ForeignKey("skills.id", ondelete="SET NULL"), nullable=True),
        sa.Column("difficulty_level", sa.String(length=32), nullable=False, server_default="beginner"),
        sa.Column("duration_hours", sa.Float(), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("is_free", sa.Boolean(), nullable=False, server_default=sa.true()),
        _timestamp("created_at"),
    )

    op.create_table(
        "user_learning_progress",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column(
            "resource_id",
            sa.String(length=36),
            sa.ForeignKey("learning_resources.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="in_progress"),
        sa.Column("progress_percentage", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("started_at"),
        _timestamp("completed_at", nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.UniqueConstraint("user_id", "resource_id", name="uq_learning_progress_user_resource"),
    )
    op.create_index("ix_learning_progress_user", "user_learning_progress", ["user_id"])

    op.create_table(
        "resume_uploads",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("file_name", sa.Text(), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=False),
        sa.Column("parsed_data", sa.JSON(), nullable=False),
        _timestamp("uploaded_at"),
    )
    op.create_index("ix_resume_uploads_user", "resume_uploads", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_resume_uploads_user", table_name="resume_uploads")
    op.drop_table("resume_uploads")
    op.drop_index("ix_learning_progress_user", table_name="user_learning_progress")
    op.drop_table("user_learning_progress")
    op.drop_table("learning_resources")
    op.drop_index("ix_user_assessments_completed", table_name="user_assessments")
    op.drop_index("ix_user_assessments_user", table_name="user_assessments")
    op.drop_table("user_assessments")
    op.drop_index("ix_assessment_questions_assessment", table_name="assessment_questions")
    op.drop_table("assessment_questions")
    op.drop_table("assessments")
    op.drop_index("ix_user_skills_user", table_name="user_skills")
    op.drop_table("user_skills")
    op.drop_table("skills")
    op.drop_table("profiles")
