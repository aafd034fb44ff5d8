"""Assessments table for sleep and mental performance intakes.

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the assessments table."""
    op.create_table(
        "assessments",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("client_id", sa.String(36), nullable=False),
        sa.Column("domain", sa.String(20), nullable=False),
        sa.Column("answers", sa.JSON(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("max_score", sa.Integer(), nullable=False),
        sa.Column("severity_label", sa.String(100), nullable=False),
        sa.Column("phenotype", sa.String(50), nullable=True),
        sa.Column("program_tier", sa.String(50), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("ruleset_version", sa.String(20), nullable=True),
        sa.Column("ruleset_hash", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_assessments"),
    )
    op.create_index("ix_assessments_client_id", "assessments", ["client_id"])
    op.create_index("ix_assessments_domain", "assessments", ["domain"])
    op.create_index("ix_assessments_phenotype", "assessments", ["phenotype"])
    op.create_index("ix_assessments_status", "assessments", ["status"])


def downgrade() -> None:
    """Drop the assessments table."""
    op.drop_index("ix_assessments_status", table_name="assessments")
    op.drop_index("ix_assessments_phenotype", table_name="assessments")
    op.drop_index("ix_assessments_domain", table_name="assessments")
    op.drop_index("ix_assessments_client_id", table_name="assessments")
    op.drop_table("assessments")
