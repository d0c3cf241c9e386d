"""Initial schema with all core tables.

Revision ID: 001
Revises:
Create Date: 2024-01-01 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Create initial database schema."""

    # Doctors
    op.create_table(
        "doctors",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, default=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_doctors"),
    )
    op.create_index("ix_doctors_email", "doctors", ["email"], unique=True)

    # Respondents (public portal accounts)
    op.create_table(
        "respondents",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("patient_name", sa.String(255), nullable=False),
        sa.Column("patient_age", sa.Integer(), nullable=True),
        sa.Column("patient_gender", sa.String(20), nullable=True),
        sa.Column("caregiver_name", sa.String(255), nullable=True),
        sa.Column("caregiver_relation", sa.String(100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_respondents"),
    )
    op.create_index("ix_respondents_email", "respondents", ["email"], unique=True)

    # Patients
    op.create_table(
        "patients",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("doctor_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("gender", sa.String(20), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("diagnosis", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_patients"),
        sa.ForeignKeyConstraint(
            ["doctor_id"],
            ["doctors.id"],
            name="fk_patients_doctor_id_doctors",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_patients_doctor_id", "patients", ["doctor_id"])

    # Caregivers
    op.create_table(
        "caregivers",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("doctor_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("patient_id", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("relationship_to_patient", sa.String(100), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_caregivers"),
        sa.ForeignKeyConstraint(
            ["doctor_id"],
            ["doctors.id"],
            name="fk_caregivers_doctor_id_doctors",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["patient_id"],
            ["patients.id"],
            name="fk_caregivers_patient_id_patients",
            ondelete="SET NULL",
        ),
    )
    op.create_index("ix_caregivers_doctor_id", "caregivers", ["doctor_id"])
    op.create_index("ix_caregivers_patient_id", "caregivers", ["patient_id"])

    # Questionnaire templates
    op.create_table(
        "questionnaire_templates",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("doctor_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("audience", sa.String(20), nullable=False),
        sa.Column("questions", sa.JSON(), nullable=False),
        sa.Column("result_tiers", sa.JSON(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False, default=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_questionnaire_templates"),
        sa.ForeignKeyConstraint(
            ["doctor_id"],
            ["doctors.id"],
            name="fk_questionnaire_templates_doctor_id_doctors",
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        "ix_questionnaire_templates_doctor_id", "questionnaire_templates", ["doctor_id"]
    )

    # Doctor-administered screening results
    op.create_table(
        "screening_results",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("doctor_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("patient_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("template_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("answers", sa.JSON(), nullable=False),
        sa.Column("total_score", sa.Float(), nullable=False),
        sa.Column("result_label", sa.String(255), nullable=True),
        sa.Column("recommendation", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_screening_results"),
        sa.ForeignKeyConstraint(
            ["doctor_id"],
            ["doctors.id"],
            name="fk_screening_results_doctor_id_doctors",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["patient_id"],
            ["patients.id"],
            name="fk_screening_results_patient_id_patients",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["template_id"],
            ["questionnaire_templates.id"],
            name="fk_screening_results_template_id_questionnaire_templates",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_screening_results_doctor_id", "screening_results", ["doctor_id"])
    op.create_index("ix_screening_results_patient_id", "screening_results", ["patient_id"])

    # Respondent portal submissions
    op.create_table(
        "respondent_submissions",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("respondent_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("template_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("fill_as", sa.String(20), nullable=False),
        sa.Column("answers", sa.JSON(), nullable=False),
        sa.Column("total_score", sa.Float(), nullable=False),
        sa.Column("result_label", sa.String(255), nullable=True),
        sa.Column("recommendation", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_respondent_submissions"),
        sa.ForeignKeyConstraint(
            ["respondent_id"],
            ["respondents.id"],
            name="fk_respondent_submissions_respondent_id_respondents",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["template_id"],
            ["questionnaire_templates.id"],
            name="fk_respondent_submissions_template_id_questionnaire_templates",
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        "ix_respondent_submissions_respondent_id", "respondent_submissions", ["respondent_id"]
    )

    # Calorie calculations (exactly one of patient_id / caregiver_id)
    op.create_table(
        "calorie_calculations",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("doctor_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("patient_id", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column("caregiver_id", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column("gender", sa.String(20), nullable=False),
        sa.Column("height_cm", sa.Float(), nullable=False),
        sa.Column("weight_kg", sa.Float(), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("activity_level", sa.String(20), nullable=False),
        sa.Column("result", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_calorie_calculations"),
        sa.CheckConstraint(
            "(patient_id IS NULL) <> (caregiver_id IS NULL)",
            name="ck_calorie_calculations_single_target",
        ),
        sa.ForeignKeyConstraint(
            ["doctor_id"],
            ["doctors.id"],
            name="fk_calorie_calculations_doctor_id_doctors",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["patient_id"],
            ["patients.id"],
            name="fk_calorie_calculations_patient_id_patients",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["caregiver_id"],
            ["caregivers.id"],
            name="fk_calorie_calculations_caregiver_id_caregivers",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_calorie_calculations_doctor_id", "calorie_calculations", ["doctor_id"])
    op.create_index("ix_calorie_calculations_patient_id", "calorie_calculations", ["patient_id"])
    op.create_index(
        "ix_calorie_calculations_caregiver_id", "calorie_calculations", ["caregiver_id"]
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("calorie_calculations")
    op.drop_table("respondent_submissions")
    op.drop_table("screening_results")
    op.drop_table("questionnaire_templates")
    op.drop_table("caregivers")
    op.drop_table("patients")
    op.drop_table("respondents")
    op.drop_table("doctors")
