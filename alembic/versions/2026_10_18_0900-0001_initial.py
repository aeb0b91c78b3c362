"""Create users, applications and interview rounds

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('has_application_created', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'applications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('company_name', sa.String(length=100), nullable=False),
        sa.Column('position', sa.String(length=100), nullable=False),
        sa.Column('location', sa.String(length=100), nullable=False),
        sa.Column('application_date', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Applied'),
        sa.Column('application_type', sa.String(length=20), nullable=False),
        sa.Column('source', sa.String(length=100), nullable=False),
        sa.Column('job_link', sa.String(length=500), nullable=False, server_default=''),
        sa.Column('resume_version', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('contact_person', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('contact_email', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('notes', sa.String(length=1000), nullable=False, server_default=''),
        sa.Column('follow_up_date', sa.DateTime(), nullable=True),
        sa.Column('offer_stipend', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('offer_duration', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('offer_start_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_applications_id', 'applications', ['id'])
    op.create_index('ix_applications_user_id', 'applications', ['user_id'])
    op.create_index('ix_applications_user_date', 'applications', ['user_id', 'application_date'])
    op.create_index('ix_applications_user_status', 'applications', ['user_id', 'status'])
    op.create_index('ix_applications_user_company', 'applications', ['user_id', 'company_name'])

    op.create_table(
        'interview_rounds',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('application_id', sa.Uuid(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('round', sa.String(length=100), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('result', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['application_id'], ['applications.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_interview_rounds_id', 'interview_rounds', ['id'])
    op.create_index('ix_interview_rounds_application_id', 'interview_rounds', ['application_id'])


def downgrade() -> None:
    op.drop_index('ix_interview_rounds_application_id', table_name='interview_rounds')
    op.drop_index('ix_interview_rounds_id', table_name='interview_rounds')
    op.drop_table('interview_rounds')

    op.drop_index('ix_applications_user_company', table_name='applications')
    op.drop_index('ix_applications_user_status', table_name='applications')
    op.drop_index('ix_applications_user_date', table_name='applications')
    op.drop_index('ix_applications_user_id', table_name='applications')
    op.drop_index('ix_applications_id', table_name='applications')
    op.drop_table('applications')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
