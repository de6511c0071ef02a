"""Create users, teachers, evaluations and settings tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Users table: one role per identity
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('role', sa.Enum('SUPERVISOR', 'TEACHER', name='user_role'), nullable=False),
        sa.Column('status', sa.Enum('ACTIVE', 'INACTIVE', name='user_status'), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    # Teacher profiles share their primary key with users
    op.create_table('teachers',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('subject', sa.String(length=100), nullable=True),
        sa.Column('department', sa.String(length=100), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('join_date', sa.Date(), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('experience', sa.String(length=100), nullable=True),
        sa.Column('education', sa.String(length=255), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_teachers_name', 'teachers', ['name'])
    op.create_index('ix_teachers_department', 'teachers', ['department'])

    op.create_table('evaluations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('teacher_id', sa.Integer(), nullable=True),
        sa.Column('evaluator_id', sa.Integer(), nullable=True),
        sa.Column('status', sa.Enum('DRAFT', 'SUBMITTED', name='evaluation_status'), nullable=False),
        sa.Column('sections', sa.JSON(), nullable=False, comment='section -> category key -> {score, notes}'),
        sa.Column('final_notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['teacher_id'], ['teachers.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['evaluator_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_evaluations_teacher_id', 'evaluations', ['teacher_id'])
    op.create_index('ix_evaluations_evaluator_id', 'evaluations', ['evaluator_id'])
    op.create_index('ix_evaluations_status', 'evaluations', ['status'])
    op.create_index('idx_evaluations_created_at', 'evaluations', ['created_at'])

    op.create_table('settings',
        sa.Column('key', sa.String(length=50), nullable=False),
        sa.Column('value', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('key'),
    )


def downgrade():
    # Drop tables in reverse order
    op.drop_table('settings')
    op.drop_table('evaluations')
    op.drop_table('teachers')
    op.drop_table('users')

    # Drop enum types
    op.execute('DROP TYPE IF EXISTS evaluation_status')
    op.execute('DROP TYPE IF EXISTS user_status')
    op.execute('DROP TYPE IF EXISTS user_role')
