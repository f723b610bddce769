"""create_users_and_complaints

Revision ID: c4f1a9e2b7d3
Revises:
Create Date: 2026-10-19 10:00:00.000000

사용자 및 민원 테이블 생성: users, complaints.
Create the users and complaints tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c4f1a9e2b7d3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # users — 사용자 계정 (User, Staff, Admin)
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(100), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), server_default='User', nullable=False),
        sa.Column('department', sa.String(50), nullable=True),
        sa.Column('contact_info', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # complaints — 시설 민원 (Facility complaints)
    # 작성자 삭제 시 CASCADE, 담당자 삭제 시 SET NULL
    op.create_table(
        'complaints',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('submitter_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('assignee_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(20), nullable=False),
        sa.Column('priority', sa.String(20), server_default='Medium', nullable=False),
        sa.Column('location', sa.String(200), nullable=True),
        sa.Column('status', sa.String(20), server_default='Open', nullable=False),
        sa.Column('attachments', sa.String(500), nullable=True),
        sa.Column('resolution_notes', sa.Text(), nullable=True),
        sa.Column('feedback', sa.Text(), nullable=True),
        sa.Column('feedback_rating', sa.Integer(), nullable=True),
        sa.Column('deadline_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('feedback_rating BETWEEN 1 AND 5', name='ck_complaints_feedback_rating'),
    )

    # 민원 인덱스 — Complaint indexes (role scoping, status filter, newest-first ordering)
    op.create_index('ix_complaints_submitter_id', 'complaints', ['submitter_id'])
    op.create_index('ix_complaints_assignee_id', 'complaints', ['assignee_id'])
    op.create_index('ix_complaints_status', 'complaints', ['status'])
    op.create_index('ix_complaints_created_at', 'complaints', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_complaints_created_at', table_name='complaints')
    op.drop_index('ix_complaints_status', table_name='complaints')
    op.drop_index('ix_complaints_assignee_id', table_name='complaints')
    op.drop_index('ix_complaints_submitter_id', table_name='complaints')
    op.drop_table('complaints')
    op.drop_table('users')
