"""Initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _ledger_columns():
    return [
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('entry_date', sa.Date(), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('scope', sa.String(10), nullable=False),
        sa.Column('unit_id', sa.String(64), nullable=True),
        sa.Column('recurrence', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['unit_id'], ['units.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    ]


def upgrade() -> None:
    op.create_table(
        'units',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('property_type', sa.String(20), nullable=False),
        sa.Column('location', sa.String(50), nullable=True),
        sa.Column('address', sa.String(500), nullable=False),
        sa.Column('monthly_rent', sa.Float(), nullable=False),
        sa.Column('tenant', sa.JSON(), nullable=False),
        sa.Column('contract_start', sa.Date(), nullable=False),
        sa.Column('contract_end', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    for table in ('expenses', 'incomes'):
        op.create_table(table, *_ledger_columns())
        op.create_index(f'ix_{table}_entry_date', table, ['entry_date'])
        op.create_index(f'ix_{table}_unit_id', table, ['unit_id'])

    op.create_table(
        'tasks',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('priority', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=True),
        sa.Column('scope', sa.String(10), nullable=False),
        sa.Column('unit_id', sa.String(64), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('completed_date', sa.DateTime(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('due_notification_sent', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['unit_id'], ['units.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_tasks_status', 'tasks', ['status'])
    op.create_index('ix_tasks_unit_id', 'tasks', ['unit_id'])
    op.create_index('ix_tasks_due_date', 'tasks', ['due_date'])

    op.create_table(
        'task_reminders',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('task_id', sa.String(64), nullable=False),
        sa.Column('period', sa.String(20), nullable=False),
        sa.Column('days_before', sa.Integer(), nullable=False),
        sa.Column('scheduled_for', sa.DateTime(), nullable=False),
        sa.Column('notification_sent', sa.Boolean(), nullable=True),
        sa.ForeignKeyConstraint(['task_id'], ['tasks.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_task_reminders_task_id', 'task_reminders', ['task_id'])
    op.create_index('ix_task_reminders_scheduled_for', 'task_reminders', ['scheduled_for'])

    op.create_table(
        'documents',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('original_name', sa.String(255), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('mime_type', sa.String(255), nullable=False),
        sa.Column('size', sa.Integer(), nullable=False),
        sa.Column('upload_date', sa.DateTime(), nullable=True),
        sa.Column('scope', sa.String(10), nullable=False),
        sa.Column('unit_id', sa.String(64), nullable=True),
        sa.Column('storage_key', sa.String(500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['unit_id'], ['units.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_documents_unit_id', 'documents', ['unit_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('type', sa.String(30), nullable=False),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('task_id', sa.String(64), nullable=True),
        sa.Column('unit_id', sa.String(64), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_notifications_task_id', 'notifications', ['task_id'])
    op.create_index('ix_notifications_is_read', 'notifications', ['is_read'])
    op.create_index('ix_notifications_created_at', 'notifications', ['created_at'])

    op.create_table(
        'push_subscriptions',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('endpoint', sa.Text(), nullable=False),
        sa.Column('p256dh', sa.String(255), nullable=False),
        sa.Column('auth', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('endpoint')
    )


def downgrade() -> None:
    op.drop_table('push_subscriptions')
    op.drop_index('ix_notifications_created_at', table_name='notifications')
    op.drop_index('ix_notifications_is_read', table_name='notifications')
    op.drop_index('ix_notifications_task_id', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('ix_documents_unit_id', table_name='documents')
    op.drop_table('documents')
    op.drop_index('ix_task_reminders_scheduled_for', table_name='task_reminders')
    op.drop_index('ix_task_reminders_task_id', table_name='task_reminders')
    op.drop_table('task_reminders')
    op.drop_index('ix_tasks_due_date', table_name='tasks')
    op.drop_index('ix_tasks_unit_id', table_name='tasks')
    op.drop_index('ix_tasks_status', table_name='tasks')
    op.drop_table('tasks')
    for table in ('incomes', 'expenses'):
        op.drop_index(f'ix_{table}_unit_id', table_name=table)
        op.drop_index(f'ix_{table}_entry_date', table_name=table)
        op.drop_table(table)
    op.drop_table('units')
