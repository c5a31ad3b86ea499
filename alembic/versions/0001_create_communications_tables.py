"""Create communications tables

Revision ID: 0001_communications
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_communications'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    # The user table belongs to the identity subsystem and must already exist.
    op.create_table(
        'conversation_thread',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user1_id', sa.Integer(), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user2_id', sa.Integer(), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('last_message_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('user1_id', 'user2_id', name='uq_conversation_thread_pair'),
        sa.CheckConstraint('user1_id < user2_id', name='ck_conversation_thread_canonical_pair'),
    )
    op.create_index('ix_conversation_thread_user1_id', 'conversation_thread', ['user1_id'])
    op.create_index('ix_conversation_thread_user2_id', 'conversation_thread', ['user2_id'])
    op.create_index('ix_conversation_thread_last_message_at', 'conversation_thread', ['last_message_at'])

    op.create_table(
        'message',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('thread_id', sa.Integer(), sa.ForeignKey('conversation_thread.id', ondelete='CASCADE'), nullable=False),
        sa.Column('sender_id', sa.Integer(), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('recipient_id', sa.Integer(), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('message_type', sa.String(length=20), nullable=False, server_default='text'),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('attachment_url', sa.String(length=2048), nullable=True),
        sa.Column('attachment_name', sa.String(length=255), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('deleted_by_sender', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('deleted_by_recipient', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_message_thread_id', 'message', ['thread_id'])
    op.create_index('ix_message_sender_id', 'message', ['sender_id'])
    op.create_index('ix_message_recipient_id', 'message', ['recipient_id'])
    op.create_index('ix_message_is_read', 'message', ['is_read'])
    op.create_index('ix_message_created_at', 'message', ['created_at'])

    op.create_table(
        'message_read_status',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('message_id', sa.Integer(), sa.ForeignKey('message.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('message_id', 'user_id', name='uq_message_read_status_message_user'),
    )
    op.create_index('ix_message_read_status_message_id', 'message_read_status', ['message_id'])
    op.create_index('ix_message_read_status_user_id', 'message_read_status', ['user_id'])

    op.create_table(
        'call_log',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('caller_id', sa.Integer(), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('recipient_id', sa.Integer(), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('call_type', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='initiated'),
        sa.Column('duration', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_call_log_caller_id', 'call_log', ['caller_id'])
    op.create_index('ix_call_log_recipient_id', 'call_log', ['recipient_id'])
    op.create_index('ix_call_log_call_type', 'call_log', ['call_type'])
    op.create_index('ix_call_log_status', 'call_log', ['status'])
    op.create_index('ix_call_log_start_time', 'call_log', ['start_time'])

    op.create_table(
        'audit_log',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('actor_id', sa.Integer(), nullable=False),
        sa.Column('action', sa.String(length=50), nullable=False),
        sa.Column('resource_type', sa.String(length=50), nullable=False),
        sa.Column('resource_id', sa.Integer(), nullable=False),
        sa.Column('event_metadata', sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_audit_log_actor_id', 'audit_log', ['actor_id'])
    op.create_index('ix_audit_log_action', 'audit_log', ['action'])


def downgrade() -> None:
    op.drop_table('audit_log')
    op.drop_table('call_log')
    op.drop_table('message_read_status')
    op.drop_table('message')
    op.drop_table('conversation_thread')
