"""Create account tables

Revision ID: 0001_create_account_tables
Revises: 
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_create_account_tables'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create carts, users and user_documents"""

    op.create_table('carts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_carts_id', 'carts', ['id'])

    op.create_table('users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('role', sa.Enum('user', 'premium', 'admin', name='userrole'), nullable=False),
        sa.Column('cart_id', sa.Uuid(), nullable=True),
        sa.Column('last_connection', sa.DateTime(), nullable=True),

        # Pending password reset
        sa.Column('reset_token', sa.String(255), nullable=True),
        sa.Column('reset_token_expires_at', sa.DateTime(), nullable=True),

        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['cart_id'], ['carts.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('cart_id')
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_last_connection', 'users', ['last_connection'])
    op.create_index('ix_users_reset_token', 'users', ['reset_token'])

    op.create_table('user_documents',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('reference', sa.String(500), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_user_documents_user_id', 'user_documents', ['user_id'])


def downgrade() -> None:
    """Drop account tables"""

    op.drop_index('ix_user_documents_user_id', table_name='user_documents')
    op.drop_table('user_documents')

    op.drop_index('ix_users_reset_token', table_name='users')
    op.drop_index('ix_users_last_connection', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)

    op.drop_index('ix_carts_id', table_name='carts')
    op.drop_table('carts')
