"""Initial migration

Revision ID: 001
Revises:
Create Date: 2024-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum('CUSTOMER', 'MANAGER', 'ADMIN', name='userrole')
user_status = sa.Enum('ACTIVE', 'INACTIVE', 'SUSPENDED', 'DELETED', name='userstatus')
user_origin = sa.Enum('REGISTERED', 'GUEST', name='userorigin')
table_type = sa.Enum('REGULAR', 'BOOTH', 'BAR', 'OUTDOOR', name='tabletype')
table_status = sa.Enum('AVAILABLE', 'OCCUPIED', 'RESERVED', 'MAINTENANCE', name='tablestatus')
reservation_status = sa.Enum(
    'PENDING', 'CONFIRMED', 'SEATED', 'COMPLETED', 'CANCELLED', 'DENIED', 'NO_SHOW',
    name='reservationstatus',
)


def upgrade() -> None:
    # Create users table (registered accounts and provisioned guests)
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), unique=True, nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(255), nullable=False, server_default=''),
        sa.Column('last_name', sa.String(255), nullable=False, server_default=''),
        sa.Column('phone', sa.String(255)),
        sa.Column('role', user_role, nullable=False, server_default='CUSTOMER'),
        sa.Column('status', user_status, nullable=False, server_default='ACTIVE'),
        sa.Column('origin', user_origin, nullable=False, server_default='REGISTERED'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Create restaurant_tables table
    op.create_table(
        'restaurant_tables',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('table_number', sa.String(20), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('table_type', table_type, nullable=False, server_default='REGULAR'),
        sa.Column('status', table_status, nullable=False, server_default='AVAILABLE'),
        sa.Column('location_description', sa.Text()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Create reservations table
    op.create_table(
        'reservations',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('customer_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('table_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurant_tables.id')),
        sa.Column('reservation_datetime', sa.DateTime(timezone=True), nullable=False),
        sa.Column('party_size', sa.Integer(), nullable=False),
        sa.Column('special_requests', sa.Text()),
        sa.Column('status', reservation_status, nullable=False, server_default='PENDING'),
        sa.Column('rejection_reason', sa.Text()),
        sa.Column('approved_by_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Create indexes
    op.create_index('ix_reservations_datetime', 'reservations', ['reservation_datetime'])
    op.create_index('ix_reservations_status', 'reservations', ['status'])

    # At most one live reservation per table and instant
    op.create_index(
        'uq_reservations_live_table_slot',
        'reservations',
        ['table_id', 'reservation_datetime'],
        unique=True,
        postgresql_where=sa.text("status NOT IN ('CANCELLED', 'DENIED')"),
    )


def downgrade() -> None:
    op.drop_index('uq_reservations_live_table_slot', table_name='reservations')
    op.drop_index('ix_reservations_status', table_name='reservations')
    op.drop_index('ix_reservations_datetime', table_name='reservations')
    op.drop_table('reservations')
    op.drop_table('restaurant_tables')
    op.drop_table('users')

    for enum in (reservation_status, table_status, table_type, user_origin, user_status, user_role):
        enum.drop(op.get_bind(), checkfirst=True)
