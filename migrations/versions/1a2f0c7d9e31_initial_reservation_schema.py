"""
Migration: Initial reservation schema

This migration creates:
- users: optional accounts (guests can book without one)
- properties: listings with nightly price, listing type and status
- reservations: booked date ranges with a price snapshot
- blocked_dates: admin-managed ranges that cannot be booked
"""

from alembic import op
import sqlalchemy as sa

# Revision identifiers
revision = '1a2f0c7d9e31'
down_revision = None
branch_labels = None
depends_on = None


LISTING_TYPE = sa.Enum('RENT', 'SALE', name='listingtype')
PROPERTY_STATUS = sa.Enum('AVAILABLE', 'RESERVED', 'RENTED', 'SOLD', 'INACTIVE', name='propertystatus')
RESERVATION_STATUS = sa.Enum('PENDING', 'CONFIRMED', 'CANCELLED', name='reservationstatus')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('is_admin', sa.Boolean(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('listing_type', LISTING_TYPE, nullable=False),
        sa.Column('status', PROPERTY_STATUS, nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'reservations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('guest_name', sa.String(length=100), nullable=True),
        sa.Column('guest_email', sa.String(length=255), nullable=True),
        sa.Column('guest_phone', sa.String(length=20), nullable=True),
        sa.Column('guest_country', sa.String(length=100), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('number_of_guests', sa.Integer(), nullable=True),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('status', RESERVATION_STATUS, nullable=False),
        sa.Column('nights', sa.Integer(), nullable=False),
        sa.Column('price_per_night', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('total_price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reservations_property_id', 'reservations', ['property_id'])
    op.create_index('ix_reservations_user_id', 'reservations', ['user_id'])
    op.create_index('ix_reservations_start_date', 'reservations', ['start_date'])
    op.create_index('ix_reservations_end_date', 'reservations', ['end_date'])
    op.create_index('ix_reservations_status', 'reservations', ['status'])

    op.create_table(
        'blocked_dates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('reason', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_blocked_dates_property_id', 'blocked_dates', ['property_id'])
    op.create_index('ix_blocked_dates_start_date', 'blocked_dates', ['start_date'])
    op.create_index('ix_blocked_dates_end_date', 'blocked_dates', ['end_date'])


def downgrade():
    op.drop_table('blocked_dates')
    op.drop_table('reservations')
    op.drop_table('properties')
    op.drop_table('users')

    # Postgres keeps enum types after their tables are gone
    bind = op.get_bind()
    RESERVATION_STATUS.drop(bind, checkfirst=True)
    PROPERTY_STATUS.drop(bind, checkfirst=True)
    LISTING_TYPE.drop(bind, checkfirst=True)
