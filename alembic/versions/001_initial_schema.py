"""initial schema

Revision ID: 001
Revises: 
Create Date: 2026-10-18 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MONEY = sa.Numeric(precision=18, scale=2)


def base_columns():
    """Columns shared by every entity table."""
    return [
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    ]


def create_entity_table(name, *columns):
    op.create_table(name, *base_columns(), *columns, sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f(f'ix_{name}_is_deleted'), name, ['is_deleted'], unique=False)


def upgrade() -> None:
    create_entity_table(
        'companies',
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.String(length=2000), nullable=False),
        sa.Column('license', sa.String(length=100), nullable=False),
        sa.Column('logo_url', sa.String(length=500), nullable=True),
        sa.Column('contact_email', sa.String(length=255), nullable=False),
        sa.Column('contact_phone', sa.String(length=32), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('website', sa.String(length=500), nullable=True),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('average_rating', sa.Numeric(precision=3, scale=2), nullable=False),
        sa.Column('total_reviews', sa.Integer(), nullable=False),
    )
    op.create_index(op.f('ix_companies_name'), 'companies', ['name'], unique=False)

    create_entity_table(
        'users',
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('phone_number', sa.String(length=32), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('role', sa.Enum('CUSTOMER', 'COMPANY', 'ADMIN', name='userrole'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_email_verified', sa.Boolean(), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('company_id', sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_company_id'), 'users', ['company_id'], unique=False)

    create_entity_table(
        'refresh_tokens',
        sa.Column('token', sa.String(length=512), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_revoked', sa.Boolean(), nullable=False),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('revoked_by_ip', sa.String(length=64), nullable=True),
        sa.Column('replaced_by_token', sa.String(length=512), nullable=True),
        sa.Column('created_by_ip', sa.String(length=64), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
    )
    op.create_index(op.f('ix_refresh_tokens_token'), 'refresh_tokens', ['token'], unique=True)
    op.create_index(op.f('ix_refresh_tokens_user_id'), 'refresh_tokens', ['user_id'], unique=False)

    create_entity_table(
        'user_alerts',
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('departure_airport_code', sa.String(length=3), nullable=True),
        sa.Column('arrival_airport_code', sa.String(length=3), nullable=True),
        sa.Column('departure_date_from', sa.DateTime(timezone=True), nullable=True),
        sa.Column('departure_date_to', sa.DateTime(timezone=True), nullable=True),
        sa.Column('min_passengers', sa.Integer(), nullable=True),
        sa.Column('max_price', MONEY, nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('email_notifications', sa.Boolean(), nullable=False),
        sa.Column('push_notifications', sa.Boolean(), nullable=False),
        sa.Column('sms_notifications', sa.Boolean(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
    )
    op.create_index(op.f('ix_user_alerts_user_id'), 'user_alerts', ['user_id'], unique=False)

    create_entity_table(
        'aircraft',
        sa.Column('model', sa.String(length=100), nullable=False),
        sa.Column('manufacturer', sa.String(length=100), nullable=False),
        sa.Column('registration', sa.String(length=20), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('type', sa.Enum(
            'TURBOPROP', 'VERY_LIGHT_JET', 'LIGHT_JET', 'MID_JET', 'HEAVY_JET', 'HELICOPTER',
            name='aircrafttype'
        ), nullable=False),
        sa.Column('year_manufactured', sa.Integer(), nullable=False),
        sa.Column('description', sa.String(length=2000), nullable=False),
        sa.Column('cruise_speed', sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column('range', sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('amenities', sa.JSON(), nullable=True),
        sa.Column('photo_urls', sa.JSON(), nullable=True),
        sa.Column('company_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ),
    )
    op.create_index(op.f('ix_aircraft_registration'), 'aircraft', ['registration'], unique=True)
    op.create_index(op.f('ix_aircraft_company_id'), 'aircraft', ['company_id'], unique=False)

    create_entity_table(
        'airports',
        sa.Column('iata_code', sa.String(length=3), nullable=False),
        sa.Column('icao_code', sa.String(length=4), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('latitude', sa.Numeric(precision=10, scale=7), nullable=False),
        sa.Column('longitude', sa.Numeric(precision=10, scale=7), nullable=False),
        sa.Column('time_zone', sa.String(length=64), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
    )
    op.create_index(op.f('ix_airports_iata_code'), 'airports', ['iata_code'], unique=True)
    op.create_index(op.f('ix_airports_icao_code'), 'airports', ['icao_code'], unique=False)
    op.create_index(op.f('ix_airports_city'), 'airports', ['city'], unique=False)
    op.create_index(op.f('ix_airports_country'), 'airports', ['country'], unique=False)

    create_entity_table(
        'flights',
        sa.Column('flight_number', sa.String(length=20), nullable=False),
        sa.Column('departure_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('arrival_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('base_price', MONEY, nullable=False),
        sa.Column('current_price', MONEY, nullable=False),
        sa.Column('minimum_price', MONEY, nullable=True),
        sa.Column('available_seats', sa.Integer(), nullable=False),
        sa.Column('total_seats', sa.Integer(), nullable=False),
        sa.Column('status', sa.Enum(
            'AVAILABLE', 'RESERVED', 'CONFIRMED', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED',
            name='flightstatus'
        ), nullable=False),
        sa.Column('description', sa.String(length=2000), nullable=True),
        sa.Column('special_instructions', sa.String(length=1000), nullable=True),
        sa.Column('allows_automatic_pricing', sa.Boolean(), nullable=False),
        sa.Column('departure_airport_id', sa.Uuid(), nullable=False),
        sa.Column('arrival_airport_id', sa.Uuid(), nullable=False),
        sa.Column('aircraft_id', sa.Uuid(), nullable=False),
        sa.Column('company_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['departure_airport_id'], ['airports.id'], ),
        sa.ForeignKeyConstraint(['arrival_airport_id'], ['airports.id'], ),
        sa.ForeignKeyConstraint(['aircraft_id'], ['aircraft.id'], ),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ),
    )
    for column in ('flight_number', 'departure_time', 'current_price', 'status',
                   'departure_airport_id', 'arrival_airport_id', 'aircraft_id', 'company_id'):
        op.create_index(op.f(f'ix_flights_{column}'), 'flights', [column], unique=False)

    create_entity_table(
        'reviews',
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('comment', sa.String(length=2000), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('is_visible', sa.Boolean(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('flight_id', sa.Uuid(), nullable=True),
        sa.Column('company_id', sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.ForeignKeyConstraint(['flight_id'], ['flights.id'], ),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_reviews_rating'),
    )
    for column in ('user_id', 'flight_id', 'company_id'):
        op.create_index(op.f(f'ix_reviews_{column}'), 'reviews', [column], unique=False)

    create_entity_table(
        'bookings',
        sa.Column('booking_reference', sa.String(length=10), nullable=False),
        sa.Column('status', sa.Enum(
            'PENDING', 'CONFIRMED', 'PAYMENT_PENDING', 'PAYMENT_CONFIRMED', 'CANCELLED', 'REFUNDED', 'COMPLETED',
            name='bookingstatus'
        ), nullable=False),
        sa.Column('passenger_count', sa.Integer(), nullable=False),
        sa.Column('total_price', MONEY, nullable=False),
        sa.Column('service_fees', MONEY, nullable=False),
        sa.Column('booking_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('special_requests', sa.String(length=1000), nullable=True),
        sa.Column('cancellation_reason', sa.String(length=500), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('flight_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['flight_id'], ['flights.id'], ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
    )
    op.create_index(op.f('ix_bookings_booking_reference'), 'bookings', ['booking_reference'], unique=True)
    for column in ('status', 'flight_id', 'user_id'):
        op.create_index(op.f(f'ix_bookings_{column}'), 'bookings', [column], unique=False)

    create_entity_table(
        'passengers',
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('passport_number', sa.String(length=50), nullable=True),
        sa.Column('nationality', sa.String(length=100), nullable=True),
        sa.Column('special_requests', sa.String(length=1000), nullable=True),
        sa.Column('booking_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], ),
    )
    op.create_index(op.f('ix_passengers_booking_id'), 'passengers', ['booking_id'], unique=False)

    create_entity_table(
        'documents',
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('file_name', sa.String(length=255), nullable=False),
        sa.Column('file_url', sa.String(length=1000), nullable=False),
        sa.Column('content_type', sa.String(length=100), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('verified_by', sa.String(length=255), nullable=True),
        sa.Column('passenger_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['passenger_id'], ['passengers.id'], ),
    )
    op.create_index(op.f('ix_documents_passenger_id'), 'documents', ['passenger_id'], unique=False)

    create_entity_table(
        'booking_services',
        sa.Column('service_type', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('price', MONEY, nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('booking_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], ),
    )
    op.create_index(op.f('ix_booking_services_booking_id'), 'booking_services', ['booking_id'], unique=False)

    create_entity_table(
        'payments',
        sa.Column('stripe_payment_intent_id', sa.String(length=255), nullable=False),
        sa.Column('amount', MONEY, nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('status', sa.Enum(
            'PENDING', 'PROCESSING', 'SUCCEEDED', 'FAILED', 'CANCELLED', 'REFUNDED', 'PARTIALLY_REFUNDED',
            name='paymentstatus'
        ), nullable=False),
        sa.Column('payment_method', sa.Enum(
            'CREDIT_CARD', 'PAYPAL', 'APPLE_PAY', 'GOOGLE_PAY', 'BANK_TRANSFER', 'STRIPE',
            name='paymentmethod'
        ), nullable=False),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('failure_reason', sa.String(length=500), nullable=True),
        sa.Column('refund_reason', sa.String(length=500), nullable=True),
        sa.Column('refund_amount', MONEY, nullable=True),
        sa.Column('refunded_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('booking_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], ),
    )
    op.create_index(op.f('ix_payments_stripe_payment_intent_id'), 'payments', ['stripe_payment_intent_id'], unique=False)
    op.create_index(op.f('ix_payments_booking_id'), 'payments', ['booking_id'], unique=False)


def downgrade() -> None:
    # Children before parents so foreign keys never dangle
    for table in (
        'payments', 'booking_services', 'documents', 'passengers', 'bookings', 'reviews',
        'flights', 'airports', 'aircraft', 'user_alerts', 'refresh_tokens', 'users', 'companies',
    ):
        op.drop_table(table)
