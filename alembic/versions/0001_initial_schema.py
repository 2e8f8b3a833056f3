"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('login', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('role', sa.String(32), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_users_login', 'users', ['login'], unique=True)

    op.create_table(
        'clients',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('nuit', sa.String(100), nullable=False),
        sa.Column('contact', sa.String(255), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('observations', sa.Text(), nullable=False),
        sa.Column('debt', sa.Float(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_clients_name', 'clients', ['name'])

    op.create_table(
        'orders',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('client_id', sa.String(36), sa.ForeignKey('clients.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('order_number', sa.Integer(), nullable=False, unique=True),
        sa.Column('client_requisition_number', sa.Integer(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('discount', sa.Float(), nullable=True),
        sa.Column('iva', sa.Float(), nullable=True),
        sa.Column('subtotal', sa.Float(), nullable=False),
        sa.Column('total', sa.Float(), nullable=False),
        sa.Column('debt', sa.Float(), nullable=False),
        sa.Column('status', sa.String(32), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_orders_client_id', 'orders', ['client_id'])

    op.create_table(
        'impressions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('order_id', sa.String(36), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('size', sa.String(100), nullable=False),
        sa.Column('material', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_impressions_order_id', 'impressions', ['order_id'])

    op.create_table(
        'clothes',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('order_id', sa.String(36), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('clothing_type', sa.String(32), nullable=False),
        sa.Column('custom_type', sa.String(255), nullable=True),
        sa.Column('unit_price', sa.Float(), nullable=False),
        sa.Column('sizes', sa.Text(), nullable=False),
        sa.Column('color', sa.String(100), nullable=False),
        sa.Column('total_quantity', sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_clothes_order_id', 'clothes', ['order_id'])

    op.create_table(
        'clothing_services',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('clothes_id', sa.String(36), sa.ForeignKey('clothes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_type', sa.String(32), nullable=False),
        sa.Column('location', sa.String(32), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('unit_price', sa.Float(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_clothing_services_clothes_id', 'clothing_services', ['clothes_id'])

    op.create_table(
        'sequence_counters',
        sa.Column('name', sa.String(64), primary_key=True),
        sa.Column('value', sa.Integer(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('sequence_counters')
    op.drop_index('ix_clothing_services_clothes_id', table_name='clothing_services')
    op.drop_table('clothing_services')
    op.drop_index('ix_clothes_order_id', table_name='clothes')
    op.drop_table('clothes')
    op.drop_index('ix_impressions_order_id', table_name='impressions')
    op.drop_table('impressions')
    op.drop_index('ix_orders_client_id', table_name='orders')
    op.drop_table('orders')
    op.drop_index('ix_clients_name', table_name='clients')
    op.drop_table('clients')
    op.drop_index('ix_users_login', table_name='users')
    op.drop_table('users')
