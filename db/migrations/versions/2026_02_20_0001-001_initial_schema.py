"""Initial schema - create restaurants, tables, reservations and reservation_tables.

Revision ID: 001
Revises:
Create Date: 2026-02-20

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create initial database tables."""
    op.create_table(
        'restaurants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('admin_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('grid_rows', sa.Integer(), nullable=False),
        sa.Column('grid_cols', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('grid_rows > 0 AND grid_cols > 0', name=op.f('ck_restaurants_grid_positive')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_restaurants')),
        sa.UniqueConstraint('admin_id', name=op.f('uq_restaurants_admin_id')),
    )

    op.create_table(
        'tables',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('label', sa.String(length=50), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('grid_row', sa.Integer(), nullable=False),
        sa.Column('grid_col', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('capacity IN (2, 4, 6)', name=op.f('ck_tables_capacity_allowed')),
        sa.CheckConstraint('grid_row >= 0 AND grid_col >= 0', name=op.f('ck_tables_grid_position')),
        sa.ForeignKeyConstraint(
            ['restaurant_id'], ['restaurants.id'],
            name=op.f('fk_tables_restaurant_id_restaurants'),
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_tables')),
        sa.UniqueConstraint('restaurant_id', 'label', name=op.f('uq_tables_restaurant_id_label')),
        sa.UniqueConstraint(
            'restaurant_id', 'grid_row', 'grid_col',
            name=op.f('uq_tables_restaurant_id_grid_row_grid_col'),
        ),
    )
    op.create_index(op.f('ix_tables_restaurant_id'), 'tables', ['restaurant_id'], unique=False)
    op.create_index(
        'ix_tables_restaurant_active_capacity', 'tables',
        ['restaurant_id', 'is_active', 'capacity'], unique=False,
    )

    op.create_table(
        'reservations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('reservation_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('guest_count', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('special_requests', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('guest_count BETWEEN 1 AND 12', name=op.f('ck_reservations_guest_count_range')),
        sa.CheckConstraint('end_time > start_time', name=op.f('ck_reservations_window_order')),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'cancelled', 'completed')",
            name=op.f('ck_reservations_status'),
        ),
        sa.ForeignKeyConstraint(
            ['restaurant_id'], ['restaurants.id'],
            name=op.f('fk_reservations_restaurant_id_restaurants'),
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_reservations')),
    )
    op.create_index(op.f('ix_reservations_customer_id'), 'reservations', ['customer_id'], unique=False)
    op.create_index(op.f('ix_reservations_restaurant_id'), 'reservations', ['restaurant_id'], unique=False)
    op.create_index(
        'ix_reservations_restaurant_date_status', 'reservations',
        ['restaurant_id', 'reservation_date', 'status'], unique=False,
    )
    op.create_index(
        'ix_reservations_customer_date', 'reservations',
        ['customer_id', 'reservation_date'], unique=False,
    )

    op.create_table(
        'reservation_tables',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('reservation_id', sa.Integer(), nullable=False),
        sa.Column('table_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ['reservation_id'], ['reservations.id'],
            name=op.f('fk_reservation_tables_reservation_id_reservations'),
            ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['table_id'], ['tables.id'],
            name=op.f('fk_reservation_tables_table_id_tables'),
            ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_reservation_tables')),
        sa.UniqueConstraint(
            'reservation_id', 'table_id',
            name=op.f('uq_reservation_tables_reservation_id_table_id'),
        ),
    )
    op.create_index(
        op.f('ix_reservation_tables_reservation_id'), 'reservation_tables',
        ['reservation_id'], unique=False,
    )
    op.create_index(op.f('ix_reservation_tables_table_id'), 'reservation_tables', ['table_id'], unique=False)


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('reservation_tables')
    op.drop_table('reservations')
    op.drop_table('tables')
    op.drop_table('restaurants')
