"""Initial schema: assets, borrow ledger, option catalogs

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CATALOG_TABLES = ('brands', 'vendors', 'models', 'departments', 'branches', 'locations')


def upgrade() -> None:
    # Option catalogs, one table each
    for table in CATALOG_TABLES:
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(255), nullable=False),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('name'),
        )
        op.create_index(f'ix_{table}_id', table, ['id'], unique=False)

    # Create assets table
    op.create_table(
        'assets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('asset_id', sa.String(100), nullable=False),
        sa.Column('id_code', sa.String(100), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('brand', sa.String(255), nullable=True),
        sa.Column('model', sa.String(255), nullable=True),
        sa.Column('vendor', sa.String(255), nullable=True),
        sa.Column('department', sa.String(255), nullable=True),
        sa.Column('branch', sa.String(255), nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('serial', sa.String(255), nullable=True),
        sa.Column('purchase_date', sa.Date(), nullable=True),
        sa.Column('price', sa.Numeric(12, 2), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_assets_id', 'assets', ['id'], unique=False)
    op.create_index('ix_assets_asset_id', 'assets', ['asset_id'], unique=False)

    # Create borrows table
    op.create_table(
        'borrows',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('asset_id', sa.Integer(), nullable=True),
        sa.Column('borrower_name', sa.String(255), nullable=True),
        sa.Column('borrower_dept', sa.String(255), nullable=True),
        sa.Column('borrower_branch', sa.String(255), nullable=True),
        sa.Column('lender_name', sa.String(255), nullable=True),
        sa.Column('peripherals', sa.Text(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('returned', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('borrower_signature', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_borrows_id', 'borrows', ['id'], unique=False)
    op.create_index('ix_borrows_asset_id', 'borrows', ['asset_id'], unique=False)
    op.create_index('ix_borrows_start_date', 'borrows', ['start_date'], unique=False)
    # One open loan per asset
    op.create_index(
        'uq_borrows_open_asset',
        'borrows',
        ['asset_id'],
        unique=True,
        postgresql_where=sa.text('returned = false'),
        sqlite_where=sa.text('returned = 0'),
    )


def downgrade() -> None:
    op.drop_index('uq_borrows_open_asset', table_name='borrows')
    op.drop_index('ix_borrows_start_date', table_name='borrows')
    op.drop_index('ix_borrows_asset_id', table_name='borrows')
    op.drop_index('ix_borrows_id', table_name='borrows')
    op.drop_table('borrows')

    op.drop_index('ix_assets_asset_id', table_name='assets')
    op.drop_index('ix_assets_id', table_name='assets')
    op.drop_table('assets')

    for table in reversed(CATALOG_TABLES):
        op.drop_index(f'ix_{table}_id', table_name=table)
        op.drop_table(table)
