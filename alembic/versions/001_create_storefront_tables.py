"""Create storefront tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column('id', sa.String(36), primary_key=True)


def _fk(name: str, target: str, ondelete: str = 'SET NULL', nullable: bool = True,
        index: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.String(36),
        sa.ForeignKey(f'{target}.id', ondelete=ondelete),
        nullable=nullable,
        index=index,
    )


def _promotion_columns() -> list[sa.Column]:
    return [
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='INACTIVE', index=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        _fk('store_id', 'stores', ondelete='CASCADE', nullable=False, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    ]


def upgrade() -> None:
    """Create store, catalog, promotion and image tables."""
    op.create_table(
        'stores',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('user_id', sa.String(100), nullable=False, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    # Promotions
    op.create_table('collections', *_promotion_columns())
    op.create_table(
        'discounts',
        *_promotion_columns(),
        sa.Column('code', sa.String(16), nullable=True, index=True),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('value', sa.Integer(), nullable=False),
        sa.Column('min_purchase', sa.Integer(), nullable=True),
        sa.Column('max_uses', sa.Integer(), nullable=True),
    )
    op.create_table(
        'sales',
        *_promotion_columns(),
        sa.Column('discount_type', sa.String(20), nullable=False),
        sa.Column('discount_value', sa.Integer(), nullable=False),
    )

    # Catalog
    op.create_table(
        'categories',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        _fk('store_id', 'stores', ondelete='CASCADE', nullable=False, index=True),
        _fk('parent_category_id', 'categories', index=True),
        _fk('sale_id', 'sales'),
        _fk('discount_id', 'discounts'),
        _fk('collection_id', 'collections'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )
    op.create_table(
        'brands',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        _fk('store_id', 'stores', ondelete='CASCADE', nullable=False, index=True),
    )
    op.create_table(
        'banners',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('button_text', sa.String(100), nullable=True),
        sa.Column('button_link', sa.String(1000), nullable=True),
        _fk('store_id', 'stores', ondelete='CASCADE', nullable=False, index=True),
        _fk('collection_id', 'collections'),
        _fk('discount_id', 'discounts'),
        _fk('sale_id', 'sales'),
        _fk('category_id', 'categories'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )
    op.create_table(
        'products',
        _id(),
        sa.Column('name', sa.String(500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sku', sa.String(100), nullable=False),
        sa.Column('manufacturer', sa.String(255), nullable=True),
        sa.Column('base_price', sa.BigInteger(), nullable=False, index=True),
        _fk('category_id', 'categories', index=True),
        _fk('brand_id', 'brands'),
        _fk('sale_id', 'sales'),
        _fk('discount_id', 'discounts'),
        _fk('collection_id', 'collections'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )
    op.create_unique_constraint('uq_products_sku', 'products', ['sku'])

    op.create_table(
        'product_variants',
        _id(),
        _fk('product_id', 'products', ondelete='CASCADE', nullable=False, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('sku', sa.String(100), nullable=True),
        sa.Column('price', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('description', sa.Text(), nullable=True),
        _fk('sale_id', 'sales'),
        _fk('discount_id', 'discounts'),
        _fk('collection_id', 'collections'),
    )
    op.create_table(
        'variant_attributes',
        _id(),
        _fk('variant_id', 'product_variants', ondelete='CASCADE', nullable=False, index=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('value', sa.String(255), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
    )

    # Images: exactly one owner column is set
    op.create_table(
        'images',
        _id(),
        sa.Column('url', sa.String(1000), nullable=False),
        sa.Column('key', sa.String(255), nullable=False),
        _fk('store_id', 'stores', ondelete='CASCADE', index=True),
        _fk('category_id', 'categories', ondelete='CASCADE', index=True),
        _fk('brand_id', 'brands', ondelete='CASCADE', index=True),
        _fk('product_id', 'products', ondelete='CASCADE', index=True),
        _fk('variant_id', 'product_variants', ondelete='CASCADE', index=True),
        _fk('collection_id', 'collections', ondelete='CASCADE', index=True),
        _fk('banner_id', 'banners', ondelete='CASCADE', index=True),
    )


def downgrade() -> None:
    """Drop all storefront tables."""
    for table in (
        'images',
        'variant_attributes',
        'product_variants',
        'products',
        'banners',
        'brands',
        'categories',
        'sales',
        'discounts',
        'collections',
        'stores',
    ):
        op.drop_table(table)
