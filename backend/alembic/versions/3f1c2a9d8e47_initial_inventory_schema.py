"""Initial inventory and catalog schema

Revision ID: 3f1c2a9d8e47
Revises:
Create Date: 2026-10-19 10:12:31.408215

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers used by Alembic
revision: str = '3f1c2a9d8e47'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Reference tables
    op.create_table(
        'inventory_units',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('abbreviation', sa.String(length=20), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('factor', sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index(op.f('ix_inventory_units_id'), 'inventory_units', ['id'], unique=False)

    op.create_table(
        'inventory_categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index(op.f('ix_inventory_categories_id'), 'inventory_categories', ['id'], unique=False)

    op.create_table(
        'stores',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('address', sa.String(length=250), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('phone', sa.String(length=40), nullable=True),
        sa.Column('email', sa.String(length=120), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('province', sa.String(length=100), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_stores_id'), 'stores', ['id'], unique=False)
    op.create_index(op.f('ix_stores_city'), 'stores', ['city'], unique=False)
    op.create_index(op.f('ix_stores_province'), 'stores', ['province'], unique=False)
    op.create_index(op.f('ix_stores_position'), 'stores', ['position'], unique=False)
    op.create_index(op.f('ix_stores_is_active'), 'stores', ['is_active'], unique=False)

    # Products
    op.create_table(
        'inventory_products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.Enum('raw', 'intermediate', 'final', name='producttype'), nullable=False),
        sa.Column('unit_id', sa.Integer(), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=True),
        sa.Column('standard_weight_grams', sa.Float(), nullable=True),
        sa.Column('net_weight', sa.Float(), nullable=True),
        sa.Column('stock', sa.Float(), nullable=False),
        sa.Column('min_stock', sa.Float(), nullable=True),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('distributor_price', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('tax_rate', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('wholesale_rules', sa.JSON(), nullable=True),
        sa.Column('sku', sa.String(length=64), nullable=True),
        sa.Column('barcode', sa.String(length=64), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('primary_image_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.CheckConstraint('price >= 0'),
        sa.ForeignKeyConstraint(['unit_id'], ['inventory_units.id']),
        sa.ForeignKeyConstraint(['category_id'], ['inventory_categories.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('sku'),
        sa.UniqueConstraint('barcode'),
    )
    op.create_index(op.f('ix_inventory_products_id'), 'inventory_products', ['id'], unique=False)
    op.create_index(op.f('ix_inventory_products_name'), 'inventory_products', ['name'], unique=False)
    op.create_index(op.f('ix_inventory_products_type'), 'inventory_products', ['type'], unique=False)
    op.create_index(op.f('ix_inventory_products_category_id'), 'inventory_products', ['category_id'], unique=False)
    op.create_index(op.f('ix_inventory_products_is_active'), 'inventory_products', ['is_active'], unique=False)
    op.create_index(op.f('ix_inventory_products_primary_image_url'), 'inventory_products', ['primary_image_url'], unique=False)

    op.create_table(
        'inventory_recipes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('final_product_id', sa.Integer(), nullable=False),
        sa.Column('input_product_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=False),
        sa.Column('quantity_in_grams', sa.Boolean(), nullable=False),
        sa.Column('item_type', sa.Enum('input', 'material', name='recipeitemtype'), nullable=False),
        sa.ForeignKeyConstraint(['final_product_id'], ['inventory_products.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['input_product_id'], ['inventory_products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_inventory_recipes_id'), 'inventory_recipes', ['id'], unique=False)
    op.create_index(op.f('ix_inventory_recipes_final_product_id'), 'inventory_recipes', ['final_product_id'], unique=False)
    op.create_index(op.f('ix_inventory_recipes_input_product_id'), 'inventory_recipes', ['input_product_id'], unique=False)

    op.create_table(
        'inventory_movements',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('reference_type', sa.String(length=50), nullable=True),
        sa.Column('reference_id', sa.Integer(), nullable=True),
        sa.Column('date', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['inventory_products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_inventory_movements_id'), 'inventory_movements', ['id'], unique=False)
    op.create_index(op.f('ix_inventory_movements_product_id'), 'inventory_movements', ['product_id'], unique=False)
    op.create_index(op.f('ix_inventory_movements_type'), 'inventory_movements', ['type'], unique=False)

    # Placements and showcase
    op.create_table(
        'store_products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('store_id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_id'], ['inventory_products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('store_id', 'product_id', name='uq_store_product'),
    )
    op.create_index(op.f('ix_store_products_id'), 'store_products', ['id'], unique=False)
    op.create_index(op.f('ix_store_products_store_id'), 'store_products', ['store_id'], unique=False)
    op.create_index(op.f('ix_store_products_product_id'), 'store_products', ['product_id'], unique=False)
    op.create_index(op.f('ix_store_products_is_active'), 'store_products', ['is_active'], unique=False)

    op.create_table(
        'catalog_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('section', sa.Enum(
            'home', 'offers', 'recommended', 'on_order', 'new',
            'discounts', 'popular', 'seasonal', 'specials', 'limited',
            name='catalogsection'), nullable=False),
        sa.Column('title', sa.String(length=150), nullable=True),
        sa.Column('subtitle', sa.String(length=250), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('badge', sa.String(length=50), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('price_override', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('wholesale_override_rules', sa.JSON(), nullable=True),
        sa.Column('store_id', sa.Integer(), nullable=True),
        sa.Column('starts_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('ends_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['inventory_products.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'section', 'store_id', name='uq_catalog_product_section_store'),
    )
    op.create_index(op.f('ix_catalog_entries_id'), 'catalog_entries', ['id'], unique=False)
    op.create_index(op.f('ix_catalog_entries_product_id'), 'catalog_entries', ['product_id'], unique=False)
    op.create_index(op.f('ix_catalog_entries_position'), 'catalog_entries', ['position'], unique=False)
    op.create_index('ix_catalog_entries_section_active', 'catalog_entries', ['section', 'is_active'], unique=False)

    op.create_table(
        'home_products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('price_override', sa.Float(), nullable=True),
        sa.Column('section', sa.Enum('home', 'offers', 'recommended', 'new', name='homesection'), nullable=False),
        sa.Column('badge', sa.String(length=50), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['inventory_products.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_home_products_id'), 'home_products', ['id'], unique=False)
    op.create_index(op.f('ix_home_products_product_id'), 'home_products', ['product_id'], unique=False)

    # Audit trail
    op.create_table(
        'logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('ts', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(length=50), nullable=True),
        sa.Column('resource', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_logs_id'), 'logs', ['id'], unique=False)
    op.create_index(op.f('ix_logs_ts'), 'logs', ['ts'], unique=False)
    op.create_index(op.f('ix_logs_action'), 'logs', ['action'], unique=False)
    op.create_index(op.f('ix_logs_resource'), 'logs', ['resource'], unique=False)
    op.create_index(op.f('ix_logs_status'), 'logs', ['status'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    # Drop in reverse dependency order
    op.drop_table('logs')
    op.drop_table('home_products')
    op.drop_table('catalog_entries')
    op.drop_table('store_products')
    op.drop_table('inventory_movements')
    op.drop_table('inventory_recipes')
    op.drop_table('inventory_products')
    op.drop_table('stores')
    op.drop_table('inventory_categories')
    op.drop_table('inventory_units')
    sa.Enum(name='homesection').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='catalogsection').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='recipeitemtype').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='producttype').drop(op.get_bind(), checkfirst=True)
