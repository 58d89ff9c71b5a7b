"""Initial shop schema

Revision ID: 5c1e7a9d2b34
Revises:
Create Date: 2026-10-19 10:12:41.204118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1e7a9d2b34'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True):
    columns = [sa.Column('created_at', sa.DateTime(), nullable=False)]
    if updated:
        columns.append(sa.Column('updated_at', sa.DateTime(), nullable=False))
    return columns


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'shops',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('name_tamil', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('gstin', sa.String(), nullable=True),
        sa.Column('logo_url', sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_shops_owner_id', 'shops', ['owner_id'])

    op.create_table(
        'shop_employees',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('shop_id', sa.Integer(), sa.ForeignKey('shops.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('invited_email', sa.String(), nullable=False),
        sa.Column('role', sa.Enum('admin', 'cashier', name='userrole'), nullable=False),
        sa.Column('status', sa.Enum('pending', 'active', 'inactive', name='employeestatus'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('shop_id', 'invited_email', name='uq_employee_shop_email'),
    )
    op.create_index('ix_shop_employees_shop_id', 'shop_employees', ['shop_id'])
    op.create_index('ix_shop_employees_user_id', 'shop_employees', ['user_id'])
    op.create_index('ix_shop_employees_invited_email', 'shop_employees', ['invited_email'])

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('shop_id', sa.Integer(), sa.ForeignKey('shops.id', ondelete='CASCADE'), nullable=False),
        sa.Column('parent_id', sa.Integer(), sa.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('name_tamil', sa.String(), nullable=True),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index('ix_categories_shop_id', 'categories', ['shop_id'])
    op.create_index('ix_categories_parent_id', 'categories', ['parent_id'])

    op.create_table(
        'brands',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('shop_id', sa.Integer(), sa.ForeignKey('shops.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('name_tamil', sa.String(), nullable=True),
        sa.Column('image_url', sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_brands_shop_id', 'brands', ['shop_id'])

    op.create_table(
        'price_types',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('shop_id', sa.Integer(), sa.ForeignKey('shops.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_price_types_shop_id', 'price_types', ['shop_id'])

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('shop_id', sa.Integer(), sa.ForeignKey('shops.id', ondelete='CASCADE'), nullable=False),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('brand_id', sa.Integer(), sa.ForeignKey('brands.id', ondelete='SET NULL'), nullable=True),
        sa.Column('sku', sa.String(), nullable=True),
        sa.Column('barcode', sa.String(), nullable=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('name_tamil', sa.String(), nullable=True),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('mrp', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('cost_price', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('default_selling_price', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('gst_percent', sa.Numeric(5, 2), nullable=False, server_default='0'),
        sa.Column('hsn_code', sa.String(), nullable=True),
        sa.Column('unit', sa.String(), nullable=False, server_default='pcs'),
        sa.Column('track_inventory', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('stock_quantity', sa.Numeric(12, 3), nullable=False, server_default='0'),
        sa.Column('low_stock_threshold', sa.Numeric(12, 3), nullable=False, server_default='0'),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_products_shop_id', 'products', ['shop_id'])
    op.create_index('ix_products_category_id', 'products', ['category_id'])
    op.create_index('ix_products_brand_id', 'products', ['brand_id'])
    op.create_index('idx_product_shop_name', 'products', ['shop_id', 'name'])
    op.create_index('idx_product_shop_barcode', 'products', ['shop_id', 'barcode'])

    op.create_table(
        'product_prices',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('price_type_id', sa.Integer(), sa.ForeignKey('price_types.id', ondelete='CASCADE'), nullable=False),
        sa.Column('selling_price', sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('product_id', 'price_type_id', name='uq_product_price_type'),
    )
    op.create_index('ix_product_prices_product_id', 'product_prices', ['product_id'])
    op.create_index('ix_product_prices_price_type_id', 'product_prices', ['price_type_id'])

    op.create_table(
        'suppliers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('shop_id', sa.Integer(), sa.ForeignKey('shops.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('contact_person', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('gstin', sa.String(), nullable=True),
        sa.Column('notes', sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_suppliers_shop_id', 'suppliers', ['shop_id'])

    op.create_table(
        'bills',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('shop_id', sa.Integer(), sa.ForeignKey('shops.id', ondelete='CASCADE'), nullable=False),
        sa.Column('bill_number', sa.String(), nullable=False),
        sa.Column('customer_name', sa.String(), nullable=True),
        sa.Column('customer_phone', sa.String(), nullable=True),
        sa.Column('customer_address', sa.String(), nullable=True),
        sa.Column('price_type_id', sa.Integer(), sa.ForeignKey('price_types.id', ondelete='SET NULL'), nullable=True),
        sa.Column('subtotal', sa.String(), nullable=False),
        sa.Column('discount_amount', sa.String(), nullable=False),
        sa.Column('discount_percent', sa.String(), nullable=False),
        sa.Column('taxable_amount', sa.String(), nullable=False),
        sa.Column('gst_amount', sa.String(), nullable=False),
        sa.Column('total', sa.String(), nullable=False),
        sa.Column('payment_method', sa.Enum('cash', 'card', 'upi', 'credit', name='paymentmethod'), nullable=False),
        sa.Column('payment_status', sa.Enum('paid', 'pending', 'partial', name='paymentstatus'), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        *_timestamps(updated=False),
        sa.UniqueConstraint('shop_id', 'bill_number', name='uq_bill_shop_number'),
    )
    op.create_index('ix_bills_shop_id', 'bills', ['shop_id'])
    op.create_index('idx_bill_shop_created', 'bills', ['shop_id', 'created_at'])

    op.create_table(
        'bill_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('bill_id', sa.Integer(), sa.ForeignKey('bills.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id', ondelete='SET NULL'), nullable=True),
        sa.Column('product_name', sa.String(), nullable=False),
        sa.Column('product_name_tamil', sa.String(), nullable=True),
        sa.Column('sku', sa.String(), nullable=True),
        sa.Column('hsn_code', sa.String(), nullable=True),
        sa.Column('quantity', sa.String(), nullable=False),
        sa.Column('unit', sa.String(), nullable=False),
        sa.Column('unit_price', sa.String(), nullable=False),
        sa.Column('discount_amount', sa.String(), nullable=False),
        sa.Column('taxable_amount', sa.String(), nullable=False),
        sa.Column('gst_percent', sa.Numeric(5, 2), nullable=False),
        sa.Column('gst_amount', sa.String(), nullable=False),
        sa.Column('total', sa.String(), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index('ix_bill_items_bill_id', 'bill_items', ['bill_id'])
    op.create_index('ix_bill_items_product_id', 'bill_items', ['product_id'])

    op.create_table(
        'purchase_orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('shop_id', sa.Integer(), sa.ForeignKey('shops.id', ondelete='CASCADE'), nullable=False),
        sa.Column('supplier_id', sa.Integer(), sa.ForeignKey('suppliers.id'), nullable=False),
        sa.Column('po_number', sa.String(), nullable=False),
        sa.Column(
            'status',
            sa.Enum('draft', 'ordered', 'partial', 'received', 'cancelled', name='purchaseorderstatus'),
            nullable=False,
        ),
        sa.Column('order_date', sa.Date(), nullable=False),
        sa.Column('expected_date', sa.Date(), nullable=True),
        sa.Column('received_date', sa.DateTime(), nullable=True),
        sa.Column('subtotal', sa.Numeric(12, 2), nullable=False),
        sa.Column('tax_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('shop_id', 'po_number', name='uq_po_shop_number'),
    )
    op.create_index('ix_purchase_orders_shop_id', 'purchase_orders', ['shop_id'])
    op.create_index('ix_purchase_orders_supplier_id', 'purchase_orders', ['supplier_id'])

    op.create_table(
        'purchase_order_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column(
            'purchase_order_id', sa.Integer(),
            sa.ForeignKey('purchase_orders.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id'), nullable=False),
        sa.Column('quantity_ordered', sa.Numeric(12, 3), nullable=False),
        sa.Column('quantity_received', sa.Numeric(12, 3), nullable=False, server_default='0'),
        sa.Column('unit_cost', sa.Numeric(12, 2), nullable=False),
        sa.Column('total', sa.Numeric(12, 2), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index('ix_purchase_order_items_purchase_order_id', 'purchase_order_items', ['purchase_order_id'])
    op.create_index('ix_purchase_order_items_product_id', 'purchase_order_items', ['product_id'])

    op.create_table(
        'stock_movements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('shop_id', sa.Integer(), sa.ForeignKey('shops.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'type', sa.Enum('purchase', 'sale', 'adjustment', 'return', name='stockmovementtype'),
            nullable=False,
        ),
        sa.Column('quantity', sa.Numeric(12, 3), nullable=False),
        sa.Column('quantity_before', sa.Numeric(12, 3), nullable=False),
        sa.Column('quantity_after', sa.Numeric(12, 3), nullable=False),
        sa.Column(
            'reference_type', sa.Enum('bill', 'purchase_order', 'adjustment', name='referencetype'),
            nullable=True,
        ),
        sa.Column('reference_id', sa.Integer(), nullable=True),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index('ix_stock_movements_shop_id', 'stock_movements', ['shop_id'])
    op.create_index('ix_stock_movements_product_id', 'stock_movements', ['product_id'])
    op.create_index('idx_movement_shop_created', 'stock_movements', ['shop_id', 'created_at'])


def downgrade() -> None:
    for table in (
        'stock_movements',
        'purchase_order_items',
        'purchase_orders',
        'bill_items',
        'bills',
        'suppliers',
        'product_prices',
        'products',
        'price_types',
        'brands',
        'categories',
        'shop_employees',
        'shops',
        'users',
    ):
        op.drop_table(table)
