"""Create Brand, Collection, Product, File and ProductFile tables.

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


def upgrade() -> None:
    """Create the catalog tables."""
    # Brand table
    op.create_table(
        'Brand',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('description', sa.String(250), nullable=False),
    )

    # Collection table (brand deletion restricted)
    op.create_table(
        'Collection',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('brand_id', sa.Integer(),
                  sa.ForeignKey('Brand.id', ondelete='RESTRICT', name='fk_collection_brand'),
                  nullable=False, index=True),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('description', sa.String(250), nullable=False),
    )

    # Product table (brand/collection references nulled on delete)
    op.create_table(
        'Product',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('description', sa.String(250), nullable=False),
        sa.Column('extended_description', sa.String(250), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.func.now()),
        sa.Column('brand_id', sa.Integer(),
                  sa.ForeignKey('Brand.id', ondelete='SET NULL', name='fk_product_brand'),
                  nullable=True, index=True),
        sa.Column('collection_id', sa.Integer(),
                  sa.ForeignKey('Collection.id', ondelete='SET NULL', name='fk_product_collection'),
                  nullable=True, index=True),
        sa.UniqueConstraint('code', name='uq_product_code'),
    )

    # File table
    op.create_table(
        'File',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('file_name', sa.String(250), nullable=False),
        sa.Column('absolute_path', sa.String(250), nullable=False),
        sa.UniqueConstraint('absolute_path', name='uq_file_absolute_path'),
    )

    # ProductFile link table (cascade from both parents)
    op.create_table(
        'ProductFile',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('product_id', sa.Integer(),
                  sa.ForeignKey('Product.id', ondelete='CASCADE', name='fk_productfile_product'),
                  nullable=False, index=True),
        sa.Column('file_id', sa.Integer(),
                  sa.ForeignKey('File.id', ondelete='CASCADE', name='fk_productfile_file'),
                  nullable=False, index=True),
        sa.UniqueConstraint('product_id', 'file_id', name='uq_productfile_product_file'),
    )


def downgrade() -> None:
    """Drop the catalog tables."""
    op.drop_table('ProductFile')
    op.drop_table('File')
    op.drop_table('Product')
    op.drop_table('Collection')
    op.drop_table('Brand')
