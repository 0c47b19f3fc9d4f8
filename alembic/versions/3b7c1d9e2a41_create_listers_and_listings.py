"""create_listers_and_listings

Revision ID: 3b7c1d9e2a41
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3b7c1d9e2a41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create listers table
    op.create_table(
        'listers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False, comment='Unique public identifier (trimmed)'),
        sa.Column('password_hash', sa.String(length=255), nullable=True, comment='Bcrypt hash; listers without a password cannot sign in'),
        sa.Column('profile', sa.Text(), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('default_pic', sa.String(length=1000), nullable=True),
        sa.Column('contact_email', sa.String(length=255), nullable=False),
        sa.Column('contact_phone', sa.String(length=50), nullable=True),
        sa.Column(
            'preferred_contact',
            sa.Enum('email', 'phone', name='preferred_contact_method'),
            server_default='email',
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
    )

    # Create listings table (owned by listers)
    op.create_table(
        'listings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('lister_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, comment="Index within the parent lister's listings"),
        sa.Column('distance_from_univ', sa.Float(), nullable=False, comment='Miles'),
        sa.Column('rent', sa.Float(), nullable=False, comment='Monthly rent (USD)'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('number_of_rooms', sa.Float(), nullable=False),
        sa.Column('number_of_bathrooms', sa.Float(), nullable=False),
        sa.Column('square_foot', sa.Float(), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(['lister_id'], ['listers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('latitude >= -90 AND latitude <= 90', name='check_listing_latitude_range'),
        sa.CheckConstraint('longitude >= -180 AND longitude <= 180', name='check_listing_longitude_range'),
    )
    op.create_index('idx_listings_lister_position', 'listings', ['lister_id', 'position'], unique=False)
    op.create_index('idx_listings_rent', 'listings', ['rent'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_listings_rent', table_name='listings')
    op.drop_index('idx_listings_lister_position', table_name='listings')
    op.drop_table('listings')
    op.drop_table('listers')
    sa.Enum(name='preferred_contact_method').drop(op.get_bind(), checkfirst=True)
