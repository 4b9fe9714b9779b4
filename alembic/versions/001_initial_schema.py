"""Initial database schema

Revision ID: 001
Revises: 
Create Date: 2026-10-19

Creates the documents table that holds the jobs collection.
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Documents table (one row per document, grouped by collection)
    op.create_table('documents',
        sa.Column('id', sa.String(128), nullable=False),
        sa.Column('collection', sa.String(100), nullable=False),
        sa.Column('data', sa.JSON().with_variant(postgresql.JSONB(), 'postgresql'), nullable=False),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_documents_collection', 'documents', ['collection'])
    op.create_index('ix_documents_collection_created', 'documents', ['collection', 'created_at'])


def downgrade() -> None:
    op.drop_index('ix_documents_collection_created', table_name='documents')
    op.drop_index('ix_documents_collection', table_name='documents')
    op.drop_table('documents')
