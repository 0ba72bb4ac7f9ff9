"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-18 13:30:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001'
down_revision = None
branch_labels = None
depends_on = None

opinion_value = sa.Enum('LIKE', 'DISLIKE', name='opinion_value')


def _timestamps():
    return [
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'photos',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('file_path', sa.String(512), nullable=True),
        sa.Column('mime_type', sa.String(100), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("mime_type IN ('image/jpeg', 'image/png')", name='valid_mime_type'),
    )
    op.create_index('idx_photos_category', 'photos', ['category_id'])

    op.create_table(
        'opinions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('photo_id', sa.Integer(), sa.ForeignKey('photos.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('opinion', opinion_value, nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_opinions_photo_opinion', 'opinions', ['photo_id', 'opinion'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('photo_id', sa.Integer(), sa.ForeignKey('photos.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_comments_photo', 'comments', ['photo_id'])


def downgrade() -> None:
    op.drop_index('idx_comments_photo', table_name='comments')
    op.drop_table('comments')
    op.drop_index('idx_opinions_photo_opinion', table_name='opinions')
    op.drop_table('opinions')
    opinion_value.drop(op.get_bind(), checkfirst=True)
    op.drop_index('idx_photos_category', table_name='photos')
    op.drop_table('photos')
    op.drop_table('categories')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
