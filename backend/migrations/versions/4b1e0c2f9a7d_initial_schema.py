"""initial schema: users, resources, ratings, comments

Revision ID: 4b1e0c2f9a7d
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '4b1e0c2f9a7d'
down_revision = None
branch_labels = None
depends_on = None

BRANCHES = ('ISE', 'CSE', 'ECE', 'MECH', 'CIVIL', 'EEE', 'AIML', 'CHEMICAL')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('avatar', sa.String(length=500), nullable=False),
        sa.Column('cover_image', sa.String(length=500), nullable=True),
        sa.Column('bio', sa.String(length=500), nullable=False),
        sa.Column(
            'role',
            sa.Enum('user', 'admin', name='enum_user_role', create_constraint=True),
            nullable=False,
        ),
        sa.Column('password_hash', sa.String(length=254), nullable=False),
        sa.Column('is_blocked', sa.Boolean(), nullable=False),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('username', name='uq_users_username'),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_username', 'users', ['username'])

    op.create_table(
        'resources',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('semester', sa.Integer(), nullable=False),
        sa.Column('branch', sa.Enum(*BRANCHES, name='enum_branch', create_constraint=True), nullable=False),
        sa.Column('url', sa.String(length=1000), nullable=False),
        sa.Column('file_size', sa.BigInteger(), nullable=True),
        sa.Column('is_blocked', sa.Boolean(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.CheckConstraint('semester >= 1 AND semester <= 8', name='ck_resources_semester_range'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_resources_owner_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_resources'),
    )
    op.create_index('ix_resources_owner_id', 'resources', ['owner_id'])
    op.create_index('ix_resources_created_at', 'resources', ['created_at'])
    op.create_index('ix_resources_branch_semester', 'resources', ['branch', 'semester'])

    op.create_table(
        'ratings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('resource_id', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_ratings_rating_range'),
        sa.ForeignKeyConstraint(['resource_id'], ['resources.id'], name='fk_ratings_resource_id_resources', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_ratings_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_ratings'),
        sa.UniqueConstraint('user_id', 'resource_id', name='uq_ratings_user_resource'),
    )
    op.create_index('ix_ratings_resource_id', 'ratings', ['resource_id'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('resource_id', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('is_blocked', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.ForeignKeyConstraint(['resource_id'], ['resources.id'], name='fk_comments_resource_id_resources', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_comments_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_comments'),
    )
    op.create_index('ix_comments_resource_id', 'comments', ['resource_id'])


def downgrade():
    op.drop_index('ix_comments_resource_id', table_name='comments')
    op.drop_table('comments')
    op.drop_index('ix_ratings_resource_id', table_name='ratings')
    op.drop_table('ratings')
    op.drop_index('ix_resources_branch_semester', table_name='resources')
    op.drop_index('ix_resources_created_at', table_name='resources')
    op.drop_index('ix_resources_owner_id', table_name='resources')
    op.drop_table('resources')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    sa.Enum(name='enum_branch').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='enum_user_role').drop(op.get_bind(), checkfirst=True)
