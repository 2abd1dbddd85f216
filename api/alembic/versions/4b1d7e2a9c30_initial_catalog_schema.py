"""initial catalog schema: languages, translations, reclosers, firmware-scoped services

Revision ID: 4b1d7e2a9c30
Revises:
Create Date: 2026-09-28 10:12:04.318214

"""
from alembic import op  # noqa: F401
import sqlalchemy as sa  # noqa: F401
import sqlmodel # noqa: F401


# revision identifiers, used by Alembic.
revision = '4b1d7e2a9c30'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'languages',
        *_timestamps(),
        sa.Column('code', sa.String(length=16), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('code'),
    )
    op.create_table(
        'descriptions',
        *_timestamps(),
        sa.Column('key', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('key'),
    )
    op.create_table(
        'translations',
        *_timestamps(),
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('description_key', sa.String(), nullable=False),
        sa.Column('language_code', sa.String(), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['description_key'], ['descriptions.key'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['language_code'], ['languages.code'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('description_key', 'language_code', name='uq_translation_key_lang'),
    )
    op.create_index(op.f('ix_translations_description_key'), 'translations', ['description_key'])
    op.create_index(op.f('ix_translations_language_code'), 'translations', ['language_code'])

    op.create_table(
        'reclosers',
        *_timestamps(),
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('description_key', sa.String(), nullable=False),
        sa.Column('model', sa.String(), nullable=False),
        sa.ForeignKeyConstraint(['description_key'], ['descriptions.key']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_reclosers_description_key'), 'reclosers', ['description_key'])

    op.create_table(
        'firmware_versions',
        *_timestamps(),
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('version', sa.String(), nullable=False),
        sa.Column('recloser_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['recloser_id'], ['reclosers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_firmware_versions_recloser_id'), 'firmware_versions', ['recloser_id'])

    op.create_table(
        'services',
        *_timestamps(),
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('service_key', sa.String(), nullable=False),
        sa.Column('description_key', sa.String(), nullable=False),
        sa.Column('parent_id', sa.Integer(), nullable=True),
        sa.Column('firmware_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['description_key'], ['descriptions.key']),
        sa.ForeignKeyConstraint(['parent_id'], ['services.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['firmware_id'], ['firmware_versions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('firmware_id', 'service_key', name='uq_service_firmware_key'),
    )
    op.create_index(op.f('ix_services_service_key'), 'services', ['service_key'])
    op.create_index(op.f('ix_services_description_key'), 'services', ['description_key'])
    op.create_index(op.f('ix_services_parent_id'), 'services', ['parent_id'])
    op.create_index(op.f('ix_services_firmware_id'), 'services', ['firmware_id'])

    op.create_table(
        'features',
        *_timestamps(),
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('description_key', sa.String(), nullable=False),
        sa.Column('service_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['description_key'], ['descriptions.key']),
        sa.ForeignKeyConstraint(['service_id'], ['services.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_features_description_key'), 'features', ['description_key'])
    op.create_index(op.f('ix_features_service_id'), 'features', ['service_id'])

    op.create_table(
        'component_types',
        *_timestamps(),
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('key', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_component_types_type'), 'component_types', ['type'], unique=True)

    op.create_table(
        'limit_types',
        *_timestamps(),
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_limit_types_key'), 'limit_types', ['key'], unique=True)

    op.create_table(
        'feature_components',
        *_timestamps(),
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('feature_id', sa.Integer(), nullable=False),
        sa.Column('component_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['feature_id'], ['features.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['component_id'], ['component_types.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_feature_components_feature_id'), 'feature_components', ['feature_id'])

    op.create_table(
        'feature_component_limits',
        *_timestamps(),
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('feature_component_id', sa.Integer(), nullable=False),
        sa.Column('limit_id', sa.Integer(), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['feature_component_id'], ['feature_components.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['limit_id'], ['limit_types.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('feature_component_id', 'limit_id', name='uq_feature_component_limit'),
    )
    op.create_index(
        op.f('ix_feature_component_limits_feature_component_id'),
        'feature_component_limits',
        ['feature_component_id'],
    )


def downgrade() -> None:
    op.drop_table('feature_component_limits')
    op.drop_table('feature_components')
    op.drop_table('limit_types')
    op.drop_table('component_types')
    op.drop_table('features')
    op.drop_table('services')
    op.drop_table('firmware_versions')
    op.drop_table('reclosers')
    op.drop_table('translations')
    op.drop_table('descriptions')
    op.drop_table('languages')
