"""seed component and limit reference rows

Revision ID: 9e3f0c6a1d57
Revises: 4b1d7e2a9c30
Create Date: 2026-09-28 10:31:47.902113

"""
from alembic import op  # noqa: F401
import sqlalchemy as sa  # noqa: F401
import sqlmodel # noqa: F401

from catalog_models.enums import COMPONENT_KEYS, LimitKey


# revision identifiers, used by Alembic.
revision = '9e3f0c6a1d57'
down_revision = '4b1d7e2a9c30'
branch_labels = None
depends_on = None


component_types = sa.table(
    'component_types',
    sa.column('type', sa.String()),
    sa.column('key', sa.String()),
)
limit_types = sa.table(
    'limit_types',
    sa.column('key', sa.String()),
)


def upgrade() -> None:
    op.bulk_insert(component_types, [{'type': kind.value, 'key': key} for kind, key in COMPONENT_KEYS.items()])
    op.bulk_insert(limit_types, [{'key': limit.value} for limit in LimitKey])


def downgrade() -> None:
    op.execute(limit_types.delete())
    op.execute(component_types.delete())
