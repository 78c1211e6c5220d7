"""free_form_shift_template_labels

Revision ID: 7c2d5e8a4f63
Revises: 3f1a9c2e7b10
Create Date: 2026-02-09 18:41:05.227431

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c2d5e8a4f63'
down_revision: Union[str, None] = '3f1a9c2e7b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Метки шаблонов больше не ограничены DAY/NIGHT, но уникальны в пределах части.
    # Генератор по-прежнему требует шаблоны DAY и NIGHT.
    with op.batch_alter_table('shift_templates') as batch_op:
        batch_op.drop_constraint('ck_shift_template_label', type_='check')
        batch_op.create_unique_constraint('uq_shift_template_label', ['station_id', 'label'])


def downgrade() -> None:
    connection = op.get_bind()
    # Удаляем шаблоны со свободными метками, чтобы вернуть ограничение
    connection.execute(sa.text("DELETE FROM shift_templates WHERE label NOT IN ('DAY', 'NIGHT')"))
    with op.batch_alter_table('shift_templates') as batch_op:
        batch_op.drop_constraint('uq_shift_template_label', type_='unique')
        batch_op.create_check_constraint('ck_shift_template_label', "label IN ('DAY', 'NIGHT')")
