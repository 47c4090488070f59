"""Credential audit trail, explicit line-item service type, lease uniqueness rules

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Brings an existing boarding-house database up to date:
- credential_events table (who got a portal secret issued or reset, never the secret)
- invoice_details.service_type (NULL for rows written before this column existed)
- at most one current contract per room (filtered unique index)
- at most one invoice per contract and billing period
- user_accounts.password_hash widened to hold bcrypt hashes
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'credential_events',
        sa.Column('event_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('contract_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('event_id', name='pk_credential_events'),
        sa.ForeignKeyConstraint(
            ['tenant_id'],
            ['tenants.tenant_id'],
            name='fk_credential_events_tenant_id_tenants',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['contract_id'],
            ['contracts.contract_id'],
            name='fk_credential_events_contract_id_contracts',
            ondelete='NO ACTION',
        ),
    )
    op.create_index('ix_credential_events_tenant_id', 'credential_events', ['tenant_id'])
    op.create_index('ix_credential_events_contract_id', 'credential_events', ['contract_id'])

    op.add_column('invoice_details', sa.Column('service_type', sa.String(length=20), nullable=True))

    op.alter_column(
        'user_accounts',
        'password_hash',
        existing_type=sa.String(length=100),
        type_=sa.String(length=255),
        existing_nullable=False,
    )

    # Filtered index: only rows with is_current = 1 take part
    op.create_index(
        'uq_contracts_current_room',
        'contracts',
        ['room_id'],
        unique=True,
        mssql_where=sa.text('is_current = 1'),
        sqlite_where=sa.text('is_current = 1'),
        postgresql_where=sa.text('is_current'),
    )

    op.create_unique_constraint(
        'uq_invoices_contract_period',
        'invoices',
        ['contract_id', 'billing_period'],
    )


def downgrade() -> None:
    op.drop_constraint('uq_invoices_contract_period', 'invoices', type_='unique')
    op.drop_index('uq_contracts_current_room', table_name='contracts')
    op.alter_column(
        'user_accounts',
        'password_hash',
        existing_type=sa.String(length=255),
        type_=sa.String(length=100),
        existing_nullable=False,
    )
    op.drop_column('invoice_details', 'service_type')
    op.drop_index('ix_credential_events_contract_id', table_name='credential_events')
    op.drop_index('ix_credential_events_tenant_id', table_name='credential_events')
    op.drop_table('credential_events')
