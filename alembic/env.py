"""Alembic environment for the vehicles schema.

The database URL comes from DATABASE_URL, or from ``-x url=...`` on the
command line (e.g. ``alembic -x url=sqlite:///inventory.db upgrade head``).
"""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from vehicle_inventory.config import database_url
from vehicle_inventory.infra.db.models import Base, VehicleRow  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _migration_url() -> str:
    return context.get_x_argument(as_dictionary=True).get("url") or database_url()


def _configure(**options: object) -> None:
    # Detect column type changes (e.g. msrp precision) in autogenerate
    context.configure(target_metadata=target_metadata, compare_type=True, **options)


def run_migrations_offline() -> None:
    """Emit the SQL script instead of running it (``alembic upgrade --sql``)."""
    _configure(
        url=_migration_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section) or {}
    section["sqlalchemy.url"] = _migration_url()

    engine = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with engine.connect() as connection:
        _configure(connection=connection)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
