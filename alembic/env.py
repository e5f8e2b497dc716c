"""Alembic environment for the listing database.

The target URL comes from ``alembic -x db_url=...`` when given, otherwise from
the application settings (``DATABASE_URL``, optionally loaded from ``.env``).
``prepend_sys_path`` in alembic.ini puts the project root on the import path.
"""

from logging.config import fileConfig

from dotenv import load_dotenv
from sqlalchemy import create_engine, pool
from sqlalchemy.engine import make_url

from alembic import context

load_dotenv()

from app.config import get_settings  # noqa: E402
from app.database import Base  # noqa: E402
from app.models.property import Property, PropertyImage  # noqa: E402,F401
from app.models.user import User  # noqa: E402,F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _database_url() -> str:
    return context.get_x_argument(as_dictionary=True).get("db_url") or get_settings().DATABASE_URL


def _configure_options(url: str) -> dict:
    sqlite = make_url(url).get_backend_name() == "sqlite"
    return {
        "target_metadata": Base.metadata,
        "compare_type": True,
        # ALTER TABLE on SQLite only works through table copies
        "render_as_batch": sqlite,
    }


def run_migrations_offline() -> None:
    url = _database_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_options(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    url = _database_url()
    # app.database registers the SQLite foreign-key pragma for every engine
    engine = create_engine(url, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **_configure_options(url))
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
