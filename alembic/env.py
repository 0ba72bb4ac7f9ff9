from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from photo_service.core.config import settings
from photo_service.core.database import Base
import photo_service.models  # noqa: F401  Import all models

# Alembic Config object
config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Set SQLAlchemy URL from settings, with a synchronous driver
# Escape % characters for ConfigParser (% becomes %%)
db_url = (
    settings.DATABASE_URL
    .replace('+asyncpg', '')
    .replace('+aiosqlite', '')
    .replace('postgres://', 'postgresql://', 1)
    .replace('%', '%%')
)
config.set_main_option('sqlalchemy.url', db_url)

# Add your model's MetaData object here for 'autogenerate' support
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
