# alembic/env.py
from __future__ import annotations

from logging.config import fileConfig

from sqlalchemy import create_engine
from alembic import context

# Importa settings y metadata
from app.core.config import settings
from app.db.base import Base
# asegura registro de todos los modelos
from app.users.models import User  # noqa: F401
from app.images.models import Image  # noqa: F401
from app.posts.models import Post  # noqa: F401
from app.comments.models import Comment  # noqa: F401

config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _sync_url(url: str) -> str:
    """
    Alembic usa motor SÍNCRONO (psycopg3):
    +asyncpg → +psycopg; sin sufijo → +psycopg.
    """
    if "+asyncpg" in url:
        return url.replace("+asyncpg", "+psycopg")
    if "+psycopg" in url:
        return url
    return url.replace("postgresql://", "postgresql+psycopg://", 1)


def run_migrations_offline():
    context.configure(
        url=_sync_url(settings.DATABASE_URL),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = create_engine(_sync_url(settings.DATABASE_URL))
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
