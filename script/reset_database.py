#!/usr/bin/env python3
"""
Database Reset Script
Drop and recreate the PostgreSQL database, then create the event hub tables

Notes:
- This script only resets database structure, does not seed data
- To seed users and categories, run `python -m script.seed_data`
"""

import asyncio
import time

from sqlalchemy import create_engine, text

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
import src.service.event_hub.driven_adapter.model  # noqa: F401  # registers tables on Base


DB_WAIT_SECONDS = 1


def _get_sync_url(async_url: str) -> str:
    """Convert async database URL to sync URL"""
    if async_url.startswith('postgresql+asyncpg://'):
        return async_url.replace('postgresql+asyncpg://', 'postgresql://')
    return async_url


def _parse_db_connection(database_url: str) -> tuple[str, str]:
    """Parse database URL and return (server_url, db_name)"""
    sync_url = _get_sync_url(database_url)
    db_name = sync_url.split('/')[-1]
    server_url = sync_url.rsplit('/', 1)[0]
    return server_url, db_name


def _drop_and_create_db(server_url: str, db_name: str) -> None:
    admin_engine = create_engine(f'{server_url}/postgres', isolation_level='AUTOCOMMIT')

    try:
        with admin_engine.connect() as conn:
            conn.execute(
                text(
                    'SELECT pg_terminate_backend(pid) FROM pg_stat_activity '
                    'WHERE datname = :db_name AND pid <> pg_backend_pid()'
                ),
                {'db_name': db_name},
            )

            conn.execute(text(f'DROP DATABASE IF EXISTS "{db_name}"'))
            print(f"   ✅ Database '{db_name}' dropped")

            time.sleep(DB_WAIT_SECONDS)

            conn.execute(text(f'CREATE DATABASE "{db_name}"'))
            print(f"   ✅ Database '{db_name}' created")
    finally:
        admin_engine.dispose()


async def main() -> None:
    print('🔄 Starting database reset...')
    print('=' * 50)

    server_url, db_name = _parse_db_connection(settings.DATABASE_URL_ASYNC)
    try:
        print('🗑️ Dropping database...')
        _drop_and_create_db(server_url, db_name)

        print('🏗️ Creating tables...')
        await create_db_and_tables()
    except Exception as e:
        print(f'❌ Reset failed: {e}')
        raise SystemExit(1)
    finally:
        await dispose_engine()

    print('=' * 50)
    print('✅ Database reset completed!')


if __name__ == '__main__':
    asyncio.run(main())
