#!/usr/bin/env python3
"""
Database Seed Script
Populate the users and categories that events reference

Users and categories are owned by neighbouring services; locally they are
inserted directly so events can be created through the API.
"""

import asyncio

from sqlalchemy import func, select

from src.platform.database.orm_db_setting import Database, dispose_engine
from src.service.event_hub.driven_adapter.model import CategoryModel, EventModel, UserModel


TEST_USERS = [
    ('Ann Organiser', 'ann@example.com'),
    ('Bob Organiser', 'bob@example.com'),
    ('Load Test User', 'load@example.com'),
]

CATEGORIES = ['Concerts', 'Theatre', 'Exhibitions', 'Sports', 'Workshops']


async def _seed_data(database: Database) -> None:
    """Seed users and categories in a single transaction"""
    async with database.session() as session:
        try:
            print(f'👥 Creating {len(TEST_USERS)} users...')
            users = [UserModel(name=name, email=email) for name, email in TEST_USERS]
            session.add_all(users)

            print(f'🏷️  Creating {len(CATEGORIES)} categories...')
            categories = [CategoryModel(name=name) for name in CATEGORIES]
            session.add_all(categories)

            await session.flush()
            for user in users:
                print(f'   ✅ User ID={user.id}, Email={user.email}')
            for category in categories:
                print(f'   ✅ Category ID={category.id}, Name={category.name}')

            await session.commit()
            print('✅ All data committed successfully!')
        except Exception as e:
            await session.rollback()
            print(f'❌ Rolling back: {e}')
            raise


async def verify_data(database: Database) -> None:
    print('🔍 Verifying seeded data...')
    async with database.session() as session:
        for model in (UserModel, CategoryModel, EventModel):
            count = await session.scalar(select(func.count()).select_from(model))
            print(f'   {model.__tablename__} count: {count}')


async def main() -> None:
    print('🌱 Starting data seeding...')
    print('=' * 50)

    database = Database()
    try:
        await _seed_data(database)
        await verify_data(database)
    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        raise SystemExit(1)
    finally:
        await dispose_engine()

    print('=' * 50)
    print('🌱 Data seeding completed!')


if __name__ == '__main__':
    asyncio.run(main())
