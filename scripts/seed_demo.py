#!/usr/bin/env python3
"""
Seed script to create a demo floor plan and staff accounts
"""

import asyncio
import uuid


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from tablebook.database import SessionLocal, engine, Base
    from tablebook.models.table import RestaurantTable, TableStatus, TableType
    from tablebook.models.user import User, UserRole

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        # Check if the floor plan already exists
        result = await db.execute(select(RestaurantTable).limit(1))
        if result.scalar_one_or_none():
            print("Demo data already exists. Skipping...")
            return

        print("Creating floor plan...")

        floor_plan = [
            {"table_number": "T1", "capacity": 2, "location_description": "Window"},
            {"table_number": "T2", "capacity": 2, "location_description": "Window"},
            {"table_number": "T3", "capacity": 4, "location_description": "Main dining area"},
            {"table_number": "T4", "capacity": 4, "location_description": "Main dining area"},
            {"table_number": "T5", "capacity": 6, "table_type": TableType.BOOTH, "location_description": "Back booth"},
            {"table_number": "T6", "capacity": 8, "table_type": TableType.OUTDOOR, "location_description": "Patio"},
            {"table_number": "B1", "capacity": 2, "table_type": TableType.BAR, "location_description": "Bar"},
            {
                "table_number": "T7",
                "capacity": 10,
                "status": TableStatus.MAINTENANCE,
                "location_description": "Private room",
            },
        ]

        for table_data in floor_plan:
            db.add(RestaurantTable(id=uuid.uuid4(), **table_data))

        # Accounts log in elsewhere; the password column only needs a value
        manager = User(
            id=uuid.uuid4(),
            email="mario@example.com",
            hashed_password="!",
            first_name="Mario",
            last_name="Rossi",
            phone="+15559876543",
            role=UserRole.MANAGER,
        )
        db.add(manager)

        customer = User(
            id=uuid.uuid4(),
            email="alice@example.com",
            hashed_password="!",
            first_name="Alice",
            last_name="Walker",
            phone="+15551230000",
            role=UserRole.CUSTOMER,
        )
        db.add(customer)

        await db.commit()

        print(f"""
Demo data created successfully!

Tables: {len(floor_plan)} created ({sum(t["capacity"] for t in floor_plan)} seats)

Users:
  Manager:
    Email: mario@example.com
    ID: {manager.id}

  Customer:
    Email: alice@example.com
    ID: {customer.id}

Approve reservations by posting {{"approver_id": "{manager.id}"}}
to /reservations/<id>/approve.
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
