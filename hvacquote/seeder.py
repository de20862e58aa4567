"""Fill the equipment catalogue with a fixed set of sample products."""

from __future__ import annotations

import argparse
import logging
import os
import sqlite3
import sys
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from uuid import uuid4

from dotenv import load_dotenv

from hvacquote.queries import Queries, connect, create_schema
from hvacquote.records import Equipment, EquipmentType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EquipmentData:
    """A catalogue entry before it is stored."""

    manufacturer: str
    model_number: str
    equipment_type: str
    btu: int
    efficiency_rating: float
    length: float
    width: float
    height: float
    price: float


def _item(maker, model, kind, btu, efficiency, length, width, height, price):
    return EquipmentData(maker, model, kind, btu, efficiency, length, width, height, price)


_FURNACES = (
    # Standard efficiency (80% AFUE)
    _item("Goodman", "GM9C800603AN", "furnace", 60000, 80, 33, 17.5, 28, 1200),
    _item("Goodman", "GM9C800804BN", "furnace", 80000, 80, 33, 21, 28, 1400),
    _item("Goodman", "GM9C801005CN", "furnace", 100000, 80, 33, 21, 28, 1600),
    # High efficiency (96% AFUE)
    _item("Goodman", "GMVC960603BN", "furnace", 60000, 96, 34.5, 17.5, 29.5, 2200),
    _item("Goodman", "GMVC960804CN", "furnace", 80000, 96, 34.5, 21, 29.5, 2500),
    _item("Goodman", "GMVC961005CN", "furnace", 100000, 96, 34.5, 21, 29.5, 2800),
    # Premium (98% AFUE)
    _item("Carrier", "59MN7A060F17", "furnace", 60000, 98.5, 35, 17.5, 30, 3500),
    _item("Carrier", "59MN7A080F21", "furnace", 80000, 98.5, 35, 21, 30, 3800),
    _item("Trane", "S9V2C100D5", "furnace", 100000, 97, 35, 21, 30, 4200),
)

_CONDENSERS = (
    # 2 ton
    _item("Goodman", "GSX130241", "outdoor_condenser", 24000, 13, 26, 26, 28, 1100),
    _item("Goodman", "GSX140241", "outdoor_condenser", 24000, 14, 26, 26, 28, 1300),
    _item("Goodman", "GSXC160241", "outdoor_condenser", 24000, 16, 29, 29, 30, 2100),
    # 3 ton
    _item("Goodman", "GSX130361", "outdoor_condenser", 36000, 13, 29, 29, 30, 1400),
    _item("Goodman", "GSX140361", "outdoor_condenser", 36000, 14, 29, 29, 30, 1700),
    _item("Goodman", "GSXC160361", "outdoor_condenser", 36000, 16, 35, 35, 36, 2600),
    # 4 ton
    _item("Goodman", "GSX130481", "outdoor_condenser", 48000, 13, 35, 35, 36, 1700),
    _item("Goodman", "GSX140481", "outdoor_condenser", 48000, 14, 35, 35, 36, 2100),
    _item("Carrier", "24ACC448", "outdoor_condenser", 48000, 17, 35, 35, 39, 3200),
    # 5 ton
    _item("Goodman", "GSX130601", "outdoor_condenser", 60000, 13, 35, 35, 41, 2000),
    _item("Goodman", "GSX140601", "outdoor_condenser", 60000, 14, 35, 35, 41, 2400),
    _item("Trane", "4TTR6060", "outdoor_condenser", 60000, 16, 37, 37, 43, 3800),
)

_COILS = (
    # 2 ton, for 17.5" furnaces
    _item("Goodman", "CAPF3030A6", "evaporator_coil", 24000, 0, 21, 17.5, 14, 450),
    _item("Goodman", "CHPF3030A6", "evaporator_coil", 24000, 0, 21, 17.5, 14, 500),
    # 3 ton, for 17.5" and 21" furnaces
    _item("Goodman", "CAPF3636A6", "evaporator_coil", 36000, 0, 21, 17.5, 17.5, 550),
    _item("Goodman", "CAPF3636C6", "evaporator_coil", 36000, 0, 24.5, 21, 17.5, 600),
    _item("Goodman", "CHPF3636C6", "evaporator_coil", 36000, 0, 24.5, 21, 17.5, 650),
    # 4 ton, for 21" furnaces
    _item("Goodman", "CAPF4860C6", "evaporator_coil", 48000, 0, 24.5, 21, 21, 700),
    _item("Goodman", "CHPF4860C6", "evaporator_coil", 48000, 0, 24.5, 21, 21, 750),
    # 5 ton, for 21" furnaces
    _item("Goodman", "CAPF6124D6", "evaporator_coil", 60000, 0, 24.5, 21, 24.5, 850),
    _item("Goodman", "CHPF6124D6", "evaporator_coil", 60000, 0, 24.5, 21, 24.5, 900),
)

_COUNT_BY_TYPE = """
SELECT equipment_type, COUNT(*)
FROM equipment
GROUP BY equipment_type
ORDER BY equipment_type
"""

_COUNT_THREE_TON = """
SELECT COUNT(*)
FROM equipment AS f
JOIN equipment AS c ON c.equipment_type = 'outdoor_condenser'
JOIN equipment AS co ON co.equipment_type = 'evaporator_coil'
WHERE f.equipment_type = 'furnace'
AND f.equipment_width = '21'
AND co.equipment_width = '21'
AND c.btu >= 36000
AND c.btu <= 36000
AND co.btu >= 36000
AND co.btu <= 36000
"""


def seed_catalog() -> list[EquipmentData]:
    """Return the sample furnaces, condensers and coils, in that order."""
    return [*_FURNACES, *_CONDENSERS, *_COILS]


def insert_equipment(queries: Queries, data: EquipmentData) -> Equipment:
    """Store one catalogue entry under a fresh id and return it as stored."""
    equipment = Equipment(
        id=uuid4(),
        manufacturer=data.manufacturer,
        model_number=data.model_number,
        equipment_type=EquipmentType.parse(data.equipment_type),
        btu=data.btu if data.btu > 0 else None,
        efficiency_rating=(
            Decimal(f"{data.efficiency_rating:.1f}") if data.efficiency_rating > 0 else None
        ),
        price=Decimal(f"{data.price:.2f}"),
        equipment_length=Decimal(f"{data.length:.1f}"),
        equipment_width=Decimal(f"{data.width:.1f}"),
        equipment_height=Decimal(f"{data.height:.1f}"),
    )
    return queries.create_equipment(equipment)


def verify_data(connection: sqlite3.Connection) -> tuple[dict[str, int], int | None]:
    """Print counts per type and of 3-ton, 21-inch bundles, and return them."""
    counts: dict[str, int] = {}
    try:
        rows = connection.execute(_COUNT_BY_TYPE).fetchall()
    except sqlite3.Error as exc:
        logger.error("Failed to verify data: %s", exc)
        return counts, None

    print("\nEquipment counts by type:")
    for equipment_type, count in rows:
        counts[equipment_type] = count
        print(f"  {equipment_type}: {count}")

    print('\nTesting compatible systems query for 3-ton systems (21" width):')
    try:
        row = connection.execute(_COUNT_THREE_TON).fetchone()
    except sqlite3.Error as exc:
        logger.error("Failed to test compatible systems: %s", exc)
        return counts, None

    compatible = None
    if row is not None:
        compatible = row[0]
        print(f"  Found {compatible} compatible 3-ton systems")
    return counts, compatible


def seed(connection: sqlite3.Connection) -> list[Equipment]:
    """Replace the catalogue with the sample data and return what was stored."""
    queries = Queries(connection)

    logger.info("Clearing existing equipment data...")
    with connection:
        connection.execute("DELETE FROM equipment")

    logger.info("Seeding equipment data...")
    stored = []
    for data in seed_catalog():
        try:
            stored.append(insert_equipment(queries, data))
        except (sqlite3.Error, ValueError) as exc:
            logger.error("Failed to insert %s: %s", data.model_number, exc)
        else:
            logger.info("Inserted %s %s", data.equipment_type, data.model_number)

    logger.info("Verifying seeded data:")
    verify_data(connection)
    logger.info("Seeding complete!")
    return stored


def main(argv: list[str] | None = None) -> int:
    """Seed the database named by DATABASE_URL."""
    parser = argparse.ArgumentParser(
        prog="hvacquote-seed",
        description="Replace the equipment catalogue with sample data.",
    )
    parser.parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    env_file = Path(".env")
    if env_file.is_file():
        load_dotenv(env_file)
    else:
        logger.info("No .env file found")

    database_url = os.environ.get("DATABASE_URL", "")
    if not database_url:
        logger.critical("DATABASE_URL not set")
        raise SystemExit(1)

    try:
        connection = connect(database_url)
    except (sqlite3.Error, ValueError) as exc:
        logger.critical("Failed to connect to database: %s", exc)
        raise SystemExit(1) from exc

    try:
        create_schema(connection)
        try:
            seed(connection)
        except sqlite3.Error as exc:
            logger.critical("Failed to clear equipment: %s", exc)
            raise SystemExit(1) from exc
    finally:
        connection.close()
    return 0