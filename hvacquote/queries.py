"""Database access for the equipment catalogue and leads."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any
from uuid import UUID

from hvacquote.records import (
    CompatibleSystemRow,
    Equipment,
    EquipmentType,
    SystemUser,
)


class NotFoundError(LookupError):
    """Raised when a requested row does not exist."""


_TYPE_NAMES = ", ".join(f"'{member.value}'" for member in EquipmentType)

_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS equipment (
    id TEXT PRIMARY KEY,
    manufacturer TEXT,
    model_number TEXT NOT NULL,
    equipment_type TEXT CHECK (equipment_type IN ({_TYPE_NAMES})),
    btu INTEGER,
    efficiency_rating NUMERIC,
    equipment_length NUMERIC,
    equipment_width NUMERIC,
    equipment_height NUMERIC,
    price NUMERIC
);
CREATE TABLE IF NOT EXISTS system_users (
    id TEXT PRIMARY KEY,
    created_at TEXT,
    form_data TEXT,
    needed_min_btu NUMERIC,
    needed_max_btu NUMERIC
);
CREATE TABLE IF NOT EXISTS compatible_systems (
    id TEXT PRIMARY KEY,
    furnace_id TEXT NOT NULL REFERENCES equipment (id),
    condenser_id TEXT NOT NULL REFERENCES equipment (id),
    coil_id TEXT NOT NULL REFERENCES equipment (id),
    total_price NUMERIC
);
"""

_EQUIPMENT_COLUMNS = (
    "id, manufacturer, model_number, equipment_type, btu, efficiency_rating, "
    "equipment_length, equipment_width, equipment_height, price"
)

_CREATE_EQUIPMENT = f"""
INSERT INTO equipment ({_EQUIPMENT_COLUMNS})
VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

_GET_EQUIPMENT_BY_ID = f"SELECT {_EQUIPMENT_COLUMNS} FROM equipment WHERE id = ?"

_GET_EQUIPMENT = f"""
SELECT {_EQUIPMENT_COLUMNS} FROM equipment
WHERE equipment_type = ?
    AND equipment_width = ?
"""

_FIND_COMPATIBLE_SYSTEMS = """
SELECT
  f.id, f.manufacturer, f.btu, f.efficiency_rating, f.price,
  c.id, c.manufacturer, c.btu, c.efficiency_rating, c.price,
  co.id, co.manufacturer, co.btu, co.efficiency_rating, co.price,
  (f.price + c.price + co.price) AS total_price
FROM equipment AS f
  JOIN equipment AS c  ON c.equipment_type = 'outdoor_condenser'
  JOIN equipment AS co ON co.equipment_type = 'evaporator_coil'
WHERE
  f.equipment_type = 'furnace'
  AND f.equipment_width = :width
  AND co.equipment_width = :width
  AND c.btu >= :min_btu
  AND c.btu <= :max_btu
  AND co.btu = c.btu
ORDER BY total_price ASC
"""

_CREATE_SYSTEM_USER = """
INSERT INTO system_users (id, created_at, form_data, needed_min_btu, needed_max_btu)
VALUES (?, ?, ?, ?, ?)
"""

_GET_SYSTEM_USER = """
SELECT id, created_at, form_data, needed_min_btu, needed_max_btu FROM system_users
WHERE id = ?
"""


def _sqlite_path(database_url: str) -> str:
    if not database_url:
        raise ValueError("database URL is empty")
    if database_url == ":memory:":
        return database_url
    scheme, separator, rest = database_url.partition("://")
    if not separator:
        return database_url
    if scheme.lower() not in ("sqlite", "sqlite3"):
        raise ValueError(f"unsupported database scheme: {scheme!r}")
    if rest in ("", "/", "/:memory:"):
        return ":memory:"
    return rest[1:] if rest.startswith("/") else rest


def connect(database_url: str) -> sqlite3.Connection:
    """Open the database named by a sqlite URL or path and check it answers."""
    connection = sqlite3.connect(_sqlite_path(database_url))
    try:
        connection.execute("SELECT 1").fetchone()
    except sqlite3.Error:
        connection.close()
        raise
    return connection


def create_schema(connection: sqlite3.Connection) -> None:
    """Create the tables the queries use, if they are missing."""
    connection.executescript(_SCHEMA)


def _uuid_text(value: UUID | str) -> str:
    return str(value if isinstance(value, UUID) else UUID(str(value)))


def _number(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    return value


def _decimal(value: Any) -> Decimal | None:
    return None if value is None else Decimal(str(value))


def _integer(value: Any) -> int | None:
    return None if value is None else int(value)


def _equipment_from_row(row: tuple) -> Equipment:
    (item_id, manufacturer, model_number, equipment_type, btu, efficiency,
     length, width, height, price) = row
    return Equipment(
        id=UUID(item_id),
        manufacturer=manufacturer,
        model_number=model_number,
        equipment_type=EquipmentType.parse(equipment_type),
        btu=_integer(btu),
        efficiency_rating=_decimal(efficiency),
        equipment_length=_decimal(length),
        equipment_width=_decimal(width),
        equipment_height=_decimal(height),
        price=_decimal(price),
    )


def _system_user_from_row(row: tuple) -> SystemUser:
    user_id, created_at, form_data, needed_min, needed_max = row
    return SystemUser(
        id=UUID(user_id),
        created_at=None if created_at is None else datetime.fromisoformat(created_at),
        form_data=None if form_data is None else json.loads(form_data),
        needed_min_btu=_integer(needed_min),
        needed_max_btu=_integer(needed_max),
    )


def _compatible_from_row(row: tuple) -> CompatibleSystemRow:
    (f_id, f_maker, f_btu, f_afue, f_price,
     c_id, c_maker, c_btu, c_afue, c_price,
     co_id, co_maker, co_btu, co_afue, co_price, total) = row
    return CompatibleSystemRow(
        furnace_id=UUID(f_id),
        furnace_manufacturer=f_maker,
        furnace_btu=_integer(f_btu),
        furnace_afue=_decimal(f_afue),
        furnace_price=_decimal(f_price),
        condenser_id=UUID(c_id),
        condenser_manufacturer=c_maker,
        condenser_btu=_integer(c_btu),
        condenser_afue=_decimal(c_afue),
        condenser_price=_decimal(c_price),
        coil_id=UUID(co_id),
        coil_manufacturer=co_maker,
        coil_btu=_integer(co_btu),
        coil_afue=_decimal(co_afue),
        coil_price=_decimal(co_price),
        total_price=_decimal(total),
    )


def _form_json(form_data: Any) -> str | None:
    if form_data is None:
        return None
    if isinstance(form_data, (bytes, bytearray)):
        form_data = bytes(form_data).decode("utf-8")
    if isinstance(form_data, str):
        json.loads(form_data)
        return form_data
    return json.dumps(form_data)


class Queries:
    """Typed queries over an open database connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def create_equipment(self, equipment: Equipment) -> Equipment:
        """Insert a catalogue item and return it as stored."""
        equipment_type = EquipmentType.parse(equipment.equipment_type)
        with self._connection:
            self._connection.execute(
                _CREATE_EQUIPMENT,
                (
                    _uuid_text(equipment.id),
                    equipment.manufacturer,
                    equipment.model_number,
                    None if equipment_type is None else equipment_type.value,
                    equipment.btu,
                    _number(equipment.efficiency_rating),
                    _number(equipment.equipment_length),
                    _number(equipment.equipment_width),
                    _number(equipment.equipment_height),
                    _number(equipment.price),
                ),
            )
        row = self._connection.execute(
            _GET_EQUIPMENT_BY_ID, (_uuid_text(equipment.id),)
        ).fetchone()
        return _equipment_from_row(row)

    def get_equipment(
        self, equipment_type: EquipmentType | str | None, equipment_width: Any
    ) -> list[Equipment]:
        """Return the items of one type and width."""
        kind = EquipmentType.parse(equipment_type)
        rows = self._connection.execute(
            _GET_EQUIPMENT,
            (None if kind is None else kind.value, _number(equipment_width)),
        )
        return [_equipment_from_row(row) for row in rows]

    def find_compatible_systems(
        self, equipment_width: Any, min_btu: int | None, max_btu: int | None
    ) -> list[CompatibleSystemRow]:
        """Return furnace, condenser and coil combinations, cheapest first."""
        rows = self._connection.execute(
            _FIND_COMPATIBLE_SYSTEMS,
            {
                "width": _number(equipment_width),
                "min_btu": min_btu,
                "max_btu": max_btu,
            },
        )
        return [_compatible_from_row(row) for row in rows]

    def create_system_user(
        self,
        user_id: UUID | str,
        form_data: Any,
        needed_min_btu: int | None,
        needed_max_btu: int | None,
    ) -> SystemUser:
        """Store a lead with the current time and return it as stored."""
        key = _uuid_text(user_id)
        with self._connection:
            self._connection.execute(
                _CREATE_SYSTEM_USER,
                (
                    key,
                    datetime.now(timezone.utc).isoformat(),
                    _form_json(form_data),
                    needed_min_btu,
                    needed_max_btu,
                ),
            )
        return self.get_system_user(key)

    def get_system_user(self, user_id: UUID | str) -> SystemUser:
        """Return one lead; raise NotFoundError if there is none."""
        row = self._connection.execute(
            _GET_SYSTEM_USER, (_uuid_text(user_id),)
        ).fetchone()
        if row is None:
            raise NotFoundError(f"system user {user_id} not found")
        return _system_user_from_row(row)