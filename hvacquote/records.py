"""Row types stored in and read from the quoting database."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID


class EquipmentType(str, enum.Enum):
    """Kind of a catalogue item."""

    FURNACE = "furnace"
    OUTDOOR_CONDENSER = "outdoor_condenser"
    EVAPORATOR_COIL = "evaporator_coil"

    @classmethod
    def parse(cls, value: Any) -> EquipmentType | None:
        """Convert a stored value (str, bytes or None) to an equipment type."""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        if isinstance(value, (bytes, bytearray)):
            value = bytes(value).decode("utf-8")
        if not isinstance(value, str):
            raise TypeError(
                f"unsupported scan type for EquipmentType: {type(value).__name__}"
            )
        return cls(value)


@dataclass(frozen=True)
class Equipment:
    """One catalogue item: a furnace, condenser or evaporator coil."""

    id: UUID
    model_number: str
    manufacturer: str | None = None
    equipment_type: EquipmentType | None = None
    btu: int | None = None
    efficiency_rating: Decimal | None = None
    equipment_length: Decimal | None = None
    equipment_width: Decimal | None = None
    equipment_height: Decimal | None = None
    price: Decimal | None = None


@dataclass(frozen=True)
class SystemUser:
    """A lead: the submitted form and the BTU range worked out for it."""

    id: UUID
    created_at: datetime | None = None
    form_data: Any = None
    needed_min_btu: int | None = None
    needed_max_btu: int | None = None


@dataclass(frozen=True)
class CompatibleSystem:
    """A stored furnace, condenser and coil bundle."""

    id: UUID
    furnace_id: UUID
    condenser_id: UUID
    coil_id: UUID
    total_price: Decimal | None = None


@dataclass(frozen=True)
class CompatibleSystemRow:
    """One matching furnace, condenser and coil combination with its price."""

    furnace_id: UUID
    furnace_manufacturer: str | None
    furnace_btu: int | None
    furnace_afue: Decimal | None
    furnace_price: Decimal | None
    condenser_id: UUID
    condenser_manufacturer: str | None
    condenser_btu: int | None
    condenser_afue: Decimal | None
    condenser_price: Decimal | None
    coil_id: UUID
    coil_manufacturer: str | None
    coil_btu: int | None
    coil_afue: Decimal | None
    coil_price: Decimal | None
    total_price: Decimal | None