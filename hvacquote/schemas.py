"""Request and response bodies of the quoting API."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    if key in data:
        return data[key]
    for name, value in data.items():
        if isinstance(name, str) and name.lower() == key:
            return value
    return None


def _int_field(data: Mapping[str, Any], key: str) -> int:
    value = _lookup(data, key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer")
    return value


def _str_field(data: Mapping[str, Any], key: str) -> str:
    value = _lookup(data, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _mapping_field(data: Mapping[str, Any], key: str) -> dict[str, Any] | None:
    value = _lookup(data, key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ValueError(f"{key} must be an object")
    return dict(value)


@dataclass(frozen=True)
class CalculateRequest:
    """Form data sent by the front end."""

    square_footage: int = 0
    current_system: str = ""
    home_age: str = ""
    extra_data: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> CalculateRequest:
        """Build a request from decoded JSON; raise ValueError if malformed."""
        if not isinstance(data, Mapping):
            raise ValueError("request body must be a JSON object")
        return cls(
            square_footage=_int_field(data, "square_footage"),
            current_system=_str_field(data, "current_system"),
            home_age=_str_field(data, "home_age"),
            extra_data=_mapping_field(data, "extra_data"),
        )


@dataclass(frozen=True)
class CalculateResponse:
    """Result of a capacity calculation."""

    lead_id: UUID
    square_footage: int
    min_btu: int
    max_btu: int
    min_tons: float
    max_tons: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "lead_id": str(self.lead_id),
            "square_footage": self.square_footage,
            "min_btu": self.min_btu,
            "max_btu": self.max_btu,
            "min_tons": self.min_tons,
            "max_tons": self.max_tons,
        }


@dataclass(frozen=True)
class EquipmentPiece:
    """A single piece of equipment in a bundle."""

    model: str
    btu: int = 0
    efficiency: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"model": self.model}
        if self.btu:
            result["btu"] = self.btu
        result["efficiency"] = self.efficiency
        return result


@dataclass(frozen=True)
class System:
    """A complete furnace, condenser and coil bundle."""

    furnace: EquipmentPiece
    condenser: EquipmentPiece
    coil: EquipmentPiece
    total_price: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "furnace": self.furnace.to_dict(),
            "condenser": self.condenser.to_dict(),
            "coil": self.coil.to_dict(),
            "total_price": self.total_price,
        }


@dataclass(frozen=True)
class SystemsResponse:
    """The bundles that suit one lead."""

    lead_id: UUID
    systems: tuple[System, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "systems", tuple(self.systems))

    def to_dict(self) -> dict[str, Any]:
        return {
            "lead_id": str(self.lead_id),
            "systems": [system.to_dict() for system in self.systems],
        }