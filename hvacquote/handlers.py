"""HTTP handlers that size a system and list matching equipment bundles."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from werkzeug.wrappers import Request, Response

from hvacquote.queries import NotFoundError, Queries
from hvacquote.records import CompatibleSystemRow
from hvacquote.schemas import (
    CalculateRequest,
    CalculateResponse,
    EquipmentPiece,
    System,
    SystemsResponse,
)

BTU_PER_TON = 12000
SQFT_PER_TON_EFFICIENT = 600
SQFT_PER_TON_INEFFICIENT = 400
BTU_STEP = 6000
STANDARD_WIDTH = "21"


def _truncating_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def _round_up_to_step(btu: int) -> int:
    return _truncating_div(btu + BTU_STEP - 1, BTU_STEP) * BTU_STEP


def calculate_btu_range(square_footage: int) -> tuple[int, int]:
    """Return the (minimum, maximum) BTU needed, in half-ton steps."""
    min_btu = _truncating_div(square_footage, SQFT_PER_TON_EFFICIENT) * BTU_PER_TON
    max_btu = _truncating_div(square_footage, SQFT_PER_TON_INEFFICIENT) * BTU_PER_TON
    return _round_up_to_step(min_btu), _round_up_to_step(max_btu)


def parse_efficiency(text: Any) -> float:
    """Read an efficiency rating; anything missing or unreadable counts as 0."""
    if text is None or text == "":
        return 0.0
    try:
        return float(str(text))
    except ValueError:
        return 0.0


def _error(message: str, status: int) -> Response:
    response = Response(message + "\n", status=status, mimetype="text/plain")
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


def _json(payload: dict[str, Any]) -> Response:
    return Response(json.dumps(payload) + "\n", status=200, mimetype="application/json")


def _price(value: Decimal | None) -> float:
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _system_from_row(row: CompatibleSystemRow) -> System:
    furnace_model = row.furnace_manufacturer or ""

    condenser_model = row.condenser_manufacturer or ""
    if row.condenser_btu is not None:
        condenser_model += f" {row.condenser_btu / BTU_PER_TON:.1f} ton"

    coil_model = ""
    if row.coil_manufacturer is not None:
        coil_model = row.coil_manufacturer + " Coil"

    return System(
        furnace=EquipmentPiece(
            model=furnace_model,
            btu=row.furnace_btu or 0,
            efficiency=parse_efficiency(row.furnace_afue),
        ),
        condenser=EquipmentPiece(
            model=condenser_model,
            btu=row.condenser_btu or 0,
            efficiency=parse_efficiency(row.condenser_afue),
        ),
        coil=EquipmentPiece(model=coil_model, btu=row.coil_btu or 0),
        total_price=_price(row.total_price),
    )


class Handler:
    """Serves the calculate and systems endpoints over one database."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._queries = Queries(connection)

    def calculate(self, request: Request) -> Response:
        """Handle POST /api/calculate: size the system and store the lead."""
        try:
            payload = json.loads(request.get_data(as_text=True))
            form = CalculateRequest.from_dict(payload)
        except ValueError:
            return _error("Invalid request body", 400)

        min_btu, max_btu = calculate_btu_range(form.square_footage)

        form_data = {
            "square_footage": form.square_footage,
            "current_system": form.current_system,
            "home_age": form.home_age,
            "extra_data": form.extra_data,
            "timestamp": datetime.now().astimezone().isoformat(),
        }

        lead_id = uuid4()
        try:
            self._queries.create_system_user(lead_id, form_data, min_btu, max_btu)
        except sqlite3.Error:
            return _error("Failed to save calculation", 500)

        result = CalculateResponse(
            lead_id=lead_id,
            square_footage=form.square_footage,
            min_btu=min_btu,
            max_btu=max_btu,
            min_tons=min_btu / BTU_PER_TON,
            max_tons=max_btu / BTU_PER_TON,
        )
        return _json(result.to_dict())

    def systems(self, request: Request, lead_id: str) -> Response:
        """Handle GET /api/systems/{lead_id}: list bundles for a stored lead."""
        try:
            key = UUID(str(lead_id))
        except ValueError:
            return _error("Invalid lead ID", 400)

        try:
            lead = self._queries.get_system_user(key)
        except NotFoundError:
            return _error("Lead not found", 404)
        except (sqlite3.Error, ValueError):
            return _error("Failed to retrieve lead", 500)

        try:
            rows = self._queries.find_compatible_systems(
                STANDARD_WIDTH, lead.needed_min_btu or 0, lead.needed_max_btu or 0
            )
        except (sqlite3.Error, ValueError):
            return _error("Failed to find compatible systems", 500)

        result = SystemsResponse(
            lead_id=key, systems=tuple(_system_from_row(row) for row in rows)
        )
        return _json(result.to_dict())