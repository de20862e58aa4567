import json
from decimal import Decimal
from uuid import uuid4

import pytest
from werkzeug.wrappers import Request

from hvacquote.handlers import Handler, calculate_btu_range, parse_efficiency
from hvacquote.queries import Queries, connect, create_schema
from hvacquote.records import Equipment, EquipmentType


@pytest.fixture
def connection():
    conn = connect(":memory:")
    create_schema(conn)
    yield conn
    conn.close()


def _post(body):
    data = body if isinstance(body, str) else json.dumps(body)
    return Request.from_values(
        path="/api/calculate", method="POST", data=data, content_type="application/json"
    )


def _get(lead_id):
    return Request.from_values(path=f"/api/systems/{lead_id}", method="GET")


def _add(queries, kind, maker, price, btu=None, width="21", efficiency=None):
    return queries.create_equipment(
        Equipment(
            id=uuid4(),
            model_number=f"M-{uuid4().hex[:8]}",
            manufacturer=maker,
            equipment_type=kind,
            btu=btu,
            efficiency_rating=None if efficiency is None else Decimal(efficiency),
            equipment_width=Decimal(width),
            price=Decimal(price),
        )
    )


def test_btu_range_worked_example():
    assert calculate_btu_range(1200) == (24000, 36000)


@pytest.mark.parametrize("square_footage", [500, 999, 1500, 2750, 4321, 10000])
def test_btu_range_invariants(square_footage):
    low, high = calculate_btu_range(square_footage)
    assert low % 6000 == 0
    assert high % 6000 == 0
    assert 0 <= low <= high


def test_btu_range_zero():
    assert calculate_btu_range(0) == (0, 0)


@pytest.mark.parametrize("text", ["", None, "abc"])
def test_parse_efficiency_falls_back_to_zero(text):
    assert parse_efficiency(text) == 0.0


def test_parse_efficiency_reads_numbers():
    assert parse_efficiency("96.5") == 96.5
    assert parse_efficiency(Decimal("14")) == 14.0


def test_calculate_stores_lead(connection):
    handler = Handler(connection)
    response = handler.calculate(
        _post({"square_footage": 2000, "current_system": "gas", "home_age": "old"})
    )
    assert response.status_code == 200
    assert response.mimetype == "application/json"
    body = json.loads(response.get_data(as_text=True))
    assert (body["min_btu"], body["max_btu"]) == calculate_btu_range(2000)
    assert body["square_footage"] == 2000
    assert body["min_tons"] * 12000 == body["min_btu"]
    assert body["max_tons"] * 12000 == body["max_btu"]

    lead = Queries(connection).get_system_user(body["lead_id"])
    assert lead.needed_min_btu == body["min_btu"]
    assert lead.needed_max_btu == body["max_btu"]
    assert lead.form_data["square_footage"] == 2000
    assert lead.form_data["current_system"] == "gas"
    assert lead.form_data["extra_data"] is None
    assert "timestamp" in lead.form_data


@pytest.mark.parametrize(
    "body", ["not json", '{"square_footage": "big"}', "[1, 2]", '{"square_footage": 1.5}']
)
def test_calculate_rejects_bad_body(connection, body):
    response = Handler(connection).calculate(_post(body))
    assert response.status_code == 400
    assert response.get_data(as_text=True) == "Invalid request body\n"


def test_calculate_reports_storage_failure(connection):
    handler = Handler(connection)
    connection.close()
    response = handler.calculate(_post({"square_footage": 1500}))
    assert response.status_code == 500
    assert response.get_data(as_text=True) == "Failed to save calculation\n"


def test_systems_rejects_bad_id(connection):
    response = Handler(connection).systems(_get("nope"), "nope")
    assert response.status_code == 400
    assert response.get_data(as_text=True) == "Invalid lead ID\n"


def test_systems_unknown_lead(connection):
    missing = str(uuid4())
    response = Handler(connection).systems(_get(missing), missing)
    assert response.status_code == 404
    assert response.get_data(as_text=True) == "Lead not found\n"


def test_systems_lists_bundle(connection):
    queries = Queries(connection)
    _add(queries, EquipmentType.FURNACE, "Acme", "1000", efficiency="96")
    _add(queries, EquipmentType.OUTDOOR_CONDENSER, "Acme", "1500", btu=36000,
         width="29", efficiency="14")
    _add(queries, EquipmentType.EVAPORATOR_COIL, "Bolt", "500", btu=36000)
    lead = queries.create_system_user(uuid4(), {}, 36000, 36000)

    response = Handler(connection).systems(_get(lead.id), str(lead.id))
    assert response.status_code == 200
    body = json.loads(response.get_data(as_text=True))
    assert body["lead_id"] == str(lead.id)
    assert len(body["systems"]) == 1
    system = body["systems"][0]
    assert system["furnace"]["model"] == "Acme"
    assert "btu" not in system["furnace"]
    assert system["furnace"]["efficiency"] == 96.0
    assert system["condenser"]["model"] == "Acme 3.0 ton"
    assert system["condenser"]["btu"] == 36000
    assert system["condenser"]["efficiency"] == 14.0
    assert system["coil"]["model"] == "Bolt Coil"
    assert system["coil"]["efficiency"] == 0.0
    assert system["total_price"] == 3000.0


def test_systems_sorted_by_price(connection):
    queries = Queries(connection)
    _add(queries, EquipmentType.FURNACE, "Acme", "2000")
    _add(queries, EquipmentType.FURNACE, "Acme", "1000")
    _add(queries, EquipmentType.FURNACE, "Narrow", "100", width="17.5")
    _add(queries, EquipmentType.OUTDOOR_CONDENSER, "Acme", "1500", btu=36000)
    _add(queries, EquipmentType.EVAPORATOR_COIL, "Bolt", "500", btu=36000)
    lead = queries.create_system_user(uuid4(), {}, 36000, 42000)

    body = json.loads(
        Handler(connection).systems(_get(lead.id), str(lead.id)).get_data(as_text=True)
    )
    prices = [system["total_price"] for system in body["systems"]]
    assert len(prices) == 2
    assert prices == sorted(prices)
    assert all(system["furnace"]["model"] == "Acme" for system in body["systems"])


def test_systems_outside_range_is_empty(connection):
    queries = Queries(connection)
    _add(queries, EquipmentType.FURNACE, "Acme", "1000")
    _add(queries, EquipmentType.OUTDOOR_CONDENSER, "Acme", "1500", btu=60000)
    _add(queries, EquipmentType.EVAPORATOR_COIL, "Bolt", "500", btu=60000)
    lead = queries.create_system_user(uuid4(), {}, 24000, 36000)

    body = json.loads(
        Handler(connection).systems(_get(lead.id), str(lead.id)).get_data(as_text=True)
    )
    assert body["systems"] == []