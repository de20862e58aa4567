# hvacquote

hvacquote turns a homeowner's square footage into a cooling requirement and
lists the furnace, outdoor condenser and evaporator coil bundles from an
equipment catalogue that fit it, cheapest first. Data is kept in SQLite.

## How sizing works

`hvacquote.handlers.calculate_btu_range(square_footage)` returns a
`(min_btu, max_btu)` pair. The square footage is divided by 600 (smallest
system) and by 400 (largest system), each result truncated to whole tons and
multiplied by 12,000 BTU per ton, then rounded up to a multiple of 6,000 BTU.
For example, 1,500 square feet gives `(24000, 36000)`.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Seeding the equipment catalogue

The catalogue holds furnaces (80%, 96% and premium AFUE), outdoor condensers
from 2 to 5 tons at several SEER ratings, and matching evaporator coils
(`hvacquote.seeder.seed_catalog()` returns the list).

Set `DATABASE_URL`, either in the environment or in a `.env` file in the
working directory, then run:

```
hvacquote-seed
```

`DATABASE_URL` may be a plain file path, `:memory:`, or a URL of the form
`sqlite:///relative/path.db`, `sqlite:////absolute/path.db` or `sqlite://`
(in memory). Any other scheme is refused. The command exits with status 1 if
`DATABASE_URL` is unset or the database cannot be opened.

The command creates any missing tables, deletes every row of the equipment
table, inserts the catalogue under fresh ids, logs each insert, and prints how
many items of each type are stored along with how many 3-ton combinations fit
a 21-inch cabinet.

## Using the library

- `hvacquote.queries.connect(database_url)` opens a SQLite connection (same
  URL forms as above) and checks that it answers;
  `hvacquote.queries.create_schema(connection)` creates the `equipment`,
  `system_users` and `compatible_systems` tables if they are missing.
- `hvacquote.queries.Queries(connection)` offers `create_equipment`,
  `get_equipment(equipment_type, equipment_width)`,
  `find_compatible_systems(equipment_width, min_btu, max_btu)`,
  `create_system_user(user_id, form_data, needed_min_btu, needed_max_btu)`
  and `get_system_user(user_id)`, which raises
  `hvacquote.queries.NotFoundError` for an unknown id.
- `hvacquote.records` holds the row types: `EquipmentType`, `Equipment`,
  `SystemUser`, `CompatibleSystem` and `CompatibleSystemRow`.
- `hvacquote.schemas` holds the request and response shapes
  (`CalculateRequest.from_dict`, and `to_dict` on `CalculateResponse`,
  `EquipmentPiece`, `System` and `SystemsResponse`).
- `hvacquote.handlers.Handler(connection)` answers werkzeug `Request` objects
  with werkzeug `Response` objects:
  - `calculate(request)` reads a JSON body (`square_footage`,
    `current_system`, `home_age`, optional `extra_data`), stores a lead and
    answers with the lead id and the BTU and tonnage range. A malformed body
    gives a 400.
  - `systems(request, lead_id)` looks up a stored lead and answers with every
    furnace, condenser and coil bundle for a 21-inch cabinet whose condenser
    falls in the lead's BTU range, with its total price. A malformed id gives
    a 400, an unknown lead a 404.
- `hvacquote.seeder.seed(connection)` loads the catalogue into a connection
  you already hold and returns the stored items.

## What it does not do

hvacquote has no HTTP server or URL routing of its own. `Handler.calculate`
and `Handler.systems` are plain methods; to serve them over HTTP, mount them
in a WSGI application (for example with werkzeug's routing) that maps
`POST /api/calculate` and `GET /api/systems/<lead_id>` to them. Storage is
SQLite only.