# runnerstrack

A small HTTP service that keeps track of runners and their race results.
Runners and results are stored in an SQLite database. Each runner's personal
best and season best are updated as results are added or removed, and
everything is served as JSON.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Configuration

On start-up the service looks for a configuration file named `runners`, with
the extension `.json`, `.toml`, `.yaml` or `.yml` (tried in that order). It
looks first in the current directory and then in your home directory. Keys
are case-insensitive. The service does not start if no file is found or the
file cannot be parsed.

```yaml
database:
  driver_name: sqlite3
  connection_string: runners.db
  max_idle_connections: 5
  max_open_connections: 10
  connection_max_lifetime: 60s

http:
  server_address: 127.0.0.1:8080
```

- `database.connection_string` is required. It is the SQLite database file,
  or a `file:` URI.
- `database.driver_name` must be `sqlite` or `sqlite3`. `sqlite` is used when
  it is left out.
- `database.max_idle_connections` and `database.max_open_connections` must be
  integers.
- `database.connection_max_lifetime` must be a duration such as `60s`, `5m`,
  `1h30m` or `2d`. The units are `ns`, `us` (or `µs`), `ms`, `s`, `m`, `h`, `d`
  and `w`. The spelling `conecction_max_lifetime` is also accepted.
- `http.server_address` is the `host:port` to listen on. An empty host means
  every interface. If the setting is missing, the service listens on
  `0.0.0.0:80`.

The `runners` and `results` tables are created if they do not exist yet.

## Running

```
runnerstrack
```

To use a configuration file with another name, pass it without its
extension:

```
runnerstrack --config myconfig
```

The command exits with status 1 if it cannot find or read the configuration,
if a setting is invalid, or if the database cannot be opened.

## HTTP API

| Method | Path           | What it does                                            |
|--------|----------------|---------------------------------------------------------|
| POST   | `/runner`      | Create a runner from a JSON body                        |
| PUT    | `/runner`      | Update a runner's name, age and country (body must carry `id`) |
| DELETE | `/runner/<id>` | Mark a runner as inactive                               |
| GET    | `/runner/<id>` | Fetch a runner together with all their results          |
| GET    | `/runner`      | List runners; filter with `?country=...` or `?year=...` |
| POST   | `/results`     | Add a race result and refresh the runner's bests        |
| DELETE | `/result/<id>` | Remove a race result and refresh the runner's bests     |

A runner looks like this. Fields that are zero, false or empty are left out
of responses:

```json
{
  "id": "1",
  "first_name": "John",
  "last_name": "Smith",
  "age": 30,
  "is_active": true,
  "country": "United States",
  "personal_best": "02:00:30",
  "season_best": "02:13:03"
}
```

A result looks like this:

```json
{
  "id": "7",
  "runner_id": "1",
  "race_result": "02:10:45",
  "location": "Berlin",
  "position": 3,
  "year": 2023
}
```

Race results are written as `HH:MM:SS`.

### Rules and errors

A runner needs a first name, a last name and an age from 16 to 125. A result
needs:

- a runner id,
- a race result in the `HH:MM:SS` form,
- a location,
- a position that is not negative,
- a year from 0 to the current year.

Errors come back as a JSON body of the form `{"message": "Invalid age"}`. The
status codes are:

- `400` for invalid input to `PUT /runner`, `DELETE /runner/<id>`,
  `GET /runner/<id>`, `GET /runner`, `POST /results` and `DELETE /result/<id>`.
- `500` for every error from `POST /runner`, including validation errors.
- `500` with the message `No user found` when an update or delete names an
  unknown runner.
- `500` with an empty body when a request body is not valid JSON for a runner
  or result.

When you add a result, the database stores it and returns it with its new
`id`. The runner's personal best and season best are then lowered if the new
time is faster.

When you remove a result, the removal and the updated bests are written in
one transaction. If the removed time was the runner's personal best, it is
recomputed from the remaining results. The season best is recomputed in the
same way, but only when the removed result is from the current year.

### Listing runners

- `?country=` returns up to ten active runners from that country, with the
  best personal bests first.
- `?year=` returns up to ten runners with the best results in that year. Each
  runner's `season_best` holds their best time that year.
- With neither filter, or with both, all runners are returned.

## Using it from Python

```python
from runnerstrack.config import init_config
from runnerstrack.database import init_database
from runnerstrack.server import init_http_server

config = init_config("runners", ["."])
connection = init_database(config)
init_http_server(config, connection).start()
```

The layers can also be used on their own:

- `RunnersService` and `ResultsService` in `runnerstrack.runners_service` and
  `runnerstrack.results_service` apply the rules above. On failure they raise
  `runnerstrack.models.ResponseError`, which carries a `message` and a
  `status`.
- `RunnersRepository` and `ResultsRepository` work on an `sqlite3` connection.
- `runnerstrack.transactions.transaction` is a context manager. It runs a
  block in one transaction across both repositories.

## What it does not do

- **SQLite only.** No other database is supported.
- **No connection pool.** The pool settings (`max_idle_connections`,
  `max_open_connections`, `connection_max_lifetime`) are checked for validity
  but have no effect, since a single SQLite connection is used.
- **No authentication.** The service has no authentication of any kind.
- **Development server.** It is served by Flask's built-in development server.