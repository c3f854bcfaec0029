# apisample

Users and their categories stored in a relational database through
SQLAlchemy, plus a small WSGI server (built on Werkzeug) that is started
against that database.

## Installation

```
pip install .
```

The server connects to MySQL through SQLAlchemy's `mysql+pymysql` dialect,
so PyMySQL must be installed alongside the package to use it:

```
pip install pymysql
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Running the server

```
apisample-server
```

On start the command connects to MySQL, creates the `users` and
`categories` tables if they are missing, and serves HTTP on the configured
address. SIGINT (Ctrl+C) or SIGTERM stops it; the server is given two
seconds to shut down. If the database cannot be reached, the error is
logged and the command exits with status 1.

Log lines are JSON objects written to standard error, with `level`, `ts`,
`caller` and `msg` keys plus any extra fields.

### Configuration

All settings come from environment variables. An empty or unset variable
falls back to its default.

Database (MySQL):

| Variable      | Default        |
|---------------|----------------|
| `DB_HOST`     | `localhost`    |
| `DB_PORT`     | `3306`         |
| `DB_USER`     | `app`          |
| `DB_PASSWORD` | `password`     |
| `DB_NAME`     | `api_database` |
| `DB_DRIVER`   | `mysql`        |

Web server:

| Variable                 | Default               |
|--------------------------|-----------------------|
| `WEB_HOST`               | `0.0.0.0`             |
| `WEB_PORT`               | `8080`                |
| `WEB_CORS_ALLOW_ORIGINS` | `http://0.0.0.0:8001` |

`WEB_CORS_ALLOW_ORIGINS` accepts a comma-separated list.

## What the server does not do

The HTTP applications have no routes yet. The server started by
`apisample-server` answers every request with `404` and the JSON body
`{"message": "Not Found"}`; users and categories can only be managed
through the library below. The CORS origins are read and kept on the
application but no CORS headers are sent.

The PostgreSQL and SQLite configurations read no environment variables:
`new_database(DatabaseInstance.POSTGRES)` connects with an empty
configuration, and `new_database(DatabaseInstance.SQLITE)` opens an
in-memory SQLite database.

## Using the library

- `apisample.entities`: the `User` and `Category` models and `Base`. A
  category name must be one of `work`, `study` or `private`
  (`CategoryName`); `validate_category_name` raises
  `InvalidCategoryNameError` for anything else, and `new_category` returns
  `None` instead. `new_domains()` lists the models to migrate.
- `apisample.database`: `new_database`, `migrate` and `close` for opening,
  preparing and releasing an engine; `load_mysql_config` reads the `DB_*`
  variables. An unknown instance raises `NoDatabaseInstanceError`.
- `apisample.repository`: `UserRepository` and `CategoryRepository`.
  Looking up a missing user raises `RecordNotFoundError`; creating a user
  whose e-mail address is taken raises `DuplicateEmailError`. `save`
  copies only the non-empty fields of the given user onto the stored one.
- `apisample.service`: `UserService` and `CategoryService`. New users are
  given a fresh UUID as their identifier.
- `apisample.server`: `new_server`, `new_echo_server`, `new_gin_server`
  and the `Server` class with `start()` and `shutdown(timeout)`. The
  `ServerInstance.GIN` variant also logs every request.
- `apisample.logger`: `info`, `debug`, `warn`, `error`, `fatal` (logs and
  exits with status 1), `panic` (logs and raises `RuntimeError`) and
  `sync`.

```python
from sqlalchemy import create_engine

from apisample.database import migrate
from apisample.entities import CategoryName, new_category, new_domains, new_user
from apisample.repository import UserRepository
from apisample.service import UserService

engine = create_engine("sqlite://")
migrate(engine, *new_domains())

users = UserService(UserRepository(engine))

password = "password"
user = new_user("Alice", "alice@example.com", password=password)
user.category = new_category(CategoryName.WORK)

created = users.create_user(user)
found = users.get_user_by_email("alice@example.com")
users.delete_user(created.id)
```