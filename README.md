# filmoteka

The core of a small film library service. It holds films, users and
login sessions. It also has WSGI middleware that sets up each request,
writes an access log, checks the session cookie and limits some routes
to admins.

## What is inside

- `filmoteka.entities`: the `Film`, `User` and `Session` dataclasses.
- `filmoteka.film_repo`: the `FilmRepo` interface and `FilmRepoDB`,
  which stores films and their cast in an SQL database.
- `filmoteka.user_repo`: the `UserRepo` interface and `UserRepoDB`.
  New users get the role `default`.
- `filmoteka.session_repo`: the `SessionRepo` interface and
  `SessionRepoRedis`, which keeps sessions in Redis. Each session
  expires after one day.
- `filmoteka.film_usecase`, `filmoteka.user_usecase`,
  `filmoteka.session_usecase`: `FilmUseCase`, `UserUseCase` and
  `SessionUseCase`, the rules that sit on top of storage. They raise
  `FilmNotFoundError`, `FilmsNotFoundError`, `BadFilmAddDataError`,
  `BadFilmUpdateDataError`, `BadCredentialsError`,
  `UserAlreadyExistsError`, `NoUserError` and `NoSessionError`.
- `filmoteka.password_hash`: the `Hasher` interface and
  `SHA256Hasher`. `SHA256Hasher` turns a password into its lowercase
  hex SHA-256 digest.
- `filmoteka.middleware`: `Middleware`, which wraps WSGI applications.
- `filmoteka.response`: `write_response`, which builds a werkzeug
  `Response` with a JSON content type.
- `filmoteka.logger`: `init_logger`, which logs JSON lines to standard
  error, and `get_logger_from_context`, which raises `NoLoggerError`
  when no logger is present.
- `filmoteka.validator`: `ValidationErrors` and `collect_errors`.
  `collect_errors` returns the messages from a `ValidationErrors` found
  in an exception's cause chain.
- `filmoteka.dbinit`: `redis_url_from_env` and `get_redis`.

## Use

Connect the layers and wrap an application with the middleware:

```python
import os

from filmoteka.dbinit import get_redis
from filmoteka.film_repo import FilmRepoDB
from filmoteka.film_usecase import FilmUseCase
from filmoteka.logger import init_logger
from filmoteka.middleware import Middleware
from filmoteka.password_hash import SHA256Hasher
from filmoteka.session_repo import SessionRepoRedis
from filmoteka.session_usecase import SessionUseCase
from filmoteka.user_repo import UserRepoDB
from filmoteka.user_usecase import UserUseCase

logger = init_logger()
films = FilmUseCase(FilmRepoDB(db, logger))
sessions = SessionUseCase(SessionRepoRedis(get_redis(os.environ)))
users = UserUseCase(UserRepoDB(db), SHA256Hasher())

mw = Middleware(sessions, users)
app = mw.request_init_middleware(
    mw.access_log(mw.auth_middleware(mw.admin_middleware(admin_app)))
)
```

`db` must be a DB-API 2.0 connection that uses the `?` (qmark)
parameter style and supports `RETURNING`, for example `sqlite3`. The
database must have `films`, `actors`, `film_actors` and `users`
tables. `admin_app` is your own WSGI application.

`get_redis` builds its URL from the `hostRD` and `portRD` environment
variables, connects to that server and pings it before it returns the
client.

### Films

`get_films("")` lists films by `rating`, highest first. Pass another
column name to sort by that column instead. The name is put into the
query as given, so check it before you pass it on. `get_films_by_search`
matches the text against the film title and the actor's full name,
ignoring case. It raises `FilmsNotFoundError` when nothing matches.
`add_film` returns the film with its new id. `add_film` and
`update_film` reject an unknown actor id with `BadFilmAddDataError` or
`BadFilmUpdateDataError`, and undo any changes they had made.

### Users and sessions

```python
password = "password"
user = users.register("alice", password)
session_id = sessions.create_session(user.id)
```

`login` hashes the password and raises `BadCredentialsError` when no
user has that username and hash. `register` raises
`UserAlreadyExistsError` when the username is already taken.

### Middleware

- `request_init_middleware` puts a logger into the WSGI environ. The
  logger is tagged with a fresh `request-id`.
- `access_log` logs the method, the remote address, the path and the
  time the request took.
- `auth_middleware` reads the `session_id` cookie. It answers 401 when
  the cookie is missing or the session is unknown. It answers 500 when
  the lookup fails. Otherwise it stores the user id and the session id
  in the environ under `filmoteka.user_id` and `filmoteka.session_id`.
- `admin_middleware` answers 401 for an unknown user, 403 for a user
  whose role is not `admin`, and 500 for any other failure.

Every middleware answers 500 when the environ has no logger.
`request_init_middleware` is the exception, because it creates the
logger.

## What it does not do

The package has no HTTP routes or request handlers for films, login,
registration or logout. It has no server and no command to start one.
It does not create the database schema, and it has no helper that opens
the SQL connection. The application, the routing, the serving and the
database set-up are up to you.