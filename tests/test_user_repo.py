import sqlite3

import pytest

from filmoteka.entities import User
from filmoteka.user_repo import UserRepoDB

SCHEMA = """
CREATE TABLE users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL,
    role TEXT NOT NULL
);
"""


@pytest.fixture
def db():
    connection = sqlite3.connect(":memory:")
    connection.executescript(SCHEMA)
    yield connection
    connection.close()


@pytest.fixture
def repo(db):
    return UserRepoDB(db)


def test_register_then_login(repo):
    password = "password"
    registered = repo.register("alice", password)
    assert registered.username == "alice"
    assert repo.login("alice", password) == registered


def test_login_wrong_credentials(repo):
    password = "password"
    repo.register("alice", password)
    assert repo.login("alice", "secret") is None
    assert repo.login("bob", password) is None


def test_register_assigns_distinct_ids(repo):
    password = "password"
    first = repo.register("alice", password)
    second = repo.register("bob", password)
    assert first.id != second.id
    assert repo.get_user_by_username("bob") == second


def test_register_stores_default_role(db, repo):
    password = "password"
    user = repo.register("alice", password)
    assert repo.get_user_role(user.id) == "default"
    assert db.execute("SELECT password FROM users").fetchone()[0] == password


def test_register_duplicate_username(db, repo):
    password = "password"
    repo.register("alice", password)
    with pytest.raises(sqlite3.IntegrityError):
        repo.register("alice", password)
    assert db.execute("SELECT COUNT(*) FROM users").fetchone()[0] == 1


def test_get_user_by_username_missing(repo):
    assert repo.get_user_by_username("nobody") is None


def test_get_user_role_missing(repo):
    assert repo.get_user_role(12345) is None


def test_get_user_role_admin(db, repo):
    db.execute("INSERT INTO users (username, password, role) VALUES ('root', 'password', 'admin')")
    db.commit()
    user = repo.get_user_by_username("root")
    assert isinstance(user, User)
    assert repo.get_user_role(user.id) == "admin"


def test_query_error(db, repo):
    db.execute("DROP TABLE users")
    with pytest.raises(sqlite3.OperationalError):
        repo.get_user_by_username("alice")