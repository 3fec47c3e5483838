import pytest
from redis.exceptions import RedisError

from filmoteka.entities import Session
from filmoteka.session_repo import SESSION_TTL_SECONDS, SessionRepoRedis


class FakeRedis:
    """Answers only for the key ``valid_session``."""

    def __init__(self, reply=123):
        self.reply = reply
        self.calls = []

    def _answer(self, name):
        if name == "valid_session":
            return self.reply
        raise RedisError("err")

    def set(self, name, value, ex=None):
        self.calls.append(("SET", name, value, ex))
        if name == "valid_session":
            return True
        raise RedisError("err")

    def get(self, name):
        self.calls.append(("GET", name))
        return self._answer(name)

    def exists(self, name):
        self.calls.append(("EXISTS", name))
        return self._answer(name)

    def delete(self, name):
        self.calls.append(("DEL", name))
        return self._answer(name)


def test_create_session():
    red = FakeRedis()
    repo = SessionRepoRedis(red)
    with pytest.raises(RedisError):
        repo.create_session(Session(id="invalid", user_id=1))
    repo.create_session(Session(id="valid_session", user_id=1))
    assert red.calls[-1] == ("SET", "valid_session", 1, SESSION_TTL_SECONDS)


def test_expire_time_is_one_day():
    assert SessionRepoRedis(FakeRedis()).expire_time == 86400


def test_get_session():
    repo = SessionRepoRedis(FakeRedis())
    assert repo.get_session("valid_session") == Session(id="valid_session", user_id=123)
    with pytest.raises(RedisError):
        repo.get_session("invalid_session")


def test_get_session_bytes_reply():
    repo = SessionRepoRedis(FakeRedis(reply=b"123"))
    assert repo.get_session("valid_session").user_id == 123


def test_get_session_missing_key():
    repo = SessionRepoRedis(FakeRedis(reply=None))
    with pytest.raises(LookupError):
        repo.get_session("valid_session")


def test_delete_session():
    red = FakeRedis()
    repo = SessionRepoRedis(red)
    assert repo.delete_session("valid_session") is True
    assert red.calls == [("EXISTS", "valid_session"), ("DEL", "valid_session")]


def test_delete_session_absent():
    red = FakeRedis(reply=0)
    repo = SessionRepoRedis(red)
    assert repo.delete_session("valid_session") is False
    assert red.calls == [("EXISTS", "valid_session")]


def test_delete_session_error():
    repo = SessionRepoRedis(FakeRedis())
    with pytest.raises(RedisError):
        repo.delete_session("invalid_session")