import pytest
import redis

from filmoteka.dbinit import get_redis, redis_url_from_env


def test_redis_url_from_env():
    url = redis_url_from_env({"hostRD": "localhost", "portRD": "6379"})
    assert url == "redis://user:@localhost:6379/0"


def test_redis_url_from_empty_env():
    assert redis_url_from_env({}) == "redis://user:@:/0"


def test_redis_url_reads_process_environment(monkeypatch):
    monkeypatch.setenv("hostRD", "cache.example.com")
    monkeypatch.setenv("portRD", "7000")
    assert redis_url_from_env() == "redis://user:@cache.example.com:7000/0"


def test_get_redis_connection_refused():
    with pytest.raises(redis.exceptions.ConnectionError):
        get_redis({"hostRD": "127.0.0.1", "portRD": "1"})