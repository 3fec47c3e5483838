"""Opening the Redis connection from environment settings."""

from __future__ import annotations

import os
from collections.abc import Mapping
from urllib.parse import unquote, urlparse

import redis

DEFAULT_REDIS_HOST = "localhost"
DEFAULT_REDIS_PORT = 6379


def redis_url_from_env(environ: Mapping[str, str] | None = None) -> str:
    """Build the Redis URL from the ``hostRD`` and ``portRD`` variables."""
    env = os.environ if environ is None else environ
    host = env.get("hostRD", "")
    port = env.get("portRD", "")
    return f"redis://user:@{host}:{port}/0"


def get_redis(environ: Mapping[str, str] | None = None) -> redis.Redis:
    """Connect to Redis as configured by the environment and return the client."""
    parsed = urlparse(redis_url_from_env(environ))
    options = {}
    if parsed.password:
        if parsed.username:
            options["username"] = unquote(parsed.username)
        options["password"] = unquote(parsed.password)
    database = int(parsed.path.lstrip("/") or 0)
    client = redis.Redis(
        host=parsed.hostname or DEFAULT_REDIS_HOST,
        port=parsed.port or DEFAULT_REDIS_PORT,
        db=database,
        **options,
    )
    client.ping()
    return client