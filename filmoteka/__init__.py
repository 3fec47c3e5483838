"""Film library core: films, users and Redis sessions, with WSGI middleware."""

__version__ = "0.1.0"