"""WSGI middleware: request set-up, access logging, authentication and admin checks."""

from __future__ import annotations

import json
import logging
import time
import uuid
from collections.abc import Callable, Iterable
from typing import Any, Optional

from werkzeug.wrappers import Request

from filmoteka.logger import LOGGER_KEY, NoLoggerError, get_logger_from_context, init_logger
from filmoteka.response import write_response
from filmoteka.session_usecase import NoSessionError, SessionUseCase
from filmoteka.user_usecase import NoUserError, UserUseCase

USER_KEY = "filmoteka.user_id"
SESSION_ID_KEY = "filmoteka.session_id"
SESSION_COOKIE = "session_id"
ADMIN_ROLE = "admin"

WSGIApp = Callable[[dict, Callable[..., Any]], Iterable[bytes]]

_fallback_log = logging.getLogger(__name__)


def _error(message: str, status_code: int):
    return write_response(json.dumps({"error": message}), status_code)


class Middleware:
    """Builds WSGI wrappers that share the session and user use cases."""

    def __init__(
        self,
        session_use_case: Optional[SessionUseCase] = None,
        user_use_case: Optional[UserUseCase] = None,
    ) -> None:
        self._session_use_case = session_use_case
        self._user_use_case = user_use_case

    def access_log(self, next_handler: WSGIApp) -> WSGIApp:
        """Log method, address, path and duration of every request."""

        def app(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
            try:
                logger = get_logger_from_context(environ)
            except NoLoggerError as exc:
                _fallback_log.error("can not get logger from context: %s", exc)
                return write_response("internal error", 500)(environ, start_response)
            logger.info("access log middleware start")
            start = time.perf_counter()
            result = next_handler(environ, start_response)
            body = list(result)
            close = getattr(result, "close", None)
            if close is not None:
                close()
            elapsed = time.perf_counter() - start
            logger.info(
                "New request method=%s remote_addr=%s url=%s time=%.6fs",
                environ.get("REQUEST_METHOD", ""),
                environ.get("REMOTE_ADDR", ""),
                environ.get("PATH_INFO", ""),
                elapsed,
            )
            return body

        return app

    def admin_middleware(self, next_handler: WSGIApp) -> WSGIApp:
        """Let the request through only if the authenticated user is an admin."""

        def app(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
            try:
                logger = get_logger_from_context(environ)
            except NoLoggerError as exc:
                _fallback_log.error("can not get logger from context: %s", exc)
                return _error("internal error", 500)(environ, start_response)
            user_id = environ.get(USER_KEY)
            if not isinstance(user_id, int) or isinstance(user_id, bool):
                logger.error("can not get user id from context")
                return _error("internal error", 500)(environ, start_response)
            try:
                role = self._user_use_case.get_user_role(user_id)
            except NoUserError:
                logger.error("user with id %d was not found", user_id)
                return _error("user is not found", 401)(environ, start_response)
            except Exception as exc:
                logger.error("internal error in getting user role: %s", exc)
                return _error("internal error", 500)(environ, start_response)
            if role != ADMIN_ROLE:
                logger.error("user is not admin, but wants to use admin resource")
                return _error("resource is forbidden for you", 403)(environ, start_response)
            return next_handler(environ, start_response)

        return app

    def auth_middleware(self, next_handler: WSGIApp) -> WSGIApp:
        """Resolve the session cookie and put the user and session ids in the environ."""

        def app(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
            try:
                logger = get_logger_from_context(environ)
            except NoLoggerError as exc:
                _fallback_log.error("can not get logger from context: %s", exc)
                return _error("internal error", 500)(environ, start_response)
            session_id = Request(environ).cookies.get(SESSION_COOKIE)
            if session_id is None:
                logger.error("no cookie in request")
                return _error("no cookie in request", 401)(environ, start_response)
            try:
                session = self._session_use_case.get_session(session_id)
            except NoSessionError:
                logger.error("no session for id: %s", session_id)
                return _error(
                    f"there is no session for session id {session_id}", 401
                )(environ, start_response)
            except Exception as exc:
                logger.error("error in getting session: %s", exc)
                return _error("internal error", 500)(environ, start_response)
            inner = dict(environ)
            inner[USER_KEY] = session.user_id
            inner[SESSION_ID_KEY] = session.id
            return next_handler(inner, start_response)

        return app

    def request_init_middleware(self, next_handler: WSGIApp) -> WSGIApp:
        """Attach a logger tagged with a fresh request id to the environ."""

        def app(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
            try:
                base = init_logger()
            except Exception as exc:
                _fallback_log.error("error in logger initialization: %s", exc)
                return write_response("internal error", 500)(environ, start_response)
            request_id = str(uuid.uuid4())
            logger = logging.LoggerAdapter(base.logger, {"request-id": request_id})
            inner = dict(environ)
            inner[LOGGER_KEY] = logger
            logger.info("request init middleware call")
            try:
                result = next_handler(inner, start_response)
                body = list(result)
                close = getattr(result, "close", None)
                if close is not None:
                    close()
            finally:
                for handler in base.logger.handlers:
                    try:
                        handler.flush()
                    except Exception:
                        _fallback_log.error("error in logger sync")
            return body

        return app