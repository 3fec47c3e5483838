import uuid
from unittest.mock import Mock

import pytest

from filmoteka.entities import Session
from filmoteka.session_repo import SessionRepo
from filmoteka.session_usecase import NoSessionError, SessionUseCase


@pytest.fixture
def repo():
    return Mock(spec=SessionRepo)


@pytest.fixture
def use_case(repo):
    return SessionUseCase(repo)


def test_get_session_error(repo, use_case):
    repo.get_session.side_effect = RuntimeError("error")
    with pytest.raises(RuntimeError):
        use_case.get_session("qqqq")


def test_get_session_missing(repo, use_case):
    repo.get_session.return_value = None
    with pytest.raises(NoSessionError, match="no session with such ID"):
        use_case.get_session("qqqq")


def test_get_session(repo, use_case):
    session = Session()
    repo.get_session.return_value = session
    assert use_case.get_session("qqqq") == session
    repo.get_session.assert_called_once_with("qqqq")


def test_delete_session_error(repo, use_case):
    repo.delete_session.side_effect = RuntimeError("error")
    with pytest.raises(RuntimeError):
        use_case.delete_session("qqqq")


def test_delete_session_missing(repo, use_case):
    repo.delete_session.return_value = False
    with pytest.raises(NoSessionError):
        use_case.delete_session("qqqq")


def test_delete_session(repo, use_case):
    repo.delete_session.return_value = True
    assert use_case.delete_session("qqqq") is True


def test_create_session(repo, use_case):
    session_id = use_case.create_session(7)
    stored = repo.create_session.call_args.args[0]
    assert stored == Session(id=session_id, user_id=7)
    assert str(uuid.UUID(session_id)) == session_id


def test_create_session_ids_differ(repo, use_case):
    ids = [use_case.create_session(1), use_case.create_session(1)]
    assert len(set(ids)) == 2
    assert [uuid.UUID(session_id).version for session_id in ids] == [4, 4]
    stored = [c.args[0] for c in repo.create_session.call_args_list]
    assert stored == [Session(id=ids[0], user_id=1), Session(id=ids[1], user_id=1)]


def test_create_session_error(repo, use_case):
    repo.create_session.side_effect = RuntimeError("error")
    with pytest.raises(RuntimeError):
        use_case.create_session(1)