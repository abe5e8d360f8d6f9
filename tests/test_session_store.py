import json

from adapters.session_store import FileSessionStore, MemorySessionStore
from core.domain.models import Session
from core.interfaces.session_store import SessionStore


def test_stores_satisfy_protocol(tmp_path):
    assert isinstance(MemorySessionStore(), SessionStore)
    assert isinstance(FileSessionStore(tmp_path / "s.json"), SessionStore)


def test_file_store_survives_new_instance(tmp_path):
    path = tmp_path / "nested" / "session.json"
    FileSessionStore(path).set_session("abc", {"id": 1})

    reopened = FileSessionStore(path)

    assert reopened.get_token() == "abc"
    assert reopened.get_user() == {"id": 1}
    assert json.loads(path.read_text(encoding="utf-8")) == {"token": "abc", "user": {"id": 1}}


def test_file_store_clear_is_idempotent(tmp_path):
    store = FileSessionStore(tmp_path / "session.json")
    store.set_session("abc", None)

    store.clear_session()
    store.clear_session()

    assert store.get_token() is None
    assert store.get_user() is None
    assert not store.path.exists()


def test_file_store_overwrites_previous_session(tmp_path):
    store = FileSessionStore(tmp_path / "session.json")
    store.set_session("old", {"id": 1})
    store.set_session("new", {"id": 2})

    assert store.get_token() == "new"
    assert store.get_user() == {"id": 2}
    assert list(tmp_path.iterdir()) == [store.path]


def test_corrupt_file_reads_as_logged_out(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")

    assert FileSessionStore(path).get_token() is None


def test_file_store_defaults_to_settings_path(settings):
    store = FileSessionStore(settings=settings)

    assert store.path == settings.session_file


def test_memory_store_round_trip():
    store = MemorySessionStore()
    store.set_session("abc", {"id": 1})

    assert store.session == Session(token="abc", user={"id": 1})
    store.clear_session()
    assert store.get_token() is None
