import pytest
from fastapi.testclient import TestClient

import app as app_module
from conftest import AUTH, raw_dataset
from config import Settings
from errors import LoadError
from models import Dataset


def test_lifespan_loads_dataset_once(monkeypatch):
    calls = []

    def fake_fetch(url, timeout_s):
        calls.append((url, timeout_s))
        return Dataset.model_validate(raw_dataset())

    monkeypatch.setattr(app_module, "fetch_dataset", fake_fetch)
    cfg = Settings(source_url="http://upstream/chats", source_timeout_s=2.5, auth_token="someAuthToken")

    with TestClient(app_module.create_app(cfg=cfg)) as client:
        assert client.get("/getUser/u3", headers=AUTH).json()["user"]["username"] == "carol"
        client.get("/getUser/u1", headers=AUTH)

    assert calls == [("http://upstream/chats", 2.5)]


def test_lifespan_aborts_when_load_fails(monkeypatch):
    def failing_fetch(url, timeout_s):
        raise LoadError("failed to retrieve response")

    monkeypatch.setattr(app_module, "fetch_dataset", failing_fetch)

    with pytest.raises(LoadError):
        with TestClient(app_module.create_app(cfg=Settings())):
            pass


def test_main_exits_without_serving(monkeypatch):
    served = []

    def failing_fetch(url, timeout_s):
        raise LoadError("failed to parse response")

    monkeypatch.setattr(app_module, "fetch_dataset", failing_fetch)
    monkeypatch.setattr(app_module.uvicorn, "run", lambda *a, **kw: served.append(a))

    with pytest.raises(SystemExit) as exc:
        app_module.main()
    assert exc.value.code == 1
    assert served == []


def test_main_serves_preloaded_store(monkeypatch):
    served = {}

    monkeypatch.setattr(app_module, "fetch_dataset", lambda url, timeout_s: Dataset.model_validate(raw_dataset()))

    def fake_run(application, host, port):
        served["store"] = application.state.store
        served["port"] = port

    monkeypatch.setattr(app_module.uvicorn, "run", fake_run)

    app_module.main()

    assert served["port"] == app_module.settings.port
    assert served["store"].find_user("u2").username == "bob"
