"""Tests for process startup."""

import logging
import pytest
from unittest.mock import patch
from owncast_ntfy import main


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr("dotenv.load_dotenv", lambda *a, **kw: False)
    monkeypatch.delenv("NTFY_URL", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.parametrize("url", [None, "https://ntfy.sh", "gopher://ntfy.sh/topic"])
def test_bad_ntfy_url_exits_before_listening(monkeypatch, url):
    if url is not None:
        monkeypatch.setenv("NTFY_URL", url)

    with patch("owncast_ntfy.main.uvicorn.Server") as server, patch("owncast_ntfy.main.create_app") as create:
        with pytest.raises(SystemExit) as exc:
            main.cli()

    assert exc.value.code == 1
    server.assert_not_called()
    create.assert_not_called()


def test_valid_config_starts_server(monkeypatch):
    monkeypatch.setenv("NTFY_URL", "https://ntfy.sh/mytopic")
    monkeypatch.setenv("PORT", "9123")

    with patch("owncast_ntfy.main.run") as run, patch("owncast_ntfy.main.asyncio.run") as asyncio_run:
        main.cli()

    asyncio_run.assert_called_once()
    settings = run.call_args.args[0]
    assert settings.port == 9123
    assert settings.ntfy_topic == "mytopic"
