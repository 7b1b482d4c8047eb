from __future__ import annotations

import pytest

from metric_presence import __main__ as entry
from metric_presence.core.config import get_settings


def test_missing_configuration_exits_with_description(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    for key in ("API_URL", "API_TOKEN"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(entry, "load_dotenv", lambda: False)
    monkeypatch.setattr(entry, "setup_logging", lambda level: None)
    get_settings.cache_clear()

    try:
        code = entry.main()
    finally:
        get_settings.cache_clear()

    assert code == 1
    err = capsys.readouterr().err
    assert "Invalid configuration" in err
    assert "api_url" in err
