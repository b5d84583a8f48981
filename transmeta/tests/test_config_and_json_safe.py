from __future__ import annotations

from pathlib import Path

from transmeta.core.config import DEFAULT_JSON_MAX_BYTES, DEFAULT_MAX_UPLOAD_BYTES, ServiceConfig
from transmeta.core.metadata import MetadataHolder, reconcile
from transmeta.core.translations import Translation, TranslationKind
from transmeta.utils.json_safe import to_jsonable


def test_service_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("TRANSMETA_MAX_UPLOAD_BYTES", "2048")
    monkeypatch.setenv("TRANSMETA_JSON_MAX_BYTES", "not-a-number")
    monkeypatch.setenv("TRANSMETA_LOG_LEVEL", "debug")

    cfg = ServiceConfig.from_env()
    assert cfg.max_upload_bytes == 2048
    assert cfg.json_max_bytes == DEFAULT_JSON_MAX_BYTES
    assert cfg.log_level == "DEBUG"


def test_service_config_defaults(monkeypatch) -> None:
    for name in ("TRANSMETA_MAX_UPLOAD_BYTES", "TRANSMETA_JSON_MAX_BYTES", "TRANSMETA_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    cfg = ServiceConfig.from_env(default_log_level="warning")
    assert cfg.max_upload_bytes == DEFAULT_MAX_UPLOAD_BYTES
    assert cfg.log_level == "WARNING"


def test_to_jsonable_handles_header_maps_and_dataclasses() -> None:
    t = Translation.from_headers({"Version": "1"}, text_domain="demo", kind=TranslationKind.THEME)

    out = to_jsonable(t)
    assert out["text_domain"] == "demo"
    assert out["kind"] == "theme"
    assert out["metadata"]["headers"]["Project-Id-Version"] == "1"

    assert to_jsonable(reconcile({}))["Locale"] == ""
    assert to_jsonable(MetadataHolder())["headers"]["Version"] == ""
    assert to_jsonable(Path("a") / "b") == str(Path("a") / "b")
    assert to_jsonable((1, {"x"})) == [1, ["x"]]
