import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from config import CHAT_ROUTE_KEY, EVALUATION_ROUTE_KEY, TIMING_ROUTE_KEY, load_config, load_route
from config.settings import Settings

ROOT = Path(__file__).resolve().parents[2]


def test_settings_defaults(monkeypatch):
    for name in ("MIN_EVALUATION_MESSAGES", "TIMING_WINDOW", "DEFAULT_RUBRIC"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.MIN_EVALUATION_MESSAGES == 4
    assert s.TIMING_WINDOW == 4
    assert s.DEFAULT_RUBRIC == "principles"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_RUBRIC", "sales_criteria")
    monkeypatch.setenv("MIN_EVALUATION_MESSAGES", "6")
    s = Settings(_env_file=None)
    assert s.DEFAULT_RUBRIC == "sales_criteria"
    assert s.MIN_EVALUATION_MESSAGES == 6


def test_shipped_config_routes_every_target():
    cfg = load_config(ROOT / "app_config.json")
    for target in (CHAT_ROUTE_KEY, EVALUATION_ROUTE_KEY, TIMING_ROUTE_KEY):
        assert cfg.registry[target] in cfg.llm_routes


def test_load_route_resolves_url(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(
        json.dumps(
            {
                "llm_routes": {
                    "local": {
                        "name": "local",
                        "base_url": "http://localhost:8080",
                        "endpoint": "/v1/chat/completions",
                        "model": "m",
                    }
                },
                "registry": {CHAT_ROUTE_KEY: "local"},
            }
        )
    )
    route = load_route(path, CHAT_ROUTE_KEY)
    assert route.url == "http://localhost:8080/v1/chat/completions"
    with pytest.raises(KeyError):
        load_route(path, TIMING_ROUTE_KEY)


def test_evaluation_minimum_cannot_drop_below_four(monkeypatch):
    monkeypatch.setenv("MIN_EVALUATION_MESSAGES", "2")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
