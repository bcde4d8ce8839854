import json

import pytest

from portfolio.config import ConfigError, load_config
from portfolio.state import StateManager


def test_load_config_defaults(monkeypatch):
    monkeypatch.delenv("HUGGINGFACE_API_KEY", raising=False)
    config = load_config()
    assert config["auth"]["token_days"] == 7
    assert config["auth"]["cookie_name"] == "auth-token"
    assert config["cpp_tools"]["compile_delay"] == 0.5


def test_load_config_merges_file(tmp_path):
    path = tmp_path / "portfolio.json"
    path.write_text(json.dumps({"auth": {"token_days": 3}, "analytics": {"seed": 9}}), encoding="utf-8")
    config = load_config(path)
    assert config["auth"]["token_days"] == 3
    assert config["auth"]["cookie_name"] == "auth-token"
    assert config["analytics"]["seed"] == 9


def test_load_config_bad_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(broken)


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("HUGGINGFACE_API_KEY", "hf_from_env")
    monkeypatch.setenv("PORTFOLIO_STATE_FILE", str(tmp_path / "state.json"))
    config = load_config()
    assert config["huggingface"]["api_key"] == "hf_from_env"
    assert config["state_file"] == str(tmp_path / "state.json")


def test_state_persists_between_instances(tmp_path):
    path = tmp_path / "data" / "state.json"
    state = StateManager(path)
    state.section("users")["ada@example.com"] = {"id": "u1"}
    state.save()
    state.set("visits", 3)

    reloaded = StateManager(path)
    assert reloaded.get("visits") == 3
    assert reloaded.section("users") == {"ada@example.com": {"id": "u1"}}


def test_state_update_section(tmp_path):
    state = StateManager(tmp_path / "state.json")
    state.update_section("carts", {"u1": {"1": 2}})
    state.update_section("carts", {"u2": {"3": 1}})
    assert set(StateManager(tmp_path / "state.json").section("carts")) == {"u1", "u2"}


def test_corrupt_state_file_starts_empty(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{broken", encoding="utf-8")
    state = StateManager(path)
    assert state.section("users") == {}
    assert state.get("error")


def test_in_memory_state_writes_nothing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    state = StateManager()
    state.set("key", "value")
    assert state.get("key") == "value"
    assert list(tmp_path.iterdir()) == []


def test_append_item():
    state = StateManager()
    state.append_item("contact_submissions", {"name": "Ada"})
    state.append_item("contact_submissions", {"name": "Bob"})
    assert [i["name"] for i in state.section("contact_submissions")["items"]] == ["Ada", "Bob"]
    assert not state.persistent
