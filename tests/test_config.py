from pathlib import Path

import pytest

from pagebind.config import BindingConfig, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for key in (
        "PAGEBIND_WAIT_FOR_STILL_ELEMENT_BEFORE_CLICKING",
        "PAGEBIND_DEFAULT_ELEMENT_TIMEOUT_MS",
        "PAGEBIND_POLL_INTERVAL_MS",
        "PAGEBIND_HIGHLIGHT_MODE",
        "PAGEBIND_EVENT_LOG_ROOT",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults_without_file_or_environment():
    config = load_config()

    assert config == BindingConfig()
    assert config.default_element_timeout_ms == 10000
    assert config.poll_interval_ms == 100
    assert config.wait_for_still_element_before_clicking is False
    assert config.event_log_root is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PAGEBIND_WAIT_FOR_STILL_ELEMENT_BEFORE_CLICKING", "yes")
    monkeypatch.setenv("PAGEBIND_DEFAULT_ELEMENT_TIMEOUT_MS", "2500")
    monkeypatch.setenv("PAGEBIND_EVENT_LOG_ROOT", "runs")

    config = load_config()

    assert config.wait_for_still_element_before_clicking is True
    assert config.default_element_timeout_ms == 2500
    assert config.event_log_root == Path("runs")


def test_toml_file_is_read_from_working_directory(tmp_path):
    (tmp_path / "pagebind.toml").write_text(
        "[pagebind]\nhighlight_mode = true\npoll_interval_ms = 50\n", encoding="utf-8"
    )

    config = load_config()

    assert config.highlight_mode is True
    assert config.poll_interval_ms == 50


def test_environment_wins_over_file(tmp_path, monkeypatch):
    path = tmp_path / "settings.toml"
    path.write_text("[pagebind]\ndefault_element_timeout_ms = 4000\n", encoding="utf-8")
    monkeypatch.setenv("PAGEBIND_DEFAULT_ELEMENT_TIMEOUT_MS", "750")

    assert load_config(path).default_element_timeout_ms == 750


def test_unknown_keys_are_ignored():
    config = BindingConfig.from_mapping({"poll_interval_ms": "25", "browser": "firefox"})

    assert config.poll_interval_ms == 25


def test_poll_interval_must_be_positive():
    with pytest.raises(ValueError):
        BindingConfig.from_mapping({"poll_interval_ms": 0})


def test_explicit_environment_mapping_replaces_process_environment(monkeypatch):
    monkeypatch.setenv("PAGEBIND_HIGHLIGHT_MODE", "true")

    config = load_config(environ={"PAGEBIND_POLL_INTERVAL_MS": "20", "OTHER_HIGHLIGHT_MODE": "true"})

    assert config.poll_interval_ms == 20
    assert config.highlight_mode is False
