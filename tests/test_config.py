from pathlib import Path

import pytest

from people_api.config import DEFAULT_REFRESH_INTERVAL, load_config, parse_duration


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("600s", 600),
        ("10m", 600),
        ("10min", 600),
        ("1h 30m", 5400),
        ("1h30m", 5400),
        ("2days", 172800),
        ("250ms", 0.25),
        ("45", 45),
        (90, 90),
    ],
)
def test_parse_duration(value, expected) -> None:
    assert parse_duration(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", [None, "", "soon", "10 parsecs", "0s", "-5", "5m!"])
def test_parse_duration_rejects_invalid(value) -> None:
    assert parse_duration(value) is None


def test_defaults() -> None:
    config = load_config(env={})

    assert config.server.port == 9090
    assert config.sources.local_path == "assets/people.json"
    assert config.sources.remote_url.endswith("/people.json")
    assert config.refresh.interval == DEFAULT_REFRESH_INTERVAL
    assert config.refresh.timeout == 5.0
    assert config.refresh.enabled is True
    assert config.logging.level == "INFO"


def test_environment_overrides() -> None:
    config = load_config(
        env={
            "PORT": "8080",
            "LOCAL_PATH": "/data/people.json",
            "REMOTE_URL": "https://mirror.example.test/people.json",
            "REFRESH_INTERVAL": "2m",
            "REFRESH_ENABLED": "false",
            "LOG_LEVEL": "debug",
            "LOG_JSON": "0",
        }
    )

    assert config.server.port == 8080
    assert config.sources.local_path == "/data/people.json"
    assert config.sources.remote_url == "https://mirror.example.test/people.json"
    assert config.refresh.interval == 120
    assert config.refresh.enabled is False
    assert config.logging.level == "debug"
    assert config.logging.json is False


def test_unparseable_interval_falls_back_to_default() -> None:
    config = load_config(env={"REFRESH_INTERVAL": "whenever"})

    assert config.refresh.interval == DEFAULT_REFRESH_INTERVAL


def test_invalid_port_is_rejected() -> None:
    with pytest.raises(ValueError):
        load_config(env={"PORT": "http"})


def test_yaml_override_file(tmp_path: Path) -> None:
    override = tmp_path / "override.yaml"
    override.write_text("refresh:\n  interval: 30s\n  max_connections: 2\nserver:\n  port: 7000\n")

    config = load_config(config_path=str(override), env={"PORT": "7100"})

    assert config.refresh.interval == 30
    assert config.refresh.max_connections == 2
    assert config.server.port == 7100
