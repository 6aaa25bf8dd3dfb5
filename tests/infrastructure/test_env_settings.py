import pytest

from infrastructure.config.env_settings import DEFAULT_LOG_LEVEL, DEFAULT_TIMEOUT_SEC, ClientSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("REQUEST_BASE_URI", "REQUEST_TIMEOUT_SEC", "REQUEST_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_env(tmp_path):
    settings = ClientSettings.from_env(tmp_path / ".env")

    assert settings == ClientSettings()
    assert settings.base_uri is None
    assert settings.timeout_sec == DEFAULT_TIMEOUT_SEC
    assert settings.log_level == DEFAULT_LOG_LEVEL


def test_reads_process_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("REQUEST_BASE_URI", "https://api.example.com")
    monkeypatch.setenv("REQUEST_TIMEOUT_SEC", "5.5")
    monkeypatch.setenv("REQUEST_LOG_LEVEL", "debug")

    settings = ClientSettings.from_env(tmp_path / ".env")

    assert settings == ClientSettings(base_uri="https://api.example.com", timeout_sec=5.5, log_level="DEBUG")


def test_env_file_takes_precedence(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("REQUEST_BASE_URI=https://from-file.example.com\n", encoding="utf-8")
    monkeypatch.setenv("REQUEST_BASE_URI", "https://from-env.example.com")
    monkeypatch.setenv("REQUEST_TIMEOUT_SEC", "3")

    settings = ClientSettings.from_env(env_file)

    assert settings.base_uri == "https://from-file.example.com"
    assert settings.timeout_sec == 3.0


def test_env_file_disabled(monkeypatch):
    monkeypatch.setenv("REQUEST_LOG_LEVEL", "warning")
    assert ClientSettings.from_env(None).log_level == "WARNING"


@pytest.mark.parametrize("raw", ["soon", "0", "-1"])
def test_invalid_timeout(monkeypatch, tmp_path, raw):
    monkeypatch.setenv("REQUEST_TIMEOUT_SEC", raw)
    with pytest.raises(ValueError, match="REQUEST_TIMEOUT_SEC"):
        ClientSettings.from_env(tmp_path / ".env")
