import pytest

from icao9303.config import ConfigurationError, Settings, configure, settings


def test_defaults():
    defaults = Settings()

    assert defaults.year_cutoff == 32
    assert defaults.signature_length == 64
    assert defaults.warn_unknown_codes is True
    assert defaults.log_level == "INFO"
    assert defaults.log_format == "text"


def test_from_env():
    loaded = Settings.from_env(
        {
            "ICAO9303_YEAR_CUTOFF": "50",
            "ICAO9303_SIGNATURE_LENGTH": "32",
            "ICAO9303_WARN_UNKNOWN_CODES": "false",
            "ICAO9303_LOG_LEVEL": "debug",
            "ICAO9303_LOG_FORMAT": "json",
        }
    )

    assert loaded.year_cutoff == 50
    assert loaded.signature_length == 32
    assert loaded.warn_unknown_codes is False
    assert loaded.log_level == "DEBUG"
    assert loaded.log_format == "json"


def test_from_env_rejects_bad_values():
    with pytest.raises(ConfigurationError):
        Settings.from_env({"ICAO9303_YEAR_CUTOFF": "thirty"})
    with pytest.raises(ConfigurationError):
        Settings.from_env({"ICAO9303_YEAR_CUTOFF": "100"})


def test_from_yaml(tmp_path):
    config_file = tmp_path / "icao9303.yaml"
    config_file.write_text("icao9303:\n  year_cutoff: 40\n  signature_length: 16\n", encoding="utf-8")

    loaded = Settings.from_yaml(config_file)

    assert loaded.year_cutoff == 40
    assert loaded.signature_length == 16
    assert loaded.log_level == "INFO"


def test_from_yaml_errors(tmp_path):
    with pytest.raises(ConfigurationError):
        Settings.from_yaml(tmp_path / "missing.yaml")

    unknown = tmp_path / "unknown.yaml"
    unknown.write_text("colour: blue\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        Settings.from_yaml(unknown)

    broken = tmp_path / "broken.yaml"
    broken.write_text("year_cutoff: [1, 2\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        Settings.from_yaml(broken)


def test_configure_updates_shared_settings_in_place():
    result = configure(signature_length=16)

    assert result is settings
    assert settings.signature_length == 16


def test_configure_rejects_invalid_values():
    with pytest.raises(ConfigurationError):
        configure(colour="blue")
    with pytest.raises(ConfigurationError):
        configure(signature_length=-1)
    assert settings.signature_length == 64
