import pytest

from splicetext.runtime import telemetry


def test_settings_follow_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPLICETEXT_LOG_LEVEL", "debug")
    monkeypatch.setenv("SPLICETEXT_DISABLE_CONSOLE", "yes")
    monkeypatch.setenv("SPLICETEXT_LOG_BUFFER_SIZE", "512")

    settings = telemetry.TelemetrySettings.from_env()

    assert settings.level == "DEBUG"
    assert settings.console is False
    assert settings.buffer_size == 512


def test_presets() -> None:
    production = telemetry.settings_for_preset("production")
    performance = telemetry.settings_for_preset("performance_analysis")

    assert production.console is False
    assert production.log_file == "splicetext.log"
    assert performance.json_format is True
    with pytest.raises(ValueError):
        telemetry.settings_for_preset("verbose")


def test_configure_rejects_config_and_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_get_logger_is_cached() -> None:
    assert telemetry.get_logger("splicetext.tests") is telemetry.get_logger(
        "splicetext.tests"
    )


def test_span_reraises_and_records_metadata() -> None:
    with telemetry.span("tests::ok", component=True, metadata={"k": 1}) as handle:
        handle.add_metadata("extra", [1, 2])
    assert handle.metadata == {"k": "1", "extra": "[1, 2]"}

    with pytest.raises(KeyError):
        with telemetry.span("tests::boom", component="tests"):
            raise KeyError("boom")


def test_record_event_accepts_levels() -> None:
    telemetry.record_event("tests.event", data={"value": 3})
    telemetry.record_event("tests.event", level="warning")
    with pytest.raises(ValueError):
        telemetry.record_event("tests.event", level="loud")
