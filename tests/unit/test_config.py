"""Unit tests for tracing parameters and settings stores."""

import json

import pytest
from pydantic import ValidationError

from vectorize.config import (
    CORNER_THRESHOLD_MAX,
    STORE_KEYS,
    JsonSettingsStore,
    LoggingConfig,
    OutputConfig,
    OutputFormat,
    SettingsStore,
    TracingParameters,
    TurnPolicy,
    UnitSystem,
    VectorizeSettings,
    get_default_settings,
)
from vectorize.exceptions import (
    InvalidParameterError,
    SettingsStoreError,
    SettingTypeError,
)


class TestTracingParameters:
    """Tests for TracingParameters model."""

    def test_defaults(self):
        params = TracingParameters()
        assert params.turd_size == 2
        assert params.turn_policy is TurnPolicy.MINORITY
        assert params.corner_threshold == 1.0
        assert params.optimize_curves is True
        assert params.optimize_tolerance == 0.2
        assert params.brightness_threshold == 0.5
        assert params.include_border is True

    @pytest.mark.parametrize(
        "name,value",
        [
            ("turd_size", -1),
            ("turd_size", 101),
            ("corner_threshold", 1.5),
            ("optimize_tolerance", 1.01),
            ("turn_policy", 9),
        ],
    )
    def test_assignment_rejects_out_of_range(self, name, value):
        params = TracingParameters()
        with pytest.raises(ValidationError):
            setattr(params, name, value)

    def test_corner_threshold_upper_bound(self):
        params = TracingParameters(corner_threshold=CORNER_THRESHOLD_MAX)
        assert params.corner_threshold == pytest.approx(4.0 / 3.0)

    def test_brightness_threshold_clamped(self):
        params = TracingParameters()
        params.brightness_threshold = 1.7
        assert params.brightness_threshold == 1.0
        params.brightness_threshold = -0.2
        assert params.brightness_threshold == 0.0

    def test_set_clamped(self):
        params = TracingParameters()
        params.set_clamped("turd_size", 250)
        params.set_clamped("corner_threshold", 5.0)
        params.set_clamped("optimize_tolerance", -1.0)
        params.set_clamped("turn_policy", 2)
        assert params.turd_size == 100
        assert params.corner_threshold == pytest.approx(CORNER_THRESHOLD_MAX)
        assert params.optimize_tolerance == 0.0
        assert params.turn_policy is TurnPolicy.LEFT

    def test_set_clamped_unknown_field(self):
        with pytest.raises(InvalidParameterError, match="unknown parameter"):
            TracingParameters().set_clamped("speed", 3)

    @pytest.mark.parametrize("value", ["5", None, True])
    def test_set_clamped_rejects_non_numbers(self, value):
        params = TracingParameters()
        with pytest.raises(InvalidParameterError, match="not a number") as exc_info:
            params.set_clamped("turd_size", value)
        assert exc_info.value.name == "turd_size"
        assert params.turd_size == 2

    def test_restore_defaults(self):
        params = TracingParameters(turd_size=50, include_border=False)
        params.restore_defaults()
        assert params == TracingParameters()

    def test_save_and_load_round_trip(self):
        original = TracingParameters(
            turd_size=7,
            turn_policy=TurnPolicy.MAJORITY,
            corner_threshold=0.6,
            optimize_curves=False,
            optimize_tolerance=0.45,
            brightness_threshold=0.3,
            include_border=False,
        )
        store = SettingsStore()
        original.save_to(store)

        loaded = TracingParameters()
        loaded.load_from(store)
        assert loaded == original

    def test_store_keys(self):
        store = SettingsStore()
        TracingParameters().save_to(store)
        assert sorted(store.keys()) == sorted(STORE_KEYS.values())
        assert store.try_get_float("AlphaMax") == 1.0
        assert store.try_get_int("TurnPolicy") == 4

    def test_load_ignores_missing_and_wrong_types(self):
        store = SettingsStore({"TurdSize": "lots", "Threshold": 0.25})
        params = TracingParameters()
        params.load_from(store)
        assert params.turd_size == 2
        assert params.brightness_threshold == 0.25

    def test_load_clamps_out_of_range(self):
        store = SettingsStore({"TurdSize": 500, "AlphaMax": 3.0})
        params = TracingParameters()
        params.load_from(store)
        assert params.turd_size == 100
        assert params.corner_threshold == pytest.approx(CORNER_THRESHOLD_MAX)


class TestSettingsStore:
    """Tests for SettingsStore typed access."""

    def test_absent_key(self):
        store = SettingsStore()
        assert store.try_get_int("x") is None
        assert store.try_get_float("x") is None
        assert store.try_get_bool("x") is None

    def test_bool_is_not_int(self):
        store = SettingsStore({"flag": True})
        with pytest.raises(SettingTypeError):
            store.try_get_int("flag")
        assert store.try_get_bool("flag") is True

    def test_int_widens_to_float(self):
        store = SettingsStore({"n": 3})
        assert store.try_get_float("n") == 3.0

    def test_wrong_type(self):
        store = SettingsStore({"n": "3"})
        with pytest.raises(SettingTypeError) as exc_info:
            store.try_get_float("n")
        assert exc_info.value.key == "n"


class TestJsonSettingsStore:
    """Tests for the JSON file store."""

    def test_missing_file_is_empty(self, tmp_path):
        store = JsonSettingsStore(tmp_path / "none.json")
        store.load()
        assert store.keys() == []

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "settings.json"
        store = JsonSettingsStore(path)
        store.set_int("TurdSize", 4)
        store.set_bool("IncludeBorder", False)
        store.save()

        reloaded = JsonSettingsStore(path)
        reloaded.load()
        assert reloaded.try_get_int("TurdSize") == 4
        assert reloaded.try_get_bool("IncludeBorder") is False

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SettingsStoreError):
            JsonSettingsStore(path).load()

    def test_non_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(SettingsStoreError, match="not an object"):
            JsonSettingsStore(path).load()

    def test_context_manager_saves_on_success(self, tmp_path):
        path = tmp_path / "ctx.json"
        with JsonSettingsStore(path) as store:
            store.set_float("Threshold", 0.4)
        assert json.loads(path.read_text(encoding="utf-8")) == {"Threshold": 0.4}

    def test_context_manager_skips_save_on_error(self, tmp_path):
        path = tmp_path / "ctx.json"
        with pytest.raises(RuntimeError):
            with JsonSettingsStore(path) as store:
                store.set_float("Threshold", 0.4)
                raise RuntimeError("boom")
        assert not path.exists()


class TestSettings:
    """Tests for application settings."""

    def test_default_settings(self):
        settings = get_default_settings()
        assert settings.tracing == TracingParameters()
        assert settings.output.dpi is None

    def test_dpi_must_be_positive(self):
        with pytest.raises(ValidationError):
            OutputConfig(dpi=0)

    def test_settings_carry_output_and_logging(self, tmp_path):
        settings = VectorizeSettings(
            output=OutputConfig(units=UnitSystem.INCHES, dpi=300, format=OutputFormat.JSON),
            logging=LoggingConfig(log_file=tmp_path / "run.log", log_level="debug"),
        )
        assert settings.output.units is UnitSystem.INCHES
        assert settings.output.dpi == 300
        assert settings.output.format is OutputFormat.JSON
        assert settings.logging.log_level == "DEBUG"
        assert settings.logging.file_log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError, match="unknown log level"):
            LoggingConfig(log_level="chatty")
