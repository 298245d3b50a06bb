"""Unit tests for configuration management."""

from datetime import date
from pathlib import Path

import pytest

from quantamental.config.defaults import BacktestParams, get_default_config
from quantamental.config.loader import ConfigLoader
from quantamental.config.validation import ConfigValidator


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        config = get_default_config()
        assert config.backtest.lookback == 126
        assert config.backtest.top_k == 10
        assert config.backtest.initial_capital == 100_000.0
        assert config.data.prices == "prices.csv"
        assert config.site.required_fields == ("title", "date")

    def test_params_are_frozen(self) -> None:
        params = BacktestParams()
        with pytest.raises(AttributeError):
            params.top_k = 5  # type: ignore[misc]


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)
        assert (loader.config_dir / ConfigLoader.CONFIG_FILE).exists()

    def test_missing_config_file_means_defaults(self, tmp_path) -> None:
        loader = ConfigLoader.create(tmp_path)
        assert loader.load_file_config() == {}
        assert loader.load() == get_default_config()

    def test_file_overrides_defaults(self, write_file, tmp_path) -> None:
        write_file("backtest.yaml", "backtest:\n  lookback: 63\n  start_date: 2021-01-04\n")
        config = ConfigLoader.create(tmp_path).load()

        assert config.backtest.lookback == 63
        assert config.backtest.top_k == 10
        assert config.backtest.start_date == date(2021, 1, 4)

    def test_overrides_beat_file(self, write_file, tmp_path) -> None:
        write_file("backtest.yaml", "backtest:\n  lookback: 63\n  top_k: 5\n")
        loader = ConfigLoader.create(tmp_path)

        merged = loader.merge_config({"backtest": {"top_k": 3}})
        assert merged["backtest"]["lookback"] == 63
        assert merged["backtest"]["top_k"] == 3
        # Other defaults should remain
        assert merged["backtest"]["rebalance_every"] == 1

    def test_string_dates_parsed(self, tmp_path) -> None:
        config = ConfigLoader.create(tmp_path).load({
            "backtest": {"end_date": "2021-06-30"},
            "data": {"snapshot_date": "2021-06-30"},
        })
        assert config.backtest.end_date == date(2021, 6, 30)
        assert config.data.snapshot_date == date(2021, 6, 30)

    def test_unknown_keys_ignored(self, tmp_path) -> None:
        config = ConfigLoader.create(tmp_path).load({"backtest": {"leverage": 2}})
        assert config.backtest == BacktestParams()

    def test_required_fields_become_tuple(self, tmp_path) -> None:
        config = ConfigLoader.create(tmp_path).load({"site": {"required_fields": ["title"]}})
        assert config.site.required_fields == ("title",)


class TestConfigValidator:
    """Test suite for configuration validator."""

    def test_defaults_are_valid(self) -> None:
        merged = ConfigLoader.create().merge_config()
        assert ConfigValidator.validate_config(merged) == []

    @pytest.mark.parametrize("field", ["lookback", "top_k", "rebalance_every", "periods_per_year"])
    @pytest.mark.parametrize("value", [0, -1, 2.5, True, "10"])
    def test_positive_integers(self, field, value) -> None:
        errors = ConfigValidator.validate_backtest_params({field: value})
        assert [e.field for e in errors] == [field]

    @pytest.mark.parametrize("value", [0, -100.0, "1000", False])
    def test_initial_capital(self, value) -> None:
        errors = ConfigValidator.validate_backtest_params({"initial_capital": value})
        assert [e.field for e in errors] == ["initial_capital"]

    def test_bad_date(self) -> None:
        errors = ConfigValidator.validate_backtest_params({"start_date": "yesterday"})
        assert [e.field for e in errors] == ["start_date"]

    def test_start_after_end(self) -> None:
        errors = ConfigValidator.validate_backtest_params({
            "start_date": "2021-06-30",
            "end_date": "2021-01-04",
        })
        assert len(errors) == 1
        assert "end_date" in errors[0].message

    def test_data_files(self) -> None:
        errors = ConfigValidator.validate_data_files({"prices": "", "snapshot_date": "soon"})
        assert [e.field for e in errors] == ["prices", "snapshot_date"]
