"""Tests for configuration loading."""

from __future__ import annotations

import importlib

import pytest

from farm_dashboard import config
from farm_dashboard import defaults


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv('FARMAPP_DEFAULT_TOTAL_BUDGET', '1234.5')
    monkeypatch.setenv('FARMAPP_DATA_FILE', str(tmp_path / 'farm.json'))
    reloaded = importlib.reload(config)
    try:
        assert reloaded.get_default_total_budget() == 1234.5
        assert reloaded.get_data_file() == str((tmp_path / 'farm.json').resolve())
    finally:
        monkeypatch.delenv('FARMAPP_DEFAULT_TOTAL_BUDGET')
        monkeypatch.delenv('FARMAPP_DATA_FILE')
        importlib.reload(config)


def test_default_total_budget():
    assert config.get_default_total_budget() == 50000.0


def test_load_config_reads_packaged_json():
    data = defaults.load_config('crop_economics')
    assert data['default'] == {'base_yield': 100, 'price': 5.0}
    assert data['crops']['corn'] == {'base_yield': 180, 'price': 5.5}


def test_load_config_missing_file():
    with pytest.raises(FileNotFoundError):
        defaults.load_config('does_not_exist')
