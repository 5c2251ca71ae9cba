"""
Test environment configuration and verbose diagnostics
"""

import pytest

from sid_filter import CalibrationError, ChipModel, Filter
from sid_filter.config import get_config, is_verbose, print_config


@pytest.fixture
def clean_env(monkeypatch):
    for key in ('SIDFILTER_CHIP_MODEL', 'SIDFILTER_FILTER_ENABLED', 'SIDFILTER_VERBOSE'):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = get_config()
    assert config == {'chip_model': '6581', 'filter_enabled': True, 'verbose': False}
    assert not is_verbose()


def test_env_overrides(clean_env):
    clean_env.setenv('SIDFILTER_CHIP_MODEL', '8580')
    clean_env.setenv('SIDFILTER_FILTER_ENABLED', '0')
    f = Filter()
    assert f.chip_model is ChipModel.MOS8580
    assert not f.enabled


def test_arguments_win_over_env(clean_env):
    clean_env.setenv('SIDFILTER_CHIP_MODEL', '8580')
    clean_env.setenv('SIDFILTER_FILTER_ENABLED', '0')
    f = Filter(ChipModel.MOS6581, enabled=True)
    assert f.chip_model is ChipModel.MOS6581
    assert f.enabled


def test_bad_env_model(clean_env):
    clean_env.setenv('SIDFILTER_CHIP_MODEL', 'SN76489')
    with pytest.raises(CalibrationError):
        Filter()


def test_verbose_prints_selection(clean_env, capsys):
    clean_env.setenv('SIDFILTER_VERBOSE', '1')
    f = Filter(ChipModel.MOS6581)
    f.set_chip_model(ChipModel.MOS8580)
    out = capsys.readouterr().out
    assert "[ChipModel] Selected MOS6581" in out
    assert "[ChipModel] Selected MOS8580" in out


def test_verbose_prints_rejection(clean_env, capsys):
    clean_env.setenv('SIDFILTER_VERBOSE', '1')
    f = Filter(ChipModel.MOS6581)
    with pytest.raises(CalibrationError):
        f.set_calibration([(0, 1)])
    assert "[ChipModel] Rejected calibration" in capsys.readouterr().out


def test_quiet_by_default(clean_env, capsys):
    Filter(ChipModel.MOS8580).writeFC_HI(0x10)
    assert capsys.readouterr().out == ""


def test_print_config(clean_env, capsys):
    print_config()
    out = capsys.readouterr().out
    assert "chip_model: 6581" in out
    assert "filter_enabled: True" in out
