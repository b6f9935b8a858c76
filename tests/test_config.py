import pydantic
import pytest

from crtlogic import config
from crtlogic.types import TariffCalculationOptions


def test_options_defaults():
    opts = TariffCalculationOptions(voltage_level="33kV")
    assert opts.tuos_energy_adder_omr_per_mwh == 0.0
    assert opts.include_cgr is True
    assert opts.dc_method == "top3_peakbands"


def test_options_reject_unknown_method():
    with pytest.raises(pydantic.ValidationError):
        TariffCalculationOptions(voltage_level="11kV", dc_method="max")  # type: ignore[arg-type]


def test_options_are_frozen():
    opts = config.default_options()
    with pytest.raises(pydantic.ValidationError):
        opts.include_cgr = False  # type: ignore[misc]


def test_resolve_options():
    assert config.resolve_options(None) == config.default_options()
    opts = config.resolve_options({"voltage_level": "0.415kV", "include_cgr": False})
    assert isinstance(opts, TariffCalculationOptions)
    assert opts.include_cgr is False
    same = TariffCalculationOptions(voltage_level="11kV")
    assert config.resolve_options(same) is same


def test_engine_config_defaults():
    cfg = config.default_config()
    assert cfg.tz == "Asia/Muscat"
    assert cfg.top_n == 3
    assert cfg.hourly_window == 168
