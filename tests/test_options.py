import logging
import math
import pytest
from electro_sim import options
from electro_sim.options import SimulationOptions, resolve_options


def test_defaults():
    opts = SimulationOptions()
    assert opts.k == 1.0
    assert opts.softening == 0.1
    assert opts.damping == 1.0
    assert opts.max_accel == 2000.0


def test_from_mapping_defaults_and_unknown_keys():
    opts = SimulationOptions.from_mapping({"k": 10000, "gridSpacing": 28, "drawField": True})
    assert opts == SimulationOptions(k=10000.0)


def test_from_mapping_max_accel_spellings():
    assert SimulationOptions.from_mapping({"maxAccel": 50}).max_accel == 50.0
    assert SimulationOptions.from_mapping({"max_accel": 75}).max_accel == 75.0


def test_resolve_options():
    opts = SimulationOptions(k=2.0)
    assert resolve_options(opts) is opts
    assert resolve_options(None) == SimulationOptions()
    assert resolve_options({"damping": 0.9}).damping == 0.9


@pytest.mark.parametrize("bad", [-0.1, math.nan])
def test_negative_softening_rejected(bad):
    with pytest.raises(ValueError, match="softening"):
        SimulationOptions(softening=bad)


@pytest.mark.parametrize("bad", [-5.0, math.nan])
def test_negative_max_accel_rejected(bad):
    with pytest.raises(ValueError, match="max_accel"):
        SimulationOptions(max_accel=bad)


def test_unbounded_max_accel_allowed():
    assert SimulationOptions(max_accel=math.inf).max_accel == math.inf


def test_zero_max_accel_allowed():
    """max_accel = 0 is valid: it switches electrostatics off."""
    assert SimulationOptions(max_accel=0.0).max_accel == 0.0
    assert SimulationOptions.from_mapping({"maxAccel": 0}).max_accel == 0.0


def test_none_values_take_defaults():
    opts = SimulationOptions.from_mapping({"k": None, "softening": None, "damping": None, "maxAccel": None})
    assert opts == SimulationOptions()
    # a None camelCase key falls through to the snake_case spelling
    assert SimulationOptions.from_mapping({"maxAccel": None, "max_accel": 40}).max_accel == 40.0


def test_damping_out_of_range_warns(caplog, monkeypatch):
    monkeypatch.setattr(options, "_warned_damping", set())
    with caplog.at_level(logging.WARNING, logger="electro_sim.options"):
        SimulationOptions(damping=1.5)
    assert "damping" in caplog.text


def test_damping_in_range_is_quiet(caplog):
    with caplog.at_level(logging.WARNING, logger="electro_sim.options"):
        SimulationOptions(damping=0.999)
    assert caplog.records == []


def test_damping_warning_is_reported_once_per_value(caplog, monkeypatch):
    """Mappings are resolved on every step; the same bad value warns once."""
    monkeypatch.setattr(options, "_warned_damping", set())
    with caplog.at_level(logging.WARNING, logger="electro_sim.options"):
        for _ in range(5):
            resolve_options({"damping": 1.02})
        SimulationOptions(damping=-0.5)
    messages = [r.getMessage() for r in caplog.records]
    assert len(messages) == 2
    assert "1.02" in messages[0] and "-0.5" in messages[1]


def test_interactive_preset():
    opts = SimulationOptions.interactive()
    assert opts.to_dict() == {"k": 10000.0, "softening": 0.4, "damping": 0.999, "maxAccel": 2000.0}


def test_replace_revalidates():
    opts = SimulationOptions()
    assert opts.replace(k=3.0).k == 3.0
    with pytest.raises(ValueError):
        opts.replace(softening=-1.0)


def test_options_are_frozen():
    opts = SimulationOptions()
    with pytest.raises(AttributeError):
        opts.k = 5.0
