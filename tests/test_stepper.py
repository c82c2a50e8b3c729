import logging
import numpy as np
import pytest
from electro_sim import Charge, Magnet, SimulationOptions, step, step_physics, step_physics_rk4, electric_field
from electro_sim import options as options_module
from electro_sim.core.fields import electric_field_at


def test_single_euler_step_scenario():
    """
    Free unit charge at the origin, pinned unit charge at (10, 0),
    k=1, softening=0, no clamp, no damping, dt=1:
      a = -k q q / d² = (-0.01, 0),  v = a dt,  x = v dt
    """
    free = Charge(q=1.0, mass=1.0, position=(0.0, 0.0), velocity=(0.0, 0.0))
    held = Charge(q=1.0, mass=1.0, position=(10.0, 0.0), pinned=True)
    opts = SimulationOptions(k=1.0, softening=0.0, damping=1.0, max_accel=float("inf"))

    step_physics([free, held], [], 1.0, opts)

    assert free.acceleration[0] == pytest.approx(-0.01, rel=1e-12)
    assert free.acceleration[1] == 0.0
    assert free.velocity[0] == pytest.approx(-0.01, rel=1e-12)
    assert free.velocity[1] == 0.0
    assert free.position[0] == pytest.approx(-0.01, rel=1e-12)
    assert free.position[1] == 0.0
    np.testing.assert_array_equal(held.position, [10.0, 0.0])
    np.testing.assert_array_equal(held.velocity, [0.0, 0.0])


def test_options_mapping_is_accepted():
    """Flat dict with camelCase maxAccel; unknown keys are ignored."""
    free = Charge(q=1.0, position=(0.0, 0.0))
    held = Charge(q=1.0, position=(10.0, 0.0), pinned=True)
    opts = {"k": 1, "softening": 0, "damping": 1, "maxAccel": float("inf"), "drawField": True}

    step_physics([free, held], [], 1.0, opts)
    assert free.position[0] == pytest.approx(-0.01, rel=1e-12)


def test_default_options_clamp():
    """Defaults: max_accel = 2000 caps a very close pair."""
    a = Charge(q=100.0, position=(0.0, 0.0))
    b = Charge(q=100.0, position=(0.5, 0.0))
    step_physics([a, b], [], 0.001)
    assert np.linalg.norm(a.acceleration) == pytest.approx(2000.0)


def test_none_option_values_use_defaults():
    """{"k": None} steps exactly like the default options."""
    a = Charge(q=1.0, position=(0.0, 0.0))
    b = Charge(q=1.0, position=(2.0, 0.0))
    a2 = Charge(q=1.0, position=(0.0, 0.0))
    b2 = Charge(q=1.0, position=(2.0, 0.0))
    step_physics([a, b], [], 0.01, {"k": None, "maxAccel": None})
    step_physics([a2, b2], [], 0.01)
    np.testing.assert_array_equal(a.position, a2.position)
    np.testing.assert_array_equal(b.velocity, b2.velocity)


def test_zero_max_accel_leaves_magnetic_term():
    """
    max_accel = 0 zeroes every Coulomb contribution; the magnetic term is
    not clamped, so a moving charge near a magnet feels only that.
    """
    opts = {"k": 1, "softening": 0.1, "maxAccel": 0}
    mag = Magnet(position=(0.0, 2.0), strength=5.0)
    still = Charge(q=3.0, position=(1.0, 0.0))
    moving = Charge(q=1.0, position=(0.0, 0.0), velocity=(1.0, 0.5))
    step_physics([still, moving], [mag], 0.01, opts)

    lone = Charge(q=1.0, position=(0.0, 0.0), velocity=(1.0, 0.5))
    step_physics([lone], [mag], 0.01, opts)

    np.testing.assert_array_equal(still.acceleration, [0.0, 0.0])
    np.testing.assert_array_equal(still.position, [1.0, 0.0])
    assert np.linalg.norm(moving.acceleration) > 0
    np.testing.assert_allclose(moving.acceleration, lone.acceleration, rtol=1e-15)
    np.testing.assert_allclose(moving.position, lone.position, rtol=1e-15)


def test_damping_warning_not_repeated_across_steps(caplog, monkeypatch):
    monkeypatch.setattr(options_module, "_warned_damping", set())
    c = Charge(q=1.0, velocity=(1.0, 0.0))
    with caplog.at_level(logging.WARNING, logger="electro_sim.options"):
        for _ in range(5):
            step_physics([c], [], 0.01, {"damping": 1.02})
    assert len(caplog.records) == 1


def test_rk4_entry_point():
    a = Charge(q=1.0, position=(0.0, 0.0))
    b = Charge(q=-1.0, position=(1.0, 0.0))
    step_physics_rk4([a, b], [], 0.01, {"k": 1.0})
    assert a.position[0] > 0.0
    assert b.position[0] < 1.0


def test_step_dispatch_matches_entry_points():
    def world():
        return [Charge(q=1.0, position=(0.0, 0.0), velocity=(0.0, 1.0)),
                Charge(q=-1.0, position=(2.0, 1.0))]
    mags = [Magnet(position=(1.0, -1.0), strength=5.0)]

    for name, fn in (("euler", step_physics), ("rk4", step_physics_rk4)):
        a, b = world(), world()
        step(a, mags, 0.02, None, integrator=name)
        fn(b, mags, 0.02)
        for ca, cb in zip(a, b):
            np.testing.assert_array_equal(ca.position, cb.position)
            np.testing.assert_array_equal(ca.velocity, cb.velocity)


def test_fields_integrator_ignores_magnets():
    mag = Magnet(position=(0.0, 0.0), strength=1000.0)
    c = Charge(q=1.0, position=(3.0, 0.0), velocity=(0.0, 1.0))
    step([c], [mag], 0.1, integrator="fields")
    np.testing.assert_array_equal(c.velocity, [0.0, 1.0])
    np.testing.assert_allclose(c.position, [3.0, 0.1])


def test_unknown_integrator():
    with pytest.raises(ValueError, match="Unknown integrator"):
        step([], [], 0.01, integrator="verlet")


def test_empty_world():
    step_physics([], [], 0.1)
    step_physics_rk4([], [Magnet()], 0.1)


def test_large_dt_is_not_clamped():
    """The kernel integrates whatever dt it is given."""
    c = Charge(q=1.0, velocity=(1.0, 0.0))
    step_physics([c], [], 10.0)
    np.testing.assert_allclose(c.position, [10.0, 0.0])


def test_electric_field_uses_step_options():
    charges = [Charge(q=2.0, position=(1.0, 1.0)), Charge(q=-1.0, position=(-2.0, 0.5))]
    p = (0.3, -0.4)

    np.testing.assert_array_equal(electric_field(p, charges), electric_field_at(p, charges, 1.0, 0.1))
    np.testing.assert_array_equal(
        electric_field(p, charges, {"k": 5.0, "softening": 0.4}),
        electric_field_at(p, charges, 5.0, 0.4),
    )


def test_field_consistent_with_force():
    """q * E(x) / m at a charge (others only) equals its unclamped acceleration."""
    probe = Charge(q=0.5, mass=2.0, position=(0.0, 0.0), pinned=True)
    sources = [Charge(q=1.0, position=(1.0, 0.0), pinned=True),
               Charge(q=-3.0, position=(0.0, 2.0), pinned=True)]
    opts = SimulationOptions(k=3.0, softening=0.2, max_accel=float("inf"))
    step_physics([probe] + sources, [], 0.01, opts)

    E = electric_field(probe.position, sources, opts)
    np.testing.assert_allclose(probe.acceleration, probe.q * E / probe.mass, rtol=1e-12)
