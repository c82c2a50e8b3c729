# examples/coulomb_pair.py
from electro_sim import Charge, SimulationOptions, step_physics, step_physics_rk4
from electro_sim.core import total_energy

# Two opposite charges on a (softened) circular orbit; compare energy drift
opts = SimulationOptions(k=1.0, softening=0.1, damping=1.0, max_accel=float("inf"))
v = (2.0 / 4.01 ** 1.5) ** 0.5


def make_pair():
    return [
        Charge(q=+1.0, position=(-1.0, 0.0), velocity=(0.0, -v)),
        Charge(q=-1.0, position=(+1.0, 0.0), velocity=(0.0, +v)),
    ]


for name, fn in [("euler", step_physics), ("rk4", step_physics_rk4)]:
    charges = make_pair()
    e0 = total_energy(charges, opts)
    for _ in range(2000):
        fn(charges, [], 0.05, opts)
    e1 = total_energy(charges, opts)
    print(f"{name:5s} E0={e0:.6f} E1={e1:.6f} rel drift={(e1 - e0) / abs(e0):.2e}")
    print("      positions:", charges[0].position, charges[1].position)
