"""
Microbenchmark: time per step vs number of charges, Euler vs RK4.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from electro_sim import Simulation, Charge, Magnet, SimulationOptions
from electro_sim.profiler import Profiler


def run(n: int, integrator: str, steps: int = 100):
    prof = Profiler()
    sim = Simulation(options=SimulationOptions.interactive(), integrator=integrator, profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)
    for _ in range(n):
        x, y = rng.uniform(0, 800), rng.uniform(0, 600)
        q = float(rng.choice([-1.0, 1.0]))
        sim.add_charge(Charge(q=q, position=(x, y)))
    sim.add_magnet(Magnet(position=(400.0, 300.0), strength=10000.0))

    # warmup
    for _ in range(5):
        sim.step(1 / 60)

    t0 = time.perf_counter()
    for _ in range(steps):
        sim.step(1 / 60)
    t1 = time.perf_counter()

    return (t1 - t0) / steps, prof.stats.summary()


if __name__ == "__main__":
    for n in [10, 25, 50, 100]:
        for integrator in ["euler", "rk4"]:
            per_step, summary = run(n, integrator)
            print(f"N={n:4d} {integrator:5s} step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
        print()
