# examples/magnet_deflection.py
from electro_sim import Simulation, Charge, Magnet, SimulationOptions, configure_logging

configure_logging("DEBUG")

# A charge shot past a bar magnet curves sideways
sim = Simulation(options=SimulationOptions.interactive(), integrator="rk4")
sim.add_magnet(Magnet(position=(400.0, 300.0), angle=0.0, strength=10000.0))
probe = sim.add_charge(Charge(q=1.0, mass=1.0, position=(100.0, 260.0), velocity=(120.0, 0.0)))

for frame in range(300):
    sim.advance(1 / 60)
    if frame % 50 == 0:
        print(f"t={sim.time:.2f} pos=({probe.position[0]:.1f}, {probe.position[1]:.1f}) "
              f"v=({probe.velocity[0]:.1f}, {probe.velocity[1]:.1f})")
