# examples/drag_and_release.py
from electro_sim import Simulation, Charge, SimulationOptions

sim = Simulation(options=SimulationOptions.interactive())
a = sim.add_charge(Charge(q=+1.0, position=(350.0, 300.0)))
b = sim.add_charge(Charge(q=-1.0, position=(450.0, 300.0)))

# Hold the positive charge in place and pull it around while b follows
sim.grab((352.0, 301.0))
for i in range(60):
    sim.drag_to((350.0, 300.0 - 2.0 * i))
    sim.advance(1 / 60)
sim.release()

for _ in range(60):
    sim.advance(1 / 60)

print("a:", a.position, a.velocity)
print("b:", b.position, b.velocity)
print("energy:", sim.energy())
