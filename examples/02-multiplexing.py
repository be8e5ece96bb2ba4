"""
Example 02: Multiplexing

Shows the two ways senders share one channel:
- TDM: round-robin frames replayed over a channel with a travel delay
- FDM: contiguous spectrum blocks separated by guard bands
"""

import matplotlib.pyplot as plt

from datacomm import Sender, SimulationConfig, plotting, set_config
from datacomm.fdm import composite_signal
from datacomm.tdm import simulate_tdm

set_config(SimulationConfig(travel_delay=2.0, guard_band=250))

senders = [
    Sender(id=1, name="Alice", payload="HELLO", expression="sin(t)", bandwidth=1000),
    Sender(id=2, name="Bob", payload="HI", expression="2cos(3t)", bandwidth=2000),
    Sender(id=3, name="Carol", payload="HEY", expression="0.5sin(5t)", bandwidth=1500),
]

# =============================================================================
# TDM
# =============================================================================
run = simulate_tdm(senders, slot_size=1, pulse_stuffing=True)
for event in run.events:
    print(f"t={event.time:5.2f}  {event.kind:<8} {event.frame.describe()}")
for sender in senders:
    print(f"{sender.display_name}: {run.buffers[sender.id]!r}")

# =============================================================================
# FDM
# =============================================================================
result = composite_signal(senders)
colors = {1: "tab:cyan", 2: "tab:orange", 3: "tab:green"}

fig, (ax_spec, ax_time) = plt.subplots(2, 1, figsize=(10, 6))
plotting.spectrum_layout(result.blocks, colors=colors, ax=ax_spec)
plotting.series(result.composite, ax=ax_time, title="Composite signal")
plt.show()
