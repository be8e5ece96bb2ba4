"""
Example 01: Line Coding and Modulation

This example walks through the digital side of the toolkit:
- Converting text to bits
- Encoding the bits with every line code
- Keying the same bits onto a carrier (ASK, FSK, PSK)
- Checking channel limits with the Nyquist and Shannon formulas
"""

import matplotlib.pyplot as plt

from datacomm import EncodingScheme, decode_line, encode_line, modulate, plotting
from datacomm.bits import text_to_bits
from datacomm.metrics import nyquist_rate, shannon_capacity
from datacomm.utils import format_si

print("=" * 70)
print("EXAMPLE 01: Line Coding and Modulation")
print("=" * 70)

# =============================================================================
# Step 1: Text to bits
# =============================================================================
bits = text_to_bits("Hi")
print(f"\n'Hi' -> {bits}")

# =============================================================================
# Step 2: Line codes
# =============================================================================
fig, axes = plt.subplots(len(EncodingScheme), 1, figsize=(10, 14), sharex=True)
for ax, scheme in zip(axes, EncodingScheme):
    trace = encode_line(bits, scheme)
    assert decode_line(trace, scheme) == bits
    plotting.line_code(bits, scheme, ax=ax)
    print(f"{scheme.value:>16}: {len(trace)} points")

# =============================================================================
# Step 3: Digital modulation
# =============================================================================
keyed = [modulate(kind, bits="10110") for kind in ("ASK", "FSK", "PSK")]
plotting.series(keyed, title="Digital-to-analog keying")

# =============================================================================
# Step 4: Channel limits
# =============================================================================
print(f"\nNyquist (3 kHz, 4 levels): {format_si(nyquist_rate(3000, 4), 'bps')}")
print(f"Shannon (3 kHz, 30 dB):    {format_si(shannon_capacity(3000, 30), 'bps')}")

plt.show()
