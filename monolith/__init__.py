"""monolith: a deterministic, deliberately tangled numeric run.

Feeds a batch of string inputs, a seed, a flag, a name and a list of
integers through one large calculation and prints a numeric summary plus a
sample of the per-item state it built along the way.

Usage:
    python -m monolith                          # Defaults: seed 42, flag on, name alpha
    python -m monolith a,bb,ccc x;y             # Inputs are the positional args
    python -m monolith run a,bb --repeat 3      # Thread the global counter through 3 runs
    python -m monolith config                   # Show effective defaults
"""

__version__ = "0.1.0"
