"""Templates for generated growthfit configuration files."""

DEFAULT_CONFIG = """# growthfit configuration
# Search settings for the scaling-constant optimizer
partitions: 32
tolerance: 1.0e-5
max_rounds: 500
# symmetric: re-centre on best +/- one step
# legacy: derive the new upper bound from the already moved lower bound
narrowing: symmetric

# Growth functions to rank (declared order is kept)
candidates:
  - "O(1)"
  - "O(log n)"
  - "O(n)"
  - "O(n log n)"
  - "O(n^2)"
  - "O(n^2 log n)"
  - "O(n^3)"
  - "O(2^n)"

# Fit candidates on a thread pool (0 or 1 = sequential)
parallel_workers: 0

# Per-candidate C/error lines on stderr
diagnostics: true

# growthfit measure
measure_sizes:
  - 64
  - 128
  - 256
  - 512
  - 1024
measure_trials: 3
measure_warmups: 1
"""

MINIMAL_CONFIG = """# growthfit minimal configuration
narrowing: symmetric
diagnostics: true
"""

POLYNOMIAL_CONFIG = """# growthfit configuration without the exponential candidate
candidates:
  - "O(1)"
  - "O(log n)"
  - "O(n)"
  - "O(n log n)"
  - "O(n^2)"
  - "O(n^2 log n)"
  - "O(n^3)"
"""

CONFIG_PRESETS = {
    "full": DEFAULT_CONFIG,
    "minimal": MINIMAL_CONFIG,
    "polynomial": POLYNOMIAL_CONFIG,
}
