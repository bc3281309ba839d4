"""Diagnostics package.

- coverage: always available, prints the date span of every local bulletin
- plot_deltat: optional (requires the diagnostics extras: numpy, matplotlib)
"""

__all__ = ["coverage", "plot_deltat"]
