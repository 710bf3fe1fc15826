"""ssh wrapper with per-host pre/post hooks and stored passwords."""

__version__ = "0.1.0"
