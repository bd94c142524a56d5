"""aurpkg — a small and lightweight AUR helper."""

__version__ = "0.2.0"
