"""Environment helpers."""
