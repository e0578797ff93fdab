"""Conversion and bridging between Yamaha RCP lines and OSC messages."""

__version__ = "1.0.0"
__all__ = ["bridge", "conversion", "osc"]