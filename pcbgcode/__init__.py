"""Unit conversion, drill racks, file naming and G-code writing for circuit board milling."""

__version__ = "0.1.0"