"""Component descriptor resolution for mini-program builds."""

__version__ = "0.1.0"
