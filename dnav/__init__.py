"""D-NAV decision-candidate extraction."""

__version__ = "0.1.0"
