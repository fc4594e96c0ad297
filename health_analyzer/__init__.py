"""Risk scoring webhook for community health reports."""

__version__ = "1.0.0"
