"""Stepwise: a terminal agent that builds projects one step at a time."""

__version__ = "0.1.0"
