"""Billing, balance and occupancy rules for the Montez A apartments."""

__version__ = "0.1.0"
