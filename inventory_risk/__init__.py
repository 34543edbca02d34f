"""Inventory risk timeline, BOM feasibility and relationship graph engine."""

__version__ = "0.1.0"
