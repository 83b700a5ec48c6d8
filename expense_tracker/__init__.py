"""Expense Tracker — in-memory expense records with filtered summaries."""
__version__ = "1.0.0"
