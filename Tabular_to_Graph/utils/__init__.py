"""Utility modules for the Tabular to Graph converter."""
