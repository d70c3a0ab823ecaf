"""Catalyst Journal - guided multi-day training workbook API."""

__version__ = "0.1.0"
