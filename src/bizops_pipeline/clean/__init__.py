"""Bulk import utilities.

Provides functions to normalize raw record exports (CSV or JSON), validate
them against the collection models and load the valid rows into a
repository.
"""
