"""Parsers for reference data files."""

from .reference_data_parser import ReferenceDataParser

__all__ = ["ReferenceDataParser"]
