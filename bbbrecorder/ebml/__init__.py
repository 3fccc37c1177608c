"""EBML element catalogue: data types, element types, element IDs and errors."""

__all__ = ["datatype", "errors", "elementtype", "elementtable"]