"""
TableOPS package

This package provides a small, modular table reservation manager for a
single restaurant.  It separates the reservation engine, domain objects,
validation rules, configuration data and the text-menu user interface
into distinct subpackages to encourage maintainability and clarity.
"""

__all__ = ["core", "domain", "data", "rules", "ui"]
