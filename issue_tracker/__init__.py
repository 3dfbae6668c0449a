"""
Issue tracker core: issue creation with hierarchy consistency over a
single persisted JSON document.
"""

__version__ = "0.1.0"
