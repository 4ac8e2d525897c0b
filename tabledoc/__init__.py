"""
Table documentation generator: catalog introspection to HTML reference pages
"""

__version__ = "0.1.0"
