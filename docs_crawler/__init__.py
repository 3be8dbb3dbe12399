"""
docs_crawler: crawls documentation websites into cleaned pages and a
searchable entry index.
"""

__version__ = "0.1.0"
