"""
Movie Catalog - add, browse, search, edit and delete movies with hosted images
"""

__version__ = "1.0.0"
