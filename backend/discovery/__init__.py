"""
Location Discovery Backend

Ranks and paginates businesses and their products by distance,
administrative region and free-text search.
"""
__version__ = "1.0.0"
