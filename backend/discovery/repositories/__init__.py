"""
Repository Layer - Entity Store Access

Read-only psycopg2 queries for businesses and products. Repositories
return domain models and wrap driver errors in InternalError.
"""
from discovery.repositories.business_repository import BusinessRepository
from discovery.repositories.product_repository import ProductRepository

__all__ = [
    'BusinessRepository',
    'ProductRepository'
]
