"""
Pytest fixtures for the discovery backend tests

Nothing here needs a database: repositories are replaced by mocks and
psycopg2 connections are patched where repositories are tested.
"""
from decimal import Decimal
from unittest.mock import Mock
from uuid import uuid4

import pytest

from discovery.domain.business import Business
from discovery.domain.location import Location
from discovery.domain.product import Product
from discovery.repositories.business_repository import BusinessRepository
from discovery.repositories.product_repository import ProductRepository

# Requester standing in central Kigali
REQUESTER = {"latitude": -1.95, "longitude": 30.06}


@pytest.fixture
def make_business():
    """Factory for Business domain models"""
    def _make(name="Kigali Market", latitude=None, longitude=None, **regions):
        return Business(
            id=uuid4(),
            name=name,
            about=f"{name} description",
            website_link=None,
            is_open=True,
            location=Location(latitude=latitude, longitude=longitude, **regions),
        )
    return _make


@pytest.fixture
def make_product():
    """Factory for Product domain models"""
    def _make(business_id, name="Rice 5kg", packets=3, items_per_packet=12,
              price_per_item=Decimal("500"), fulfillment_cost=Decimal("0"), image_urls=None):
        return Product(
            id=uuid4(),
            business_id=business_id,
            name=name,
            description=None,
            packets=packets,
            items_per_packet=items_per_packet,
            price_per_item=price_per_item,
            fulfillment_cost=fulfillment_cost,
            image_urls=image_urls or [],
        )
    return _make


@pytest.fixture
def business_repo():
    """BusinessRepository mock"""
    return Mock(spec=BusinessRepository)


@pytest.fixture
def product_repo():
    """ProductRepository mock; product counts default to 0"""
    repo = Mock(spec=ProductRepository)
    repo.count_for_businesses.side_effect = lambda ids: {business_id: 0 for business_id in ids}
    repo.count_for_business.return_value = 0
    return repo


@pytest.fixture
def requester():
    return dict(REQUESTER)


@pytest.fixture
def business_row():
    """A businesses table row as RealDictCursor returns it"""
    return {
        'id': 'b3b1f7e2-5f0e-4a53-9d1e-2f7f1b0c9a11',
        'name': 'Nyamirambo Grocery',
        'about': 'Fresh produce',
        'website_link': 'https://grocery.example.com',
        'is_open': True,
        'province': 'Kigali',
        'district': 'Nyarugenge',
        'sector': 'Nyamirambo',
        'cell': 'Rugarama',
        'village': 'Amahoro',
        'latitude': -1.9706,
        'longitude': 30.0444,
    }
