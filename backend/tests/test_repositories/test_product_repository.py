"""
Unit tests for ProductRepository
"""
from decimal import Decimal
from unittest.mock import MagicMock, patch
from uuid import UUID

import pytest

from discovery.repositories.product_repository import ProductRepository

BUSINESS_ID = 'b3b1f7e2-5f0e-4a53-9d1e-2f7f1b0c9a11'
OTHER_BUSINESS_ID = '0c6f3a52-8d6e-4f0b-a1d2-6e2f3c4b5a69'
PRODUCT_ID = '9a1d2c3b-4e5f-4a6b-8c7d-1e2f3a4b5c6d'


@pytest.fixture
def db():
    """Patched connection; yields (mock_get_conn, conn, cursor)"""
    with patch('discovery.repositories.base.get_db_connection_dict') as mock_get_conn:
        conn = MagicMock()
        cursor = MagicMock()
        conn.cursor.return_value = cursor
        mock_get_conn.return_value = conn
        yield mock_get_conn, conn, cursor


@pytest.fixture
def product_row():
    return {
        'id': PRODUCT_ID,
        'business_id': BUSINESS_ID,
        'name': 'Rice 5kg',
        'description': 'Long grain',
        'packets': 3,
        'items_per_packet': 12,
        'price_per_item': Decimal('500.00'),
        'fulfillment_cost': None,
    }


class TestProductRepository:

    def test_find_by_business_with_images(self, db, product_row):
        # Arrange
        _, _, cursor = db
        cursor.fetchone.return_value = {'total': 1}
        cursor.fetchall.side_effect = [
            [product_row],
            [
                {'product_id': PRODUCT_ID, 'image_url': 'https://cdn.example.com/rice-1.jpg'},
                {'product_id': PRODUCT_ID, 'image_url': 'https://cdn.example.com/rice-2.jpg'},
            ],
        ]

        # Act
        products, total = ProductRepository().find_by_business(UUID(BUSINESS_ID), 1, 10, "price_per_item", "desc")

        # Assert
        assert total == 1
        product = products[0]
        assert product.id == UUID(PRODUCT_ID)
        assert product.total_price == Decimal('18000.00')
        assert product.fulfillment_cost == Decimal('0.00')
        assert product.image_urls == [
            'https://cdn.example.com/rice-1.jpg',
            'https://cdn.example.com/rice-2.jpg',
        ]
        page_sql, page_params = cursor.execute.call_args_list[1][0]
        assert "ORDER BY price_per_item DESC, id ASC" in page_sql
        assert page_params == [BUSINESS_ID, 10, 10]
        # count, page, images
        assert cursor.execute.call_count == 3
        images_sql, images_params = cursor.execute.call_args_list[2][0]
        assert "FROM product_images" in images_sql
        assert "ORDER BY product_id, id" in images_sql
        assert images_params == ([PRODUCT_ID],)

    def test_sub_cent_unit_price_is_not_rounded_before_multiplying(self, product_row):
        # Arrange
        row = {**product_row, 'price_per_item': Decimal('0.125'), 'packets': 1, 'items_per_packet': 1000}

        # Act
        product = ProductRepository._map_row_to_product(row)

        # Assert
        assert product.price_per_item == Decimal('0.125')
        assert product.total_price == Decimal('125.00')
        assert product.packet_price == Decimal('125.00')
        assert product.unit_price == Decimal('0.13')

    def test_float_price_converted_through_str(self, product_row):
        row = {**product_row, 'price_per_item': 0.1, 'packets': 10, 'items_per_packet': 3, 'fulfillment_cost': 2.5}

        product = ProductRepository._map_row_to_product(row)

        assert product.price_per_item == Decimal('0.1')
        assert product.total_price == Decimal('3.00')
        assert product.fulfillment_cost == Decimal('2.5')

    def test_find_by_business_and_name(self, db):
        _, _, cursor = db
        cursor.fetchone.return_value = {'total': 0}
        cursor.fetchall.return_value = []

        products, total = ProductRepository().find_by_business_and_name(UUID(BUSINESS_ID), "ri_ce", 0, 10)

        assert products == []
        assert total == 0
        assert cursor.execute.call_args_list[0][0][1] == [BUSINESS_ID, "%ri\\_ce%"]
        # No image query for an empty page
        assert cursor.execute.call_count == 2

    @pytest.mark.parametrize("sort_column, direction", [
        ("name; DROP TABLE products", "asc"),
        ("name", "sideways"),
    ])
    def test_order_by_rejects_unknown_input(self, db, sort_column, direction):
        mock_get_conn, _, _ = db

        with pytest.raises(ValueError):
            ProductRepository().find_by_business(UUID(BUSINESS_ID), 0, 10, sort_column, direction)
        mock_get_conn.assert_not_called()

    def test_count_for_business(self, db):
        _, _, cursor = db
        cursor.fetchone.return_value = {'total': 4}

        assert ProductRepository().count_for_business(UUID(BUSINESS_ID)) == 4
        assert cursor.execute.call_args[0][1] == (BUSINESS_ID,)

    def test_count_for_businesses_defaults_to_zero(self, db):
        _, _, cursor = db
        cursor.fetchall.return_value = [{'business_id': BUSINESS_ID, 'total': 7}]

        counts = ProductRepository().count_for_businesses([UUID(BUSINESS_ID), UUID(OTHER_BUSINESS_ID)])

        assert counts == {UUID(BUSINESS_ID): 7, UUID(OTHER_BUSINESS_ID): 0}
        cursor.execute.assert_called_once()

    def test_count_for_no_businesses(self, db):
        mock_get_conn, _, _ = db

        assert ProductRepository().count_for_businesses([]) == {}
        mock_get_conn.assert_not_called()

    def test_find_business_ids_by_name_substring(self, db):
        _, _, cursor = db
        cursor.fetchall.return_value = [{'business_id': BUSINESS_ID}, {'business_id': OTHER_BUSINESS_ID}]

        ids = ProductRepository().find_business_ids_by_name_substring("Rice", limit=11)

        assert ids == [UUID(BUSINESS_ID), UUID(OTHER_BUSINESS_ID)]
        sql, params = cursor.execute.call_args[0]
        assert "SELECT DISTINCT business_id" in sql
        assert "LIMIT %s" in sql
        assert params == ["%Rice%", 11]
