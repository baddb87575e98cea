"""
Product Domain Models

Prices are Decimal end to end. The packet/pricing breakdown is derived
from the stored fields (packets, items_per_packet, price_per_item,
fulfillment_cost) the same way for every listing.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """
    Exact Decimal for a stored amount, no rounding

    Floats go through str() so 0.1 stays 0.1 instead of picking up the
    binary expansion.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, float):
        value = str(value)
    return Decimal(value)


def to_money(value) -> Decimal:
    """Two-place Decimal, half up; only derived outputs are rounded"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class Product(BaseModel):
    """
    Product record as stored

    Fields:
        packets: Number of full packets in stock
        items_per_packet: Units bundled in one packet
        price_per_item: Price of one unit, stored precision (not rounded)
        fulfillment_cost: Per-order fulfillment cost
        image_urls: Image URLs, in upload order
    """

    id: UUID = Field(..., description="Product ID")
    business_id: UUID = Field(..., description="Owning business ID")
    name: str = Field(..., description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    packets: int = Field(0, ge=0, description="Full packets in stock")
    items_per_packet: int = Field(0, ge=0, description="Units per packet")
    price_per_item: Decimal = Field(Decimal("0"), ge=0, description="Unit price")
    fulfillment_cost: Decimal = Field(Decimal("0"), ge=0, description="Fulfillment cost")
    image_urls: List[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True, frozen=True)

    # Computed properties
    @property
    def total_quantity(self) -> int:
        """Units in stock"""
        return self.packets * self.items_per_packet

    @property
    def unit_price(self) -> Decimal:
        return to_money(self.price_per_item)

    @property
    def total_price(self) -> Decimal:
        """Value of the whole stock at unit price"""
        return to_money(self.price_per_item * self.packets * self.items_per_packet)

    @property
    def packet_price(self) -> Decimal:
        return to_money(self.price_per_item * self.items_per_packet)

    @property
    def full_packets_available(self) -> int:
        return self.packets

    @property
    def additional_units(self) -> int:
        # Partial packets are not tracked; stock is always whole packets
        return 0


class ProductSummary(BaseModel):
    """Product discovery result with its pricing breakdown"""

    id: UUID
    name: str
    description: Optional[str] = None
    total_price: Decimal
    total_quantity: int
    images: List[str] = Field(default_factory=list)
    business_id: UUID
    business_name: str
    full_packets_available: int
    additional_units: int
    items_per_packet: int
    unit_price: Decimal
    fulfillment_cost: Decimal
    packet_price: Decimal
    distance_km: Optional[float] = None
    formatted_distance: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_product(
        cls,
        product: Product,
        business_name: str,
        distance_km: Optional[float] = None,
        formatted_distance: Optional[str] = None
    ) -> "ProductSummary":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            total_price=product.total_price,
            total_quantity=product.total_quantity,
            images=list(product.image_urls),
            business_id=product.business_id,
            business_name=business_name,
            full_packets_available=product.full_packets_available,
            additional_units=product.additional_units,
            items_per_packet=product.items_per_packet,
            unit_price=product.unit_price,
            fulfillment_cost=to_money(product.fulfillment_cost),
            packet_price=product.packet_price,
            distance_km=distance_km,
            formatted_distance=formatted_distance,
        )

    def to_dict(self) -> dict:
        """JSON-ready dict; money stays exact as two-place decimal strings"""
        return self.model_dump(mode="json")
