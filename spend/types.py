from enum import Enum
from decimal import Decimal
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

ORDER_COLUMNS = (
    "Territory",
    "Restaurant ID",
    "Order ID",
    "Order Time",
    "Order Status",
    "Item Name",
    "Customizations",
    "Special Instructions",
    "Item Price",
    "Order Price",
    "Currency",
)


class OrderRecord(BaseModel):
    """One row of an order-history export, values kept exactly as parsed."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    territory: str = Field("", alias="Territory")
    restaurant_id: str = Field("", alias="Restaurant ID")
    order_id: str = Field("", alias="Order ID")
    order_time: str = Field("", alias="Order Time")
    order_status: str = Field("", alias="Order Status")
    item_name: str = Field("", alias="Item Name")
    customizations: str = Field("", alias="Customizations")
    special_instructions: str = Field("", alias="Special Instructions")
    item_price: str = Field("", alias="Item Price")
    order_price: str = Field("", alias="Order Price")
    currency: str = Field("", alias="Currency")


class UploadedFile(BaseModel):
    filepath: Path
    content_type: str
    filename: str
    size_bytes: int


class SummaryResult(BaseModel):
    total_spend: Decimal = Field(Decimal("0"), serialization_alias="totalSpend")
    first_order_time: Optional[str] = Field(None, serialization_alias="firstOrderTime")

    @field_serializer("total_spend", when_used="json")
    def _spend_as_number(self, value: Decimal) -> float:
        return float(value)


class PipelineState(str, Enum):
    IDLE = "idle"
    RECEIVING = "receiving"
    PARSING = "parsing"
    AGGREGATING = "aggregating"
    CLEANING_UP = "cleaning_up"
    DONE = "done"
    FAILED = "failed"
