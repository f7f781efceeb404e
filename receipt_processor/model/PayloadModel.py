"""Pydantic documents for the JSON request and response bodies."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from receipt_processor.model.ReceiptItemModel import ReceiptItem
from receipt_processor.model.ReceiptModel import Receipt


class ItemPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    short_description: StrictStr = Field(alias="shortDescription")
    price: StrictStr


class ReceiptPayload(BaseModel):
    """A receipt as submitted by the client. Field values are kept as strings."""

    model_config = ConfigDict(populate_by_name=True)

    retailer: StrictStr
    purchase_date: StrictStr = Field(alias="purchaseDate", description="YYYY-MM-DD")
    purchase_time: StrictStr = Field(alias="purchaseTime", description="HH:MM, 24-hour")
    total: StrictStr
    items: List[ItemPayload]

    def to_receipt(self) -> Receipt:
        return Receipt(
            retailer=self.retailer,
            purchase_date=self.purchase_date,
            purchase_time=self.purchase_time,
            total=self.total,
            items=tuple(
                ReceiptItem(short_description=item.short_description, price=item.price)
                for item in self.items
            ),
        )


class ProcessResponse(BaseModel):
    id: str


class PointsResponse(BaseModel):
    points: int


class ErrorResponse(BaseModel):
    detail: str
