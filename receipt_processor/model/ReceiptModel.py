from typing import List

from pydantic import ConfigDict, Field, field_validator
from pydantic.dataclasses import dataclass

from receipt_processor.model.ReceiptItemModel import ReceiptItem


@dataclass(config=ConfigDict(populate_by_name=True))
class Receipt:
    retailer: str = ""
    purchase_date: str = Field(default="", alias="purchaseDate")  # YYYY-MM-DD
    purchase_time: str = Field(default="", alias="purchaseTime")  # HH:MM, 24h
    items: List[ReceiptItem] = Field(default_factory=list)
    total: str = ""

    # JSON null leaves a field at its empty value
    @field_validator("retailer", "purchase_date", "purchase_time", "total", mode="before")
    @classmethod
    def null_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("items", mode="before")
    @classmethod
    def null_items(cls, value):
        if value is None:
            return []
        if isinstance(value, list):
            return [{} if item is None else item for item in value]
        return value
