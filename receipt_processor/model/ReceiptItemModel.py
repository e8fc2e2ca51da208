from pydantic import ConfigDict, Field, field_validator
from pydantic.dataclasses import dataclass


@dataclass(config=ConfigDict(populate_by_name=True))
class ReceiptItem:
    short_description: str = Field(default="", alias="shortDescription")
    price: str = ""

    @field_validator("short_description", "price", mode="before")
    @classmethod
    def null_to_empty(cls, value):
        return "" if value is None else value
