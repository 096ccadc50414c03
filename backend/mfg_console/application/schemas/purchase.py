"""Pydantic DTOs for purchase ledger entries."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class PurchaseCreate(BaseModel):
    """Schema for a purchase entry; amounts stay strings as entered."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: str = Field(..., min_length=1)
    purchase_type: str = Field(..., min_length=1, examples=["RAW MATERIAL PURCHASE A/C"])
    item_name: str = Field(..., min_length=1)
    client_name: str = Field(..., min_length=1)
    billing_address: str = Field(..., min_length=1)
    amount: str = Field(..., min_length=1)
    sgst_amount: str = Field(..., min_length=1)
    cgst_amount: str = Field(..., min_length=1)
    igst_amount: str | None = None
    reason_for_purchase: str = Field(..., min_length=1)
    quantity: float | None = None

    @field_validator("amount", "sgst_amount", "cgst_amount", "igst_amount")
    @classmethod
    def _non_negative_number(cls, value: str | None) -> str | None:
        if value is None or value == "":
            return value
        try:
            number = float(value)
        except ValueError:
            raise ValueError("must be a valid number") from None
        if number < 0:
            raise ValueError("must be a valid number")
        return value

    @property
    def total(self) -> float:
        """Amount plus all taxes."""
        return sum(
            float(v or 0)
            for v in (self.amount, self.sgst_amount, self.cgst_amount, self.igst_amount)
        )
