"""Pydantic DTOs for job cards.

Only the fields the console filters and displays are modelled; the rest of
the sheet (design, program, operations, inspection) is kept as-is.
"""

import time
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

JobCardStatus = Literal["Planned", "In Progress", "On Hold", "Completed"]


class JobCardSale(BaseModel):
    """Commercial block of a job card — who ordered what."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    client_name: str = Field(..., min_length=1)
    address: str | None = None
    item_name: str | None = None
    item_description: str | None = None
    quantity: str | None = None
    raw_material: str | None = None
    contact_person: str | None = None
    contact_phone: str | None = None
    delivery_date: str | None = None


class JobCardCreate(BaseModel):
    """Schema for creating or replacing a job card."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    job_number: str = Field(..., min_length=1, examples=["JC-551203"])
    sr_number: str = Field(..., min_length=1)
    job_date: str = Field(..., min_length=1)
    job_order_number: str = Field(..., min_length=1)
    quote_number: str | None = None
    quotation_id: str | None = None
    status: JobCardStatus = "Planned"
    sale: JobCardSale
    design: dict[str, Any] = Field(default_factory=dict)
    program: dict[str, Any] = Field(default_factory=dict)
    operations: list[dict[str, Any]] = Field(default_factory=list)
    final_inspection: dict[str, Any] = Field(default_factory=dict)
    work_center: str | None = None


def generate_job_number() -> str:
    return f"JC-{str(int(time.time() * 1000))[-6:]}"
