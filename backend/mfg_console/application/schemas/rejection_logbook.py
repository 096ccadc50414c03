"""Pydantic DTOs for rejection logbook entries."""

import time

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RejectionLogbookLineItem(BaseModel):
    """One rejected batch on a machine."""

    model_config = _CAMEL

    serial_number: str | None = None
    date: str = Field(..., min_length=1)
    machine_type: str = Field(..., min_length=1)
    machine_name: str = Field(..., min_length=1)
    production_order_no: str = Field(..., min_length=1)
    product_description: str = Field(..., min_length=1)
    order_qty: str = Field(..., min_length=1)
    produced_qty: str = Field(..., min_length=1)
    rejection_qty: str = Field(..., min_length=1)
    rejection_reason: str | None = None
    rework_qty: str | None = None
    rework_time: str | None = None
    scrap_qty: str | None = None
    process_stage: str | None = None
    rejection_type: str | None = None
    issue_description: str | None = None
    responsibility: str | None = None
    remarks: str | None = None
    approved_hod_sign: str | None = Field(None, alias="approvedHODSign")


class RejectionLogbookCreate(BaseModel):
    """Schema for creating or replacing a rejection logbook entry."""

    model_config = _CAMEL

    logbook_number: str = Field(..., min_length=1, examples=["RL-120455"])
    date: str = Field(..., min_length=1)
    items: list[RejectionLogbookLineItem] = Field(..., min_length=1)


def generate_rejection_logbook_number() -> str:
    return f"RL-{str(int(time.time() * 1000))[-6:]}"
