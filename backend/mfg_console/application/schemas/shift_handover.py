"""Pydantic DTOs for shift handover sheets."""

import time
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShiftHandoverLineItem(BaseModel):
    """One machine's handover line."""

    model_config = _CAMEL

    machine_name: str = Field(..., min_length=1)
    shift: str = Field(..., min_length=1)
    operator_name: str = Field(..., min_length=1)
    running_item_description: str = Field(..., min_length=1)
    target_qty: str = Field(..., min_length=1)
    completed_qty: str = Field(..., min_length=1)
    manual_work_done: str | None = None
    issue: str | None = None
    next_action: str | None = None
    operator_sign: str | None = None


class ShiftHandoverCreate(BaseModel):
    """Schema for creating or replacing a shift handover sheet."""

    model_config = _CAMEL

    report_number: str = Field(..., min_length=1, examples=["SH-482913"])
    date: str = Field(..., min_length=1, examples=["2026-03-14"])
    production_shift: Literal["Day", "Night", "General"] = "Day"
    items: list[ShiftHandoverLineItem] = Field(..., min_length=1)
    note: str | None = None
    day_shift_in_charge: str | None = None
    night_shift_in_charge: str | None = None
    production_manager: str | None = None


def generate_shift_handover_number() -> str:
    """``SH-`` followed by the last six digits of the epoch-millisecond clock."""
    return f"SH-{str(int(time.time() * 1000))[-6:]}"
