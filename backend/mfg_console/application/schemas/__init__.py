from .job_card import JobCardCreate, JobCardSale, generate_job_number
from .purchase import PurchaseCreate
from .rejection_logbook import (
    RejectionLogbookCreate,
    RejectionLogbookLineItem,
    generate_rejection_logbook_number,
)
from .shift_handover import (
    ShiftHandoverCreate,
    ShiftHandoverLineItem,
    generate_shift_handover_number,
)

__all__ = [
    "JobCardCreate",
    "JobCardSale",
    "generate_job_number",
    "PurchaseCreate",
    "RejectionLogbookCreate",
    "RejectionLogbookLineItem",
    "generate_rejection_logbook_number",
    "ShiftHandoverCreate",
    "ShiftHandoverLineItem",
    "generate_shift_handover_number",
]
