from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ScheduledItem:
    id: str                                  # opaque; owned by the caller's storage
    frequency_type: str                      # 'monthly' | 'weekly' | ... | 'per_paycheck'
    frequency_config: dict = field(default_factory=dict)
    anchor_date: Optional[str] = None        # 'YYYY-MM-DD', biweekly phase
    next_due_date: Optional[str] = None      # 'YYYY-MM-DD'
    name: str = ""
