from dataclasses import dataclass
from typing import Optional


@dataclass
class Unit:
    id: str
    floor_id: str
    unit_no: str
    chargeable_area: float = 0.0         # sq ft
    carpet_area: float = 0.0
    status: Optional[str] = None         # informational only, occupancy comes from tenant/vacant rows
    premises_condition: Optional[str] = None


@dataclass
class VacantSpace:
    unit_id: str
    quoted_rent: Optional[float] = None  # per sq ft per month
    availability_date: Optional[str] = None
    handover_condition: Optional[str] = None
