from dataclasses import dataclass
from typing import Optional


@dataclass
class Floor:
    id: str
    building_id: str
    floor_no: Optional[int]              # several records may share a floor_no
    floor_plate: float = 0.0             # sq ft
    no_of_units: int = 0
    efficiency: Optional[float] = None   # stored as 0.82 or 82
    type_of_space: Optional[str] = None
    floor_plan: Optional[str] = None
