from dataclasses import dataclass
from typing import Optional


@dataclass
class Tenant:
    unit_id: str
    name: str
    current_rent: float = 0.0            # per sq ft per month
    id: Optional[str] = None
    lease_commencement_date: Optional[str] = None
    primary_industry_sector: Optional[str] = None
    security_deposit: float = 0.0
    lock_in_period: int = 0              # months
    lock_in_expiry: Optional[str] = None
    lease_period: int = 0                # months
    type_of_user: Optional[str] = None
    lease_expiry: Optional[str] = None
    escalation: float = 0.0              # e.g. 15 for 15% per escalation cycle
    handover_conditions: Optional[str] = None
    car_parking_charges: float = 0.0
    notice_period: int = 0               # months
    car_parking_ratio: Optional[str] = None
    status: Optional[str] = None
