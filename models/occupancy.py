from dataclasses import asdict, dataclass, field
from typing import List, Optional


@dataclass
class AvailableUnit:
    unit_no: str
    area: float
    quoted_rent: Optional[float] = None
    availability_date: Optional[str] = None
    handover_condition: Optional[str] = None


@dataclass
class OccupiedTenant:
    name: str
    unit_no: str
    area: float
    current_rent: float


@dataclass
class AvailableSpace:
    total_area: float = 0.0
    units: List[AvailableUnit] = field(default_factory=list)


@dataclass
class OccupiedSpace:
    tenants: List[OccupiedTenant] = field(default_factory=list)


@dataclass
class FloorOccupancy:
    """Occupancy of one logical floor number, merged across floor records."""
    floor_no: int
    floor_plate: float
    units: List[int]                     # no_of_units of each contributing floor record
    efficiency: Optional[float]
    type_of_space: Optional[str]
    available_space: AvailableSpace = field(default_factory=AvailableSpace)
    occupied_space: OccupiedSpace = field(default_factory=OccupiedSpace)
    other_units: int = 0                 # units with neither a tenant nor a vacant-space row

    def to_dict(self) -> dict:
        data = asdict(self)
        data.pop("other_units")
        return data


@dataclass
class AvailabilitySummary:
    total_available_area: float = 0.0
    available_units_count: int = 0
    average_rent: float = 0.0            # plain mean of quoted rents
    available_unit_areas: List[float] = field(default_factory=list)


@dataclass
class TenantShare:
    name: str
    area: float
    percentage: float                    # 0-100


@dataclass
class TenantLeaseDetail:
    name: str
    current_rent: float
    lease_commencement_date: str
    lock_in_period: int
    lease_expiry: str
    chargeable_area: float


@dataclass
class TenantOccupancyReport:
    total_available_space: float = 0.0
    tenant_occupancy: List[TenantShare] = field(default_factory=list)
    tenant_details: List[TenantLeaseDetail] = field(default_factory=list)

    @property
    def total_leased_area(self) -> float:
        return sum(t.area for t in self.tenant_occupancy)
