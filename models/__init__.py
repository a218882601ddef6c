from models.building import Building, Developer
from models.floor import Floor
from models.unit import Unit, VacantSpace
from models.tenant import Tenant
from models.occupancy import (
    AvailabilitySummary, AvailableSpace, AvailableUnit, FloorOccupancy,
    OccupiedSpace, OccupiedTenant, TenantLeaseDetail, TenantOccupancyReport, TenantShare,
)
from models.auth import AuthUser
