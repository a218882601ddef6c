"""Default configuration constants for the Building Portfolio Manager."""

# Store table names
TABLE_DEVELOPERS = "developers"
TABLE_BUILDINGS = "buildings"
TABLE_FLOORS = "floors"
TABLE_UNITS = "units"
TABLE_VACANT_SPACES = "vacant_spaces"
TABLE_TENANTS = "tenants"

TABLES = [
    TABLE_DEVELOPERS,
    TABLE_BUILDINGS,
    TABLE_FLOORS,
    TABLE_UNITS,
    TABLE_VACANT_SPACES,
    TABLE_TENANTS,
]

# ID suggestion prefixes
BUILDING_ID_PREFIX = "B"
DEVELOPER_ID_PREFIX = "D"
DEFAULT_DEVELOPER_IDS = ["D1"]

# Directory
DIRECTORY_PAGE_SIZE = 9
SORT_ORDERS = ["default", "price-asc", "price-desc"]
SORT_LABELS = {
    "default": "Default",
    "price-asc": "Price: Low to High",
    "price-desc": "Price: High to Low",
}

# Building dashboard
LEASE_EXPIRY_WARNING_MONTHS = 18
TENANT_LABEL_MAX_CHARS = 15

# Display
MISSING_DISPLAY = "N/A"
UNKNOWN_TENANT = "Unknown Tenant"
CURRENCY_SYMBOL = "₹"
AREA_UNIT = "sq ft"

# Map (centre of India)
MAP_DEFAULT_CENTER = (20.5937, 78.9629)
MAP_DEFAULT_ZOOM = 4

# Multi-unit creation
DEFAULT_UNIT_STATUS = "Vacant"
DEFAULT_PREMISES_CONDITION = "Shell and Core"

# Form choices
GRADES = ["A+", "A", "B", "C"]
BUILDING_STRUCTURES = ["Single Tower", "Multi Tower", "Campus", "Standalone"]
BUILDING_TITLES = ["Strata", "Non-Strata"]
CONSTRUCTION_STATUSES = ["Completed", "Under Construction", "Planned"]
BUILDING_STATUSES = ["Operational", "Ready to Move", "Under Development"]
SPACE_TYPES = ["Office", "Retail", "Co-working", "Industrial", "Mixed Use"]
HANDOVER_CONDITIONS = ["Bare Shell", "Warm Shell", "Fully Furnished"]
PREMISES_CONDITIONS = ["Shell and Core", "Warm Shell", "Fitted Out"]
UNIT_STATUSES = ["Vacant", "Leased", "Under Renovation", "Reserved"]

# Per-field fallbacks applied when raw rows are parsed into records.
# Keyed by table, then field. Fields absent here default to None.
FIELD_DEFAULTS = {
    TABLE_BUILDINGS: {
        "total_area": 0.0,
        "cam": 0.0,
    },
    TABLE_FLOORS: {
        "floor_plate": 0.0,
        "no_of_units": 0,
    },
    TABLE_UNITS: {
        "unit_no": "",
        "chargeable_area": 0.0,
        "carpet_area": 0.0,
    },
    TABLE_VACANT_SPACES: {},
    TABLE_TENANTS: {
        "name": UNKNOWN_TENANT,
        "current_rent": 0.0,
        "security_deposit": 0.0,
        "lock_in_period": 0,
        "lease_period": 0,
        "escalation": 0.0,
        "car_parking_charges": 0.0,
        "notice_period": 0,
    },
    TABLE_DEVELOPERS: {},
}
