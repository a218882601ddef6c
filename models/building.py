from dataclasses import dataclass
from typing import Optional


@dataclass
class Developer:
    id: str
    name: str
    group_name: Optional[str] = None
    contact_person: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    website: Optional[str] = None


@dataclass
class Building:
    id: str
    developer_id: str
    name: str
    location: Optional[str] = None
    micromarket_zone: Optional[str] = None
    building_structure: Optional[str] = None
    building_title: Optional[str] = None
    grade: Optional[str] = None
    total_area: float = 0.0              # sq ft
    certifications: Optional[str] = None
    google_coordinates: Optional[str] = None  # "lat, lng"
    cam: float = 0.0                     # common area maintenance, per sq ft
    year_built: Optional[int] = None
    construction_status: Optional[str] = None
    building_status: Optional[str] = None
    building_image_link: Optional[str] = None

    @property
    def is_leed_certified(self) -> bool:
        return bool(self.certifications) and "leed" in self.certifications.lower()
