from dataclasses import dataclass
from typing import Optional


@dataclass
class AuthUser:
    id: str
    email: str
    access_token: Optional[str] = None
