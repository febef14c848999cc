"""Explicit per-request caller context passed to services"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from nova.schemas.roles import (
    AccessClass,
    CrewRole,
    Department,
    access_class_for,
    department_for,
    is_manager,
)


@dataclass(frozen=True)
class RequestContext:
    """Who is calling: identity plus the role chosen on their profile"""

    user_id: UUID
    email: str
    role: Optional[CrewRole] = None

    @property
    def access_class(self) -> AccessClass:
        return access_class_for(self.role)

    @property
    def is_manager(self) -> bool:
        return is_manager(self.role)

    @property
    def department(self) -> Optional[Department]:
        return department_for(self.role)
