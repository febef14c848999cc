"""Database models package"""

from nova.models.base import BaseModel
from nova.models.user import User, Profile
from nova.models.project import Project, ProjectMember
from nova.models.scene import Scene, SCENE_TEXT_FIELDS
from nova.models.budget_entry import BudgetEntry
from nova.models.shoot_day import ShootDay, ShootDayStatus, DayScene, DaySceneStatus
from nova.models.notification import Notification, NotificationType

# Export all models
__all__ = [
    "BaseModel",
    "User",
    "Profile",
    "Project",
    "ProjectMember",
    "Scene",
    "SCENE_TEXT_FIELDS",
    "BudgetEntry",
    "ShootDay",
    "ShootDayStatus",
    "DayScene",
    "DaySceneStatus",
    "Notification",
    "NotificationType",
]
