"""Services package"""

from .s3_service import S3Service
from .project_service import ProjectService
from .scene_service import SceneService
from .script_import_service import ScriptImportService
from .budget_service import BudgetService
from .schedule_service import ScheduleService
from .crew_service import CrewService
from .notification_service import NotificationService

__all__ = [
    "S3Service",
    "ProjectService",
    "SceneService",
    "ScriptImportService",
    "BudgetService",
    "ScheduleService",
    "CrewService",
    "NotificationService",
]
