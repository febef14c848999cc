"""API schemas package"""

from .roles import AccessClass, CrewRole, Department
from .auth import LoginRequest, SignupRequest, ProfileUpdate, TokenResponse, UserInfo
from .project import ProjectCreate, ProjectJoin, ProjectResponse, JoinProjectResult
from .scene import SceneCreate, SceneUpdate, SceneResponse
from .script import ScriptImportRequest, ScriptImportResponse
from .budget import BudgetReport, BudgetEntryResponse, BudgetTotals

__all__ = [
    "AccessClass",
    "CrewRole",
    "Department",
    "LoginRequest",
    "SignupRequest",
    "ProfileUpdate",
    "TokenResponse",
    "UserInfo",
    "ProjectCreate",
    "ProjectJoin",
    "ProjectResponse",
    "JoinProjectResult",
    "SceneCreate",
    "SceneUpdate",
    "SceneResponse",
    "ScriptImportRequest",
    "ScriptImportResponse",
    "BudgetReport",
    "BudgetEntryResponse",
    "BudgetTotals",
]
