"""Script import schemas"""

from uuid import UUID
from pydantic import BaseModel, Field


class ScriptImportRequest(BaseModel):
    """Screenplay text already extracted by the client"""
    script_text: str = Field(..., min_length=1, description="Full screenplay text")


class ScriptImportResponse(BaseModel):
    """Result of replacing a project's scenes from a script"""
    project_id: UUID
    scenes_created: int
    truncated: bool = Field(
        default=False,
        description="True when the script exceeded the analysis limit and was cut",
    )
