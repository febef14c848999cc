"""Script import: screenplay text in, a fresh scene breakdown out"""

import logging
from io import BytesIO
from typing import Any, Dict, List, Optional
from uuid import UUID

import PyPDF2
from PyPDF2.errors import PdfReadError
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from nova.models import NotificationType, Scene, SCENE_TEXT_FIELDS
from nova.monitoring.metrics import metrics_collector
from nova.services.context import RequestContext
from nova.services.exceptions import ValidationFailedError
from nova.services.notification_service import NotificationService
from nova.services.project_service import (
    delete_scene_dependents,
    get_member_project,
    require_manager,
)
from nova.services.script_analysis_service import (
    ScriptAnalysisError,
    ScriptAnalysisService,
    ScriptParseError,
    truncate_script,
)

logger = logging.getLogger(__name__)

MIN_SCRIPT_LENGTH = 10

# scenes.scene_number is a 32-bit INTEGER
MAX_SCENE_NUMBER = 2**31 - 1

SCENE_FIELD_DEFAULTS = {
    "location_type": "INT",
    "time_of_day": "DAY",
}

SUPPORTED_SCRIPT_EXTENSIONS = (".txt", ".pdf")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(_as_text(item) for item in value if item is not None)
    return str(value)


def _scene_number(value: Any, position: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return position
    if not 0 <= number <= MAX_SCENE_NUMBER:
        return position
    return number


def _column_length(field: str) -> Optional[int]:
    return getattr(Scene.__table__.c[field].type, "length", None)


def normalize_scene(raw: Any, position: int) -> Dict[str, Any]:
    """
    Turn one model-produced object into Scene column values.

    Args:
        raw: Object from the model's JSON array
        position: 1-based index in the array, used when scene_number is unusable

    Raises:
        ScriptParseError: If the item is not a JSON object
    """
    if not isinstance(raw, dict):
        raise ScriptParseError("Invalid response format from AI")

    number = _scene_number(raw.get("scene_number"), position)
    values: Dict[str, Any] = {"scene_number": number}

    for field in SCENE_TEXT_FIELDS:
        text = _as_text(raw.get(field)).strip()
        if not text:
            if field == "heading":
                text = f"Scene {number}"
            else:
                text = SCENE_FIELD_DEFAULTS.get(field, "")
        # Bounded columns (location_type, time_of_day) are cut to fit
        length = _column_length(field)
        if length is not None:
            text = text[:length].rstrip()
        values[field] = text

    return values


def normalize_scenes(raw_scenes: List[Any]) -> List[Dict[str, Any]]:
    return [normalize_scene(raw, position) for position, raw in enumerate(raw_scenes, start=1)]


def extract_script_text(filename: str, data: bytes) -> str:
    """
    Pull plain text out of an uploaded .txt or .pdf screenplay.

    Raises:
        ValidationFailedError: Unsupported file type or unreadable file
    """
    name = (filename or "").lower()

    if name.endswith(".txt"):
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            raise ValidationFailedError("Text scripts must be UTF-8 encoded")

    if name.endswith(".pdf"):
        try:
            reader = PyPDF2.PdfReader(BytesIO(data))
            pages = [page.extract_text() or "" for page in reader.pages]
        except PdfReadError as e:
            logger.warning(f"Unreadable PDF upload {filename}: {e}")
            raise ValidationFailedError("Could not read the PDF file")
        return "\n\n".join(text for text in pages if text)

    raise ValidationFailedError(
        f"Unsupported script file type. Allowed: {', '.join(SUPPORTED_SCRIPT_EXTENSIONS)}"
    )


class ScriptImportService:
    """
    Replaces a project's scenes with the breakdown of a screenplay.
    All input checks and model output parsing happen before the first delete,
    and the replacement runs in a single transaction.
    """

    def __init__(self, db: AsyncSession, analysis: Optional[ScriptAnalysisService] = None):
        self.db = db
        self.analysis = analysis or ScriptAnalysisService()
        self.notifications = NotificationService(db)
        self.truncated = False

    async def import_script(self, ctx: RequestContext, project_id: UUID, script_text: str) -> int:
        """
        Analyze the script and swap in the resulting scenes.

        Returns:
            Number of scenes created

        Raises:
            ValidationFailedError: Script too short
            ScriptAnalysisError: Any AI service or parse failure (scenes untouched)
        """
        project = await get_member_project(self.db, ctx, project_id)
        require_manager(ctx, "import scripts")

        if len((script_text or "").strip()) < MIN_SCRIPT_LENGTH:
            raise ValidationFailedError("Script text is empty or too short")

        limited, self.truncated = truncate_script(script_text)
        if self.truncated:
            logger.info(
                f"Script for project {project_id} truncated from {len(script_text)} "
                f"to {len(limited)} characters"
            )

        try:
            raw_scenes = await self.analysis.analyze(limited)
            scene_values = normalize_scenes(raw_scenes)
        except ScriptAnalysisError as e:
            metrics_collector.record_script_import(type(e).__name__)
            raise

        try:
            count = await self._replace_scenes(project_id, scene_values)
            await self.notifications.notify_members(
                project_id=project_id,
                notification_type=NotificationType.SCRIPT_UPLOADED,
                title="Script uploaded",
                message=f"A new script was imported into {project.name} ({count} scenes)",
                exclude_user_ids=[ctx.user_id],
            )
            await self.notifications.commit()
        except Exception:
            self.notifications.discard_pending()
            await self.db.rollback()
            metrics_collector.record_script_import("db_error")
            logger.error(f"Scene replacement for project {project_id} failed, rolled back")
            raise

        metrics_collector.record_script_import("success", scene_count=count)
        logger.info(f"Imported {count} scenes into project {project_id}")
        return count

    async def _replace_scenes(self, project_id: UUID, scene_values: List[Dict[str, Any]]) -> int:
        old_ids = select(Scene.id).where(Scene.project_id == project_id)
        await delete_scene_dependents(self.db, old_ids)
        await self.db.execute(
            delete(Scene)
            .where(Scene.project_id == project_id)
            .execution_options(synchronize_session=False)
        )

        self.db.add_all(Scene(project_id=project_id, **values) for values in scene_values)
        await self.db.flush()
        return len(scene_values)
