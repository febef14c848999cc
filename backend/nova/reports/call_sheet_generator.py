"""Call sheet generator: plain-text sheet for one shoot day"""

import re
from datetime import date
from typing import List, Optional, Sequence, Tuple

from nova.models import Project, Scene, ShootDay

SHEET_WIDTH = 80
NO_NOTES = "No notes for this day."
CREW_CALL_PLACEHOLDER = "(To be filled in by production)"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9 ._()-]+")


def format_long_date(value: date) -> str:
    """e.g. Monday, January 5, 2026"""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


class CallSheetGenerator:
    """
    Renders the call sheet handed to cast and crew for a shoot day.
    Output is produced on request and never stored.
    """

    def __init__(self, width: int = SHEET_WIDTH):
        self.width = width

    def _rule(self, char: str) -> str:
        return char * self.width

    def _section(self, title: str) -> List[str]:
        return [self._rule("-"), title.center(self.width).rstrip(), self._rule("-")]

    @staticmethod
    def _scene_block(scene: Scene, call_time: Optional[str]) -> List[str]:
        lines = [
            f"Scene {scene.scene_number}: {scene.heading or 'Untitled'}",
            f"  Location: {scene.location_type or 'INT'} - {scene.specific_location or 'TBD'}",
            f"  Time: {scene.time_of_day or 'DAY'}",
            f"  Cast: {scene.characters_present or 'TBD'}",
        ]
        if call_time:
            lines.append(f"  Call: {call_time}")
        return lines

    def render(
        self,
        project: Project,
        shoot_day: ShootDay,
        scenes: Sequence[Tuple[Scene, Optional[str]]],
    ) -> str:
        """
        Build the sheet text.

        Args:
            project: Project the day belongs to
            shoot_day: Day being printed
            scenes: (scene, call_time) pairs in running order
        """
        lines = [
            self._rule("="),
            "CALL SHEET".center(self.width).rstrip(),
            self._rule("="),
            "",
            f"PROJECT: {project.name}",
            f"DATE: {format_long_date(shoot_day.shoot_date)}",
            f"STATUS: {(shoot_day.status or '').upper()}",
            "",
        ]

        lines.extend(self._section("NOTES"))
        lines.append(shoot_day.notes or NO_NOTES)
        lines.append("")

        lines.extend(self._section("SCENES"))
        if not scenes:
            lines.append("No scenes scheduled.")
        for scene, call_time in scenes:
            lines.append("")
            lines.extend(self._scene_block(scene, call_time))
        lines.append("")

        lines.extend(self._section("CREW CALL TIMES"))
        lines.append(CREW_CALL_PLACEHOLDER)
        lines.append("")
        lines.append(self._rule("="))

        return "\n".join(lines) + "\n"

    @staticmethod
    def filename(project: Project, shoot_day: ShootDay) -> str:
        """CallSheet_{project}_{date}.txt, header-safe"""
        name = _UNSAFE_FILENAME_CHARS.sub("_", project.name)
        return f"CallSheet_{name}_{shoot_day.shoot_date.isoformat()}.txt"
