"""Crew roles, budget departments and the tables that classify them"""

from enum import Enum
from typing import Dict, FrozenSet, Optional


class CrewRole(str, Enum):
    """Job titles a user can pick for their profile"""

    # Leadership
    PRODUCER = "Producer"
    EXECUTIVE_PRODUCER = "Executive Producer"
    LINE_PRODUCER = "Line Producer"
    DIRECTOR = "Director"
    ASSISTANT_DIRECTOR = "Assistant Director"
    # Production
    PRODUCTION_MANAGER = "Production Manager"
    PRODUCTION_COORDINATOR = "Production Coordinator"
    PRODUCTION_ASSISTANT = "Production Assistant"
    # Camera
    DIRECTOR_OF_PHOTOGRAPHY = "Director of Photography"
    CAMERA_OPERATOR = "Camera Operator"
    FIRST_AC = "1st AC"
    SECOND_AC = "2nd AC"
    DIT = "DIT"
    STEADICAM_OPERATOR = "Steadicam Operator"
    DRONE_OPERATOR = "Drone Operator"
    # Lighting & grip
    GAFFER = "Gaffer"
    BEST_BOY_ELECTRIC = "Best Boy Electric"
    ELECTRICIAN = "Electrician"
    KEY_GRIP = "Key Grip"
    BEST_BOY_GRIP = "Best Boy Grip"
    DOLLY_GRIP = "Dolly Grip"
    # Sound
    PRODUCTION_SOUND_MIXER = "Production Sound Mixer"
    BOOM_OPERATOR = "Boom Operator"
    SOUND_ASSISTANT = "Sound Assistant"
    SOUND_DESIGNER = "Sound Designer"
    # Art
    PRODUCTION_DESIGNER = "Production Designer"
    ART_DIRECTOR = "Art Director"
    SET_DESIGNER = "Set Designer"
    SET_DECORATOR = "Set Decorator"
    CONSTRUCTION_COORDINATOR = "Construction Coordinator"
    # Costume & makeup
    COSTUME_DESIGNER = "Costume Designer"
    WARDROBE_SUPERVISOR = "Wardrobe Supervisor"
    MAKEUP_DEPARTMENT_HEAD = "Makeup Department Head"
    HAIR_DEPARTMENT_HEAD = "Hair Department Head"
    SPECIAL_EFFECTS_MAKEUP = "Special Effects Makeup"
    # Post-production
    EDITOR = "Editor"
    ASSISTANT_EDITOR = "Assistant Editor"
    COLORIST = "Colorist"
    VFX_SUPERVISOR = "VFX Supervisor"
    VFX_ARTIST = "VFX Artist"
    COMPOSITOR = "Compositor"
    # Creative
    WRITER = "Writer"
    STORYBOARD_ARTIST = "Storyboard Artist"
    CONCEPT_ARTIST = "Concept Artist"
    # Other
    LOCATION_MANAGER = "Location Manager"
    LOCATION_SCOUT = "Location Scout"
    CASTING_DIRECTOR = "Casting Director"
    STUNT_COORDINATOR = "Stunt Coordinator"
    CHOREOGRAPHER = "Choreographer"
    COMPOSER = "Composer"
    PUBLICIST = "Publicist"
    STILL_PHOTOGRAPHER = "Still Photographer"
    PROPS_MASTER = "Props Master"
    VIEWER = "Viewer"


class Department(str, Enum):
    """Budget departments, in reporting order"""

    CAMERA = "Camera"
    LIGHTING = "Lighting"
    SOUND = "Sound"
    ART_DEPARTMENT = "Art Department"
    COSTUMES = "Costumes"
    MAKEUP_HAIR = "Makeup & Hair"
    PROPS = "Props"
    LOCATION = "Location"
    CAST = "Cast"
    CREW = "Crew"
    EQUIPMENT_RENTAL = "Equipment Rental"
    TRANSPORTATION = "Transportation"
    CATERING = "Catering"
    POST_PRODUCTION = "Post-Production"
    VFX = "VFX"
    MUSIC = "Music"
    INSURANCE = "Insurance"
    PERMITS = "Permits"
    MISCELLANEOUS = "Miscellaneous"


class AccessClass(str, Enum):
    """Coarse permission class derived from a role"""

    MANAGER = "manager"
    CONTRIBUTOR = "contributor"


MANAGER_ROLES: FrozenSet[CrewRole] = frozenset({
    CrewRole.PRODUCER,
    CrewRole.EXECUTIVE_PRODUCER,
    CrewRole.LINE_PRODUCER,
    CrewRole.DIRECTOR,
    CrewRole.PRODUCTION_MANAGER,
    CrewRole.ASSISTANT_DIRECTOR,
})

ROLE_TO_DEPARTMENT: Dict[CrewRole, Department] = {
    CrewRole.DIRECTOR_OF_PHOTOGRAPHY: Department.CAMERA,
    CrewRole.CAMERA_OPERATOR: Department.CAMERA,
    CrewRole.FIRST_AC: Department.CAMERA,
    CrewRole.SECOND_AC: Department.CAMERA,
    CrewRole.DIT: Department.CAMERA,
    CrewRole.STEADICAM_OPERATOR: Department.CAMERA,
    CrewRole.DRONE_OPERATOR: Department.CAMERA,
    CrewRole.GAFFER: Department.LIGHTING,
    CrewRole.BEST_BOY_ELECTRIC: Department.LIGHTING,
    CrewRole.ELECTRICIAN: Department.LIGHTING,
    CrewRole.KEY_GRIP: Department.LIGHTING,
    CrewRole.BEST_BOY_GRIP: Department.LIGHTING,
    CrewRole.DOLLY_GRIP: Department.LIGHTING,
    CrewRole.PRODUCTION_SOUND_MIXER: Department.SOUND,
    CrewRole.BOOM_OPERATOR: Department.SOUND,
    CrewRole.SOUND_ASSISTANT: Department.SOUND,
    CrewRole.SOUND_DESIGNER: Department.SOUND,
    CrewRole.PRODUCTION_DESIGNER: Department.ART_DEPARTMENT,
    CrewRole.ART_DIRECTOR: Department.ART_DEPARTMENT,
    CrewRole.SET_DESIGNER: Department.ART_DEPARTMENT,
    CrewRole.SET_DECORATOR: Department.ART_DEPARTMENT,
    CrewRole.CONSTRUCTION_COORDINATOR: Department.ART_DEPARTMENT,
    CrewRole.PROPS_MASTER: Department.PROPS,
    CrewRole.COSTUME_DESIGNER: Department.COSTUMES,
    CrewRole.WARDROBE_SUPERVISOR: Department.COSTUMES,
    CrewRole.MAKEUP_DEPARTMENT_HEAD: Department.MAKEUP_HAIR,
    CrewRole.HAIR_DEPARTMENT_HEAD: Department.MAKEUP_HAIR,
    CrewRole.SPECIAL_EFFECTS_MAKEUP: Department.MAKEUP_HAIR,
    CrewRole.EDITOR: Department.POST_PRODUCTION,
    CrewRole.ASSISTANT_EDITOR: Department.POST_PRODUCTION,
    CrewRole.COLORIST: Department.POST_PRODUCTION,
    CrewRole.VFX_SUPERVISOR: Department.VFX,
    CrewRole.VFX_ARTIST: Department.VFX,
    CrewRole.COMPOSITOR: Department.VFX,
    CrewRole.LOCATION_MANAGER: Department.LOCATION,
    CrewRole.LOCATION_SCOUT: Department.LOCATION,
}


def parse_role(value: Optional[str]) -> Optional[CrewRole]:
    """Return the CrewRole for a stored role string, or None when unknown"""
    if not value:
        return None
    try:
        return CrewRole(value)
    except ValueError:
        return None


def is_manager(role: Optional[CrewRole]) -> bool:
    return role in MANAGER_ROLES


def access_class_for(role: Optional[CrewRole]) -> AccessClass:
    """Managers get full project rights, everybody else contributes budget only"""
    return AccessClass.MANAGER if is_manager(role) else AccessClass.CONTRIBUTOR


def department_for(role: Optional[CrewRole]) -> Optional[Department]:
    """Department a role submits budget entries for, if any"""
    if role is None:
        return None
    return ROLE_TO_DEPARTMENT.get(role)
