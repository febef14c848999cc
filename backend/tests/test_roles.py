"""Tests for crew role classification"""

import pytest

from nova.schemas.roles import (
    AccessClass,
    CrewRole,
    Department,
    MANAGER_ROLES,
    ROLE_TO_DEPARTMENT,
    access_class_for,
    department_for,
    is_manager,
    parse_role,
)
from nova.services.context import RequestContext


class TestAccessClass:
    """Manager vs contributor classification"""

    @pytest.mark.parametrize("role", sorted(MANAGER_ROLES, key=lambda r: r.value))
    def test_manager_roles(self, role):
        assert is_manager(role) is True
        assert access_class_for(role) == AccessClass.MANAGER

    def test_crew_roles_are_contributors(self):
        assert access_class_for(CrewRole.GAFFER) == AccessClass.CONTRIBUTOR
        assert access_class_for(CrewRole.VIEWER) == AccessClass.CONTRIBUTOR

    def test_no_role_is_contributor(self):
        assert is_manager(None) is False
        assert access_class_for(None) == AccessClass.CONTRIBUTOR


class TestDepartmentMapping:
    """Role to budget department table"""

    def test_known_mappings(self):
        assert department_for(CrewRole.CAMERA_OPERATOR) == Department.CAMERA
        assert department_for(CrewRole.GAFFER) == Department.LIGHTING
        assert department_for(CrewRole.PROPS_MASTER) == Department.PROPS
        assert department_for(CrewRole.LOCATION_SCOUT) == Department.LOCATION
        assert department_for(CrewRole.MAKEUP_DEPARTMENT_HEAD) == Department.MAKEUP_HAIR

    def test_roles_without_department(self):
        assert department_for(CrewRole.PRODUCER) is None
        assert department_for(CrewRole.VIEWER) is None
        assert department_for(CrewRole.WRITER) is None
        assert department_for(None) is None

    def test_managers_have_no_department(self):
        assert not MANAGER_ROLES & set(ROLE_TO_DEPARTMENT)

    def test_department_order_starts_with_camera(self):
        departments = [d.value for d in Department]
        assert departments[:3] == ["Camera", "Lighting", "Sound"]
        assert departments[-1] == "Miscellaneous"
        assert len(departments) == 19


class TestParseRole:
    """Stored role strings"""

    def test_parse_valid(self):
        assert parse_role("Gaffer") == CrewRole.GAFFER

    def test_parse_unknown_or_empty(self):
        assert parse_role("Chief Vibes Officer") is None
        assert parse_role("") is None
        assert parse_role(None) is None

    def test_role_count(self):
        assert len(CrewRole) == 54


class TestRequestContext:
    """Derived properties of the caller context"""

    def test_context_properties(self):
        from uuid import uuid4

        ctx = RequestContext(user_id=uuid4(), email="a@example.com", role=CrewRole.BOOM_OPERATOR)
        assert ctx.is_manager is False
        assert ctx.access_class == AccessClass.CONTRIBUTOR
        assert ctx.department == Department.SOUND
