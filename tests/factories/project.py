"""Project and membership factories for test data generation."""

from polyfactory import Use

from src.teamhub.models import Project, ProjectMember
from src.teamhub.models.enums import ProjectRole, ProjectStatus
from tests.factories.base import BaseFactory, generate_uuid, utc_now


class ProjectFactory(BaseFactory):
    """Factory for generating Project test data.

    ``owner_id`` must be set explicitly.
    """

    __model__ = Project

    id = Use(generate_uuid)
    owner_id = None
    name = Use(lambda: f"진단 프로젝트 {generate_uuid().hex[-6:]}")
    description = None
    color = "#3B82F6"
    status = ProjectStatus.ACTIVE.value
    facility_type = None
    facility_name = None
    address = None
    diagnosis_type = None
    contact_person = None
    contact_phone = None
    contact_email = None
    special_notes = None
    start_date = None
    end_date = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class ProjectMemberFactory(BaseFactory):
    """Factory for generating ProjectMember test data."""

    __model__ = ProjectMember

    # FK fields - must be set explicitly
    project_id = None
    user_id = None
    id = Use(generate_uuid)
    role = ProjectRole.MEMBER.value
    specialty = None
    joined_at = Use(utc_now)

    @classmethod
    def owner(cls, **kwargs):
        """Create an owner membership."""
        return cls.build(role=ProjectRole.OWNER.value, **kwargs)
