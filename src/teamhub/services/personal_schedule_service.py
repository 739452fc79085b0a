"""Personal calendar entries, kept in the Redis document store.

Entries are bucketed by ISO date. A day listing reads the bucket and keeps the
caller's own entries plus every team event.
"""

import datetime as dt
from typing import Any
from uuid import uuid4

from src.teamhub.core.documents import Document, DocumentCollection, DocumentStore
from src.teamhub.core.exceptions import NotFoundError, PermissionDeniedError
from src.teamhub.core.logging import get_logger
from src.teamhub.core.permissions import has_capability
from src.teamhub.models import User
from src.teamhub.models.base import utc_now
from src.teamhub.schemas.work import (
    PersonalScheduleCreate,
    PersonalScheduleRead,
    PersonalScheduleUpdate,
)

logger = get_logger(__name__)

COLLECTION = "user_schedules"


def _require(user: User, capability: str, message: str) -> None:
    if not has_capability(user.access_level, capability):
        raise PermissionDeniedError(message)


class PersonalScheduleService:
    def __init__(self, documents: DocumentStore):
        self.collection: DocumentCollection = documents.collection(
            COLLECTION, indexed_fields=("date",)
        )

    async def list_for_date(self, user: User, day: dt.date) -> list[PersonalScheduleRead]:
        docs = await self.collection.where("date", day.isoformat())
        visible = [
            doc for doc in docs if doc["user_id"] == str(user.id) or doc.get("is_team_event")
        ]
        visible.sort(key=lambda doc: doc["created_at"])
        return [PersonalScheduleRead.model_validate(doc) for doc in visible]

    async def create(self, data: PersonalScheduleCreate, user: User) -> PersonalScheduleRead:
        _require(
            user,
            "can_manage_personal_schedule",
            "You do not have permission to manage personal schedules",
        )
        if data.is_team_event:
            _require(user, "can_manage_team_schedule", "Only administrators can create team events")

        now = utc_now().isoformat()
        doc_id = uuid4().hex
        stored = await self.collection.put(
            doc_id,
            {
                "user_id": str(user.id),
                "title": data.title,
                "description": data.description,
                "date": data.date.isoformat(),
                "is_completed": False,
                "is_team_event": data.is_team_event,
                "author": {
                    "name": user.name,
                    "email": user.email,
                    "access_level": user.access_level,
                },
                "created_at": now,
                "updated_at": now,
            },
        )
        logger.info("Personal schedule created", schedule_id=doc_id, user_id=str(user.id))
        return PersonalScheduleRead.model_validate(stored)

    async def _load_owned(self, schedule_id: str, user: User) -> Document:
        doc = await self.collection.get(schedule_id)
        if doc is None:
            raise NotFoundError("Schedule not found")
        if doc["user_id"] != str(user.id):
            raise PermissionDeniedError("Only the owner can change this schedule")
        return doc

    async def update(
        self, schedule_id: str, data: PersonalScheduleUpdate, user: User
    ) -> PersonalScheduleRead:
        doc = await self._load_owned(schedule_id, user)

        changes: dict[str, Any] = data.model_dump(exclude_unset=True)
        if changes.get("is_team_event"):
            _require(user, "can_manage_team_schedule", "Only administrators can create team events")
        for key in ("title", "date", "is_completed", "is_team_event"):
            if key in changes and changes[key] is None:
                del changes[key]
        if "date" in changes:
            changes["date"] = changes["date"].isoformat()

        stored = await self.collection.put(
            schedule_id, {**doc, **changes, "updated_at": utc_now().isoformat()}
        )
        return PersonalScheduleRead.model_validate(stored)

    async def delete(self, schedule_id: str, user: User) -> None:
        await self._load_owned(schedule_id, user)
        await self.collection.delete(schedule_id)
        logger.info("Personal schedule deleted", schedule_id=schedule_id, user_id=str(user.id))
