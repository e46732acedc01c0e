"""
Client-side data cache.

``DataStore`` is the only writer of the in-memory projects, tasks and
journals of the signed-in owner. Consumers receive the store explicitly and
only read its tuples; every change goes through an async mutation method,
which either returns the server's authoritative record or an error with the
collections untouched.
"""
import asyncio
import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, TypeVar

from pydantic_core import to_jsonable_python

from planner.errors import DuplicateSubmission, PlannerError, ValidationFailure
from planner.features.planning import Notification, NotificationFeed

from .api import PlannerClient

logger = logging.getLogger("planner.client.store")

T = TypeVar("T")


@dataclass(frozen=True)
class MutationResult(Generic[T]):
    """Either the server's record (or ``None`` for deletes) or the error that stopped it."""

    record: Optional[T] = None
    error: Optional[PlannerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, record: Optional[T] = None) -> "MutationResult[T]":
        return cls(record=record)

    @classmethod
    def failure(cls, error: PlannerError) -> "MutationResult[T]":
        return cls(error=error)

    def unwrap(self) -> Optional[T]:
        if self.error is not None:
            raise self.error
        return self.record


def _log_error(message: str) -> None:
    logger.warning(message)


class DataStore:
    def __init__(self, client: PlannerClient, *, on_error: Optional[Callable[[str], None]] = None):
        self._client = client
        self._on_error = on_error or _log_error
        self._feed = NotificationFeed()
        self._collections: Dict[str, Tuple[Any, ...]] = {"projects": (), "tasks": (), "journals": ()}
        self._in_flight: set = set()
        self._load_token = 0
        self.owner_id: Optional[str] = None
        self.loading: bool = False
        self.load_error: Optional[PlannerError] = None

    # --- read projections -------------------------------------------------

    @property
    def projects(self) -> Tuple[Any, ...]:
        return self._collections["projects"]

    @property
    def tasks(self) -> Tuple[Any, ...]:
        return self._collections["tasks"]

    @property
    def journals(self) -> Tuple[Any, ...]:
        return self._collections["journals"]

    def notifications(self, now: Optional[datetime] = None) -> List[Notification]:
        # Recomputed only when the task tuple or the reference time changes
        return self._feed.get(self.tasks, now)

    # --- owner lifecycle --------------------------------------------------

    async def set_owner(self, owner_id: Optional[str]) -> bool:
        """Switch the signed-in owner and load their collections.

        Returns False when any of the three fetches fails; prior state is then
        left exactly as it was. A load overtaken by a later owner change is
        discarded and also returns False.
        """
        self._load_token += 1
        token = self._load_token
        self.owner_id = owner_id
        if owner_id is None:
            self._collections = {"projects": (), "tasks": (), "journals": ()}
            self._feed.invalidate()
            self.loading = False
            self.load_error = None
            return True

        self.loading = True
        try:
            projects, tasks, journals = await asyncio.gather(
                self._client.list("projects", owner_id),
                self._client.list("tasks", owner_id),
                self._client.list("journals", owner_id),
            )
        except PlannerError as exc:
            if token != self._load_token:
                return False
            logger.error("Loading data for %s failed: %s", owner_id, exc)
            self.load_error = exc
            self._on_error("Failed to load data")
            return False
        finally:
            if token == self._load_token:
                self.loading = False

        if token != self._load_token:
            # Signed out or switched while loading; the result belongs to nobody
            logger.info("Discarding data loaded for %s after owner change", owner_id)
            return False

        self._collections = {
            "projects": tuple(projects),
            "tasks": tuple(tasks),
            "journals": tuple(journals),
        }
        self.load_error = None
        logger.info(
            "Loaded %d project(s), %d task(s), %d journal(s) for %s",
            len(projects),
            len(tasks),
            len(journals),
            owner_id,
        )
        return True

    # --- generic mutations ------------------------------------------------

    def _replace(self, resource: str, items) -> None:
        self._collections[resource] = tuple(items)

    async def _create(self, resource: str, fields: Dict[str, Any]) -> MutationResult:
        if self.owner_id is None:
            return MutationResult.failure(ValidationFailure("No signed-in user"))

        payload = {**fields, "user_id": self.owner_id}
        key = (resource, json.dumps(to_jsonable_python(payload), sort_keys=True))
        if key in self._in_flight:
            logger.warning("Ignoring duplicate %s submission while the first is in flight", resource)
            return MutationResult.failure(DuplicateSubmission(f"This {resource[:-1]} is already being saved"))

        self._in_flight.add(key)
        try:
            record = await self._client.create(resource, payload)
        except PlannerError as exc:
            logger.error("Error adding %s: %s", resource[:-1], exc)
            return MutationResult.failure(exc)
        finally:
            self._in_flight.discard(key)

        # Read the current tuple after the await so concurrent patches are kept
        self._replace(resource, self._collections[resource] + (record,))
        return MutationResult.success(record)

    async def _update(self, resource: str, entity_id: str, fields: Dict[str, Any]) -> MutationResult:
        try:
            record = await self._client.update(resource, entity_id, fields)
        except PlannerError as exc:
            logger.error("Error updating %s %s: %s", resource[:-1], entity_id, exc)
            return MutationResult.failure(exc)

        self._replace(
            resource,
            (record if item.id == entity_id else item for item in self._collections[resource]),
        )
        return MutationResult.success(record)

    async def _delete(self, resource: str, entity_id: str) -> MutationResult:
        try:
            await self._client.delete(resource, entity_id)
        except PlannerError as exc:
            logger.error("Error deleting %s %s: %s", resource[:-1], entity_id, exc)
            return MutationResult.failure(exc)

        self._replace(resource, (item for item in self._collections[resource] if item.id != entity_id))
        return MutationResult.success()

    # --- projects ---------------------------------------------------------

    async def add_project(self, fields: Dict[str, Any]) -> MutationResult:
        return await self._create("projects", fields)

    async def update_project(self, project_id: str, fields: Dict[str, Any]) -> MutationResult:
        return await self._update("projects", project_id, fields)

    async def delete_project(self, project_id: str) -> MutationResult:
        return await self._delete("projects", project_id)

    # --- tasks ------------------------------------------------------------

    async def add_task(self, fields: Dict[str, Any]) -> MutationResult:
        return await self._create("tasks", fields)

    async def update_task(self, task_id: str, fields: Dict[str, Any]) -> MutationResult:
        return await self._update("tasks", task_id, fields)

    async def delete_task(self, task_id: str) -> MutationResult:
        return await self._delete("tasks", task_id)

    # --- journals ---------------------------------------------------------

    async def add_journal(self, fields: Dict[str, Any]) -> MutationResult:
        return await self._create("journals", fields)

    async def update_journal(self, journal_id: str, fields: Dict[str, Any]) -> MutationResult:
        return await self._update("journals", journal_id, fields)

    async def delete_journal(self, journal_id: str) -> MutationResult:
        return await self._delete("journals", journal_id)
