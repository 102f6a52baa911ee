"""Pydantic models for the releases API."""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from release_tracker.configs.constants import ReleaseStatus
from release_tracker.server.releases.status import derive_release_status

if TYPE_CHECKING:
    from release_tracker.db.models import Release


@dataclass(frozen=True)
class ReleaseChecklist:
    """Ordered, read-only list of the step names every release goes through."""

    steps: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.steps)

    def is_valid_index(self, step_index: int) -> bool:
        return 0 <= step_index < len(self.steps)


# === Requests ===


class ReleaseCreationRequest(BaseModel):
    # Required, checked by the handler so that a missing value is a 400
    name: str | None = None
    date: datetime | None = None
    additional_info: str | None = None


class ReleaseUpdateRequest(BaseModel):
    """Partial update. Fields left out of the body are not touched."""

    name: str | None = None
    date: datetime | None = None
    additional_info: str | None = None

    def provided_fields(self) -> dict[str, object]:
        return self.model_dump(exclude_unset=True)


class ToggleStepRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    step_index: int | None = Field(default=None, alias="stepIndex")


# === Responses ===


class ReleaseStepSnapshot(BaseModel):
    name: str
    completed: bool


class ReleaseSnapshot(BaseModel):
    id: UUID
    name: str
    date: datetime
    additional_info: str | None
    steps_completed: list[bool]
    created_at: datetime
    updated_at: datetime
    status: ReleaseStatus
    steps: list[ReleaseStepSnapshot]

    @classmethod
    def from_model(
        cls, release: "Release", checklist: ReleaseChecklist
    ) -> "ReleaseSnapshot":
        """Convert a Release ORM model to its API representation."""
        stored_steps = release.steps_completed
        steps_completed = (
            [bool(completed) for completed in stored_steps]
            if isinstance(stored_steps, list)
            else []
        )

        return cls(
            id=release.id,
            name=release.name,
            date=release.date,
            additional_info=release.additional_info,
            steps_completed=steps_completed,
            created_at=release.created_at,
            updated_at=release.updated_at,
            status=derive_release_status(steps_completed),
            steps=[
                ReleaseStepSnapshot(
                    name=step_name,
                    completed=(
                        steps_completed[index]
                        if index < len(steps_completed)
                        else False
                    ),
                )
                for index, step_name in enumerate(checklist.steps)
            ],
        )


class ReleaseDeletionResponse(BaseModel):
    message: str
    id: UUID


class ReleaseChecklistResponse(BaseModel):
    steps: list[str]
