"""API endpoints for release checklists."""

from uuid import UUID

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import status
from sqlalchemy.orm import Session

from release_tracker.configs.app_configs import RELEASE_CHECKLIST_STEPS
from release_tracker.configs.constants import RELEASE_DELETED_MESSAGE
from release_tracker.configs.constants import RELEASE_NOT_FOUND_MESSAGE
from release_tracker.db.engine.sql_engine import get_session
from release_tracker.db.release import create_release
from release_tracker.db.release import delete_release
from release_tracker.db.release import get_release
from release_tracker.db.release import list_releases
from release_tracker.db.release import toggle_release_step
from release_tracker.db.release import update_release
from release_tracker.errors import NotFoundError
from release_tracker.errors import StorageError
from release_tracker.errors import ValidationError
from release_tracker.server.releases.models import ReleaseChecklist
from release_tracker.server.releases.models import ReleaseChecklistResponse
from release_tracker.server.releases.models import ReleaseCreationRequest
from release_tracker.server.releases.models import ReleaseDeletionResponse
from release_tracker.server.releases.models import ReleaseSnapshot
from release_tracker.server.releases.models import ReleaseUpdateRequest
from release_tracker.server.releases.models import ToggleStepRequest
from release_tracker.utils.logger import setup_logger

logger = setup_logger()

router = APIRouter(prefix="/releases", tags=["releases"])

_RELEASE_CHECKLIST = ReleaseChecklist(steps=RELEASE_CHECKLIST_STEPS)


def get_release_checklist() -> ReleaseChecklist:
    return _RELEASE_CHECKLIST


def _parse_release_id(release_id: str) -> UUID:
    # Ids are opaque to clients, anything that is not one of ours is simply unknown
    try:
        return UUID(release_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=RELEASE_NOT_FOUND_MESSAGE
        )


def _internal_error(action: str) -> HTTPException:
    logger.exception(f"Error {action}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail=RELEASE_NOT_FOUND_MESSAGE
    )


@router.get("/steps")
def get_release_steps(
    checklist: ReleaseChecklist = Depends(get_release_checklist),
) -> ReleaseChecklistResponse:
    """Names of the checklist steps, in the order steps_completed refers to them."""
    return ReleaseChecklistResponse(steps=list(checklist.steps))


@router.get("")
def list_releases_endpoint(
    checklist: ReleaseChecklist = Depends(get_release_checklist),
    db_session: Session = Depends(get_session),
) -> list[ReleaseSnapshot]:
    try:
        releases = list_releases(db_session)
    except StorageError:
        raise _internal_error("fetch releases")

    return [ReleaseSnapshot.from_model(release, checklist) for release in releases]


@router.get("/{release_id}")
def get_release_endpoint(
    release_id: str,
    checklist: ReleaseChecklist = Depends(get_release_checklist),
    db_session: Session = Depends(get_session),
) -> ReleaseSnapshot:
    parsed_id = _parse_release_id(release_id)
    try:
        release = get_release(db_session, parsed_id)
    except StorageError:
        raise _internal_error("fetch release")

    if release is None:
        raise _not_found()
    return ReleaseSnapshot.from_model(release, checklist)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_release_endpoint(
    request: ReleaseCreationRequest,
    checklist: ReleaseChecklist = Depends(get_release_checklist),
    db_session: Session = Depends(get_session),
) -> ReleaseSnapshot:
    """Create a release. Every checklist step starts out incomplete."""
    name = request.name.strip() if request.name else ""
    if not name or request.date is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name and date are required",
        )

    try:
        release = create_release(
            db_session,
            name=name,
            date=request.date,
            additional_info=request.additional_info,
            step_count=len(checklist),
        )
    except StorageError:
        raise _internal_error("create release")

    return ReleaseSnapshot.from_model(release, checklist)


@router.patch("/{release_id}")
def update_release_endpoint(
    release_id: str,
    request: ReleaseUpdateRequest,
    checklist: ReleaseChecklist = Depends(get_release_checklist),
    db_session: Session = Depends(get_session),
) -> ReleaseSnapshot:
    """Update name, date and/or additional_info.

    Only the fields sent in the body are changed. Sending additional_info as
    null clears it; name and date cannot be cleared.
    """
    updates = request.provided_fields()
    if not updates:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update"
        )

    if "name" in updates:
        name = updates["name"]
        if not isinstance(name, str) or not name.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Name cannot be empty",
            )
        updates["name"] = name.strip()
    if "date" in updates and updates["date"] is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Date cannot be empty"
        )

    parsed_id = _parse_release_id(release_id)
    try:
        release = update_release(db_session, parsed_id, updates)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFoundError:
        raise _not_found()
    except StorageError:
        raise _internal_error("update release")

    return ReleaseSnapshot.from_model(release, checklist)


@router.patch("/{release_id}/toggle-step")
def toggle_release_step_endpoint(
    release_id: str,
    request: ToggleStepRequest,
    checklist: ReleaseChecklist = Depends(get_release_checklist),
    db_session: Session = Depends(get_session),
) -> ReleaseSnapshot:
    """Flip the completion flag of a single checklist step."""
    step_index = request.step_index
    if step_index is None or not checklist.is_valid_index(step_index):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid step index"
        )

    parsed_id = _parse_release_id(release_id)
    try:
        release = toggle_release_step(
            db_session,
            parsed_id,
            step_index=step_index,
            step_count=len(checklist),
        )
    except NotFoundError:
        raise _not_found()
    except StorageError:
        raise _internal_error("toggle step")

    return ReleaseSnapshot.from_model(release, checklist)


@router.delete("/{release_id}")
def delete_release_endpoint(
    release_id: str,
    db_session: Session = Depends(get_session),
) -> ReleaseDeletionResponse:
    parsed_id = _parse_release_id(release_id)
    try:
        deleted_id = delete_release(db_session, parsed_id)
    except NotFoundError:
        raise _not_found()
    except StorageError:
        raise _internal_error("delete release")

    return ReleaseDeletionResponse(message=RELEASE_DELETED_MESSAGE, id=deleted_id)
