"""CRUD operations for releases."""

import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from release_tracker.db.models import Release
from release_tracker.errors import EmptyUpdateError
from release_tracker.errors import NotFoundError
from release_tracker.errors import StorageError
from release_tracker.utils.logger import setup_logger

logger = setup_logger()

# Columns a partial update is allowed to touch
UPDATABLE_RELEASE_FIELDS = ("name", "date", "additional_info")


def _storage_failure(
    db_session: Session, operation: str, error: SQLAlchemyError
) -> StorageError:
    db_session.rollback()
    return StorageError(f"Failed to {operation}: {type(error).__name__}")


def list_releases(db_session: Session) -> list[Release]:
    """All releases, most future / most recent target date first."""
    stmt = select(Release).order_by(Release.date.desc(), Release.created_at.desc())
    try:
        return list(db_session.scalars(stmt).all())
    except SQLAlchemyError as e:
        raise _storage_failure(db_session, "list releases", e) from e


def get_release(db_session: Session, release_id: UUID) -> Release | None:
    try:
        return db_session.get(Release, release_id)
    except SQLAlchemyError as e:
        raise _storage_failure(db_session, "fetch release", e) from e


def get_release_or_raise(db_session: Session, release_id: UUID) -> Release:
    release = get_release(db_session, release_id)
    if release is None:
        raise NotFoundError(release_id)
    return release


def create_release(
    db_session: Session,
    name: str,
    date: datetime.datetime,
    additional_info: str | None,
    step_count: int,
) -> Release:
    """Create a release with every checklist step incomplete.

    Initial step state is never taken from the caller.
    """
    release = Release(
        name=name,
        date=date,
        additional_info=additional_info,
        steps_completed=[False] * step_count,
    )
    db_session.add(release)
    try:
        db_session.commit()
        db_session.refresh(release)
    except SQLAlchemyError as e:
        raise _storage_failure(db_session, "create release", e) from e

    logger.info(f"Created release {release.id} ({release.name!r})")
    return release


def update_release(
    db_session: Session,
    release_id: UUID,
    updates: dict[str, Any],
) -> Release:
    """Apply a partial update. Only keys present in `updates` are written.

    Raises:
        EmptyUpdateError: If `updates` has no updatable field
        NotFoundError: If the release does not exist
    """
    fields = {
        key: value for key, value in updates.items() if key in UPDATABLE_RELEASE_FIELDS
    }
    if not fields:
        raise EmptyUpdateError("No fields to update")

    release = get_release_or_raise(db_session, release_id)
    for key, value in fields.items():
        setattr(release, key, value)

    try:
        db_session.commit()
        db_session.refresh(release)
    except SQLAlchemyError as e:
        raise _storage_failure(db_session, "update release", e) from e

    logger.debug(f"Updated release {release_id}: {sorted(fields)}")
    return release


def normalize_steps_completed(stored: object, step_count: int) -> list[bool]:
    """Coerce a stored step list into one that can be indexed up to step_count."""
    if not isinstance(stored, list):
        return [False] * step_count

    steps = [bool(completed) for completed in stored]
    if len(steps) < step_count:
        steps.extend([False] * (step_count - len(steps)))
    return steps


def toggle_release_step(
    db_session: Session,
    release_id: UUID,
    step_index: int,
    step_count: int,
) -> Release:
    """Flip a single checklist step and persist the full step list.

    The row is read with FOR UPDATE so concurrent toggles on the same release
    are serialized where the backend supports row locks. The caller is
    responsible for checking 0 <= step_index < step_count.
    """
    stmt = select(Release).where(Release.id == release_id).with_for_update()
    try:
        release = db_session.scalars(stmt).one_or_none()
    except SQLAlchemyError as e:
        raise _storage_failure(db_session, "fetch release", e) from e

    if release is None:
        raise NotFoundError(release_id)

    steps_completed = normalize_steps_completed(release.steps_completed, step_count)
    steps_completed[step_index] = not steps_completed[step_index]
    # Assign a new list, in-place mutation of a JSON column is not tracked
    release.steps_completed = steps_completed

    try:
        db_session.commit()
        db_session.refresh(release)
    except SQLAlchemyError as e:
        raise _storage_failure(db_session, "toggle release step", e) from e

    logger.debug(
        f"Toggled step {step_index} of release {release_id} "
        f"to {steps_completed[step_index]}"
    )
    return release


def delete_release(db_session: Session, release_id: UUID) -> UUID:
    release = get_release_or_raise(db_session, release_id)

    db_session.delete(release)
    try:
        db_session.commit()
    except SQLAlchemyError as e:
        raise _storage_failure(db_session, "delete release", e) from e

    logger.info(f"Deleted release {release_id}")
    return release_id
