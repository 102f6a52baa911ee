from release_tracker.configs.constants import ReleaseStatus


def derive_release_status(steps_completed: object) -> ReleaseStatus:
    """Summarize per-step completion flags into a single status.

    Anything that is not a list counts as no progress.
    """
    if not isinstance(steps_completed, list):
        return ReleaseStatus.PLANNED

    completed_count = sum(1 for completed in steps_completed if completed)
    total_steps = len(steps_completed)

    if completed_count == 0:
        return ReleaseStatus.PLANNED
    if completed_count == total_steps:
        return ReleaseStatus.DONE
    return ReleaseStatus.ONGOING
