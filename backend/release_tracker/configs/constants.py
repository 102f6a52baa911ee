from enum import Enum

# Checklist shared by every release, in display order
DEFAULT_RELEASE_STEPS: tuple[str, ...] = (
    "All PRs merged",
    "CHANGELOG updated",
    "Tests passing",
    "Release created in GitHub",
    "Deployed to staging",
    "Tested in staging",
    "Deployed to production",
)

RELEASE_DELETED_MESSAGE = "Release deleted successfully"
RELEASE_NOT_FOUND_MESSAGE = "Release not found"


class ReleaseStatus(str, Enum):
    PLANNED = "planned"
    ONGOING = "ongoing"
    DONE = "done"
