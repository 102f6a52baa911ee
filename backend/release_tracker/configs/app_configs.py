import json
import os

from release_tracker.configs.constants import DEFAULT_RELEASE_STEPS

#####
# App Configs
#####
APP_HOST = "0.0.0.0"
APP_PORT = int(os.environ.get("APP_PORT") or 8080)
# Routers are mounted under this prefix, e.g. /api/releases
API_PREFIX = os.environ.get("API_PREFIX", "/api").rstrip("/")

# Comma separated list of origins allowed to call the API from a browser
CORS_ALLOWED_ORIGIN = [
    origin.strip()
    for origin in (os.environ.get("CORS_ALLOWED_ORIGIN") or "*").split(",")
    if origin.strip()
]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "info")


#####
# Postgres Configs
#####
POSTGRES_USER = os.environ.get("POSTGRES_USER") or "postgres"
POSTGRES_PASSWORD = os.environ.get("POSTGRES_PASSWORD") or "password"
POSTGRES_HOST = os.environ.get("POSTGRES_HOST") or "localhost"
POSTGRES_PORT = os.environ.get("POSTGRES_PORT") or "5432"
POSTGRES_DB = os.environ.get("POSTGRES_DB") or "release_tracker"

# Takes precedence over the individual POSTGRES_* settings when set
DATABASE_URL = os.environ.get("DATABASE_URL") or None

POSTGRES_POOL_SIZE = int(os.environ.get("POSTGRES_POOL_SIZE") or 10)
POSTGRES_POOL_MAX_OVERFLOW = int(os.environ.get("POSTGRES_POOL_MAX_OVERFLOW") or 10)
POSTGRES_POOL_PRE_PING = os.environ.get("POSTGRES_POOL_PRE_PING", "").lower() == "true"
# Seconds before an idle pooled connection is recycled
POSTGRES_POOL_RECYCLE = int(os.environ.get("POSTGRES_POOL_RECYCLE") or 1200)


#####
# Release Checklist
#####
def _load_release_steps() -> tuple[str, ...]:
    raw_steps = os.environ.get("RELEASE_CHECKLIST_STEPS")
    if not raw_steps:
        return DEFAULT_RELEASE_STEPS

    steps = json.loads(raw_steps)
    if (
        not isinstance(steps, list)
        or not steps
        or not all(isinstance(step, str) and step.strip() for step in steps)
    ):
        raise ValueError(
            "RELEASE_CHECKLIST_STEPS must be a JSON list of non-empty strings"
        )
    return tuple(step.strip() for step in steps)


# Changing this on a populated database does not migrate existing rows,
# stored step lists are read positionally against whatever is configured here
RELEASE_CHECKLIST_STEPS = _load_release_steps()
