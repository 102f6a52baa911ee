import os

__version__ = os.environ.get("RELEASE_TRACKER_VERSION", "") or "Development"
