"""Project-wide constants (control collection, reserved prefix, triggered state)."""

import os

REPLICATOR_DB: str = os.environ.get("COUCHREP_REPLICATOR_DB", "_replicator")

RESERVED_PREFIX: str = "_"  # system databases and design documents

DEFAULT_LOCAL_URL: str = "http://localhost:5984"
DEFAULT_REMOTE_URL: str = "http://remote:5984"
DEFAULT_TIMEOUT_SECONDS: int = 30

STATE_TRIGGERED: str = "triggered"
