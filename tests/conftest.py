"""Root conftest — shared test configuration."""

import os

# Tests must not pick up a developer's .env policy overrides
os.environ.setdefault("POLICY_MODE", "extended")
os.environ.setdefault("LOG_FORMAT", "text")
