"""Global test fixtures."""

import os

import logfire

# Keep tests from reading a developer's config or writing to their data dir.
# This must happen at module load time, before any test module builds a Config.
os.environ.pop("ANNOS_CONFIG_FILE", None)
os.environ.pop("ANNOS_LOG_FILE", None)

logfire.configure(send_to_logfire=False, console=False)
