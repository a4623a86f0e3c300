"""Allow ``python -m cluster_log <log>``."""
from __future__ import annotations

from cluster_log.cli.app import run_cli

raise SystemExit(run_cli())
