"""Audit logging and run manifest subsystem for percolate.

Main Components
---------------
- RunContext: High-level context manager for experiment runs
- AuditLogger: JSONL event logger
- ManifestWriter: Run manifest builder
"""

from percolate.audit.context import RunContext
from percolate.audit.helpers import generate_run_id
from percolate.audit.logger import AuditLogger
from percolate.audit.manifest import ManifestWriter

__all__ = [
    "RunContext",
    "AuditLogger",
    "ManifestWriter",
    "generate_run_id",
]
