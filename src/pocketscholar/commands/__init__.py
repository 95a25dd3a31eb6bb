# src/pocketscholar/commands/__init__.py
"""UI-agnostic command layer for PocketScholar.

Command functions return result dataclasses instead of printing or
raising, so any front end can render them.

Usage:
    from pocketscholar.commands import ingest, query, status

    result = ingest.ingest("./papers", on_progress=my_callback)
    result = query.query("What sample size was used?")
    result = status.status()
"""

from pocketscholar.commands import config_cmd, delete, ingest, query, status
from pocketscholar.commands import list as list_cmd
from pocketscholar.commands.base import (
    CommandResult,
    CommandStage,
    ConfigResult,
    ConfirmCallback,
    ConfirmRequest,
    DeleteResult,
    DocumentInfo,
    FileIngestResult,
    IngestReport,
    ListResult,
    PassageResult,
    ProgressCallback,
    ProgressUpdate,
    QueryResult,
    SettingInfo,
    SourceResult,
    StatusResult,
)

__all__ = [
    # Base types
    "CommandStage",
    "ProgressUpdate",
    "ProgressCallback",
    "ConfirmRequest",
    "ConfirmCallback",
    "CommandResult",
    # Result types
    "IngestReport",
    "FileIngestResult",
    "QueryResult",
    "SourceResult",
    "PassageResult",
    "StatusResult",
    "DocumentInfo",
    "ListResult",
    "DeleteResult",
    "ConfigResult",
    "SettingInfo",
    # Command modules
    "ingest",
    "query",
    "status",
    "list_cmd",
    "delete",
    "config_cmd",
]
