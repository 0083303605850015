"""
Interfaces to the collaborators that render and persist position changes.
"""

from tirelife.export.changeset import (
    ChangeSetExporter,
    JsonChangeSetExporter,
    JsonFilePositionStore,
    PositionStore,
    change_set_document,
    commit_with,
)

__all__ = [
    "ChangeSetExporter",
    "JsonChangeSetExporter",
    "JsonFilePositionStore",
    "PositionStore",
    "change_set_document",
    "commit_with",
]
