"""Core document logic for stepdoc.

This package contains the document operations:
- commands: pure create/update/delete/copy commands over Document snapshots
- reorder: move resolution within and across containers
- store: stateful facade reporting outcomes as StoreResult
"""

from .commands import (
    add_step,
    build_step,
    copy_step,
    create_group,
    delete_group,
    delete_step,
    set_description,
    set_title,
    update_group,
    update_step,
)
from .reorder import MoveResult, MoveStatus, move_group, move_step, move_step_to_group
from .store import DocumentStore, StoreResult, StoreStatus

__all__ = [
    "DocumentStore",
    "MoveResult",
    "MoveStatus",
    "StoreResult",
    "StoreStatus",
    "add_step",
    "build_step",
    "copy_step",
    "create_group",
    "delete_group",
    "delete_step",
    "move_group",
    "move_step",
    "move_step_to_group",
    "set_description",
    "set_title",
    "update_group",
    "update_step",
]
