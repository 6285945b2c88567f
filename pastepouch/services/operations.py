"""Operation dispatch shared by the HTTP routes and the CLI menu."""
from __future__ import annotations

from enum import Enum
import logging
from typing import Any, Callable, Optional

from pastepouch.core.errors import UnknownOperationError
from pastepouch.domain.projector import project_rows
from pastepouch.repositories.paste_repository import PasteRepository, RowSet

logger = logging.getLogger(__name__)

Records = list[dict[str, Any]]


class Operation(str, Enum):
    SELECT_USERS = "selectUsers"
    SELECT_PASTES = "selectPastes"
    READ_PASTE = "readPaste"
    GET_PASTE_COUNT = "getPasteCount"
    GET_USER_COUNT = "getUserCount"
    CREATE_USER = "createUser"
    CREATE_PASTE = "createPaste"
    DELETE_PASTE = "deletePaste"
    UPDATE_PASTE = "updatePaste"

    @property
    def is_write(self) -> bool:
        return self in _WRITES


_WRITES = frozenset(
    {Operation.CREATE_USER, Operation.CREATE_PASTE, Operation.DELETE_PASTE, Operation.UPDATE_PASTE}
)

Handler = Callable[..., Optional[RowSet]]

HANDLERS: dict[Operation, Handler] = {
    Operation.SELECT_USERS: lambda repo: repo.select_users(),
    Operation.SELECT_PASTES: lambda repo: repo.select_pastes(),
    Operation.READ_PASTE: lambda repo, paste_id: repo.read_paste(paste_id),
    Operation.GET_PASTE_COUNT: lambda repo: repo.get_paste_count(),
    Operation.GET_USER_COUNT: lambda repo: repo.get_user_count(),
    Operation.CREATE_USER: lambda repo, name, email: repo.create_user(name, email),
    Operation.CREATE_PASTE: lambda repo, userid, content: repo.create_paste(userid, content),
    Operation.DELETE_PASTE: lambda repo, paste_id: repo.delete_paste(paste_id),
    Operation.UPDATE_PASTE: lambda repo, paste_id, content: repo.update_paste(paste_id, content),
}

_missing = set(Operation) - set(HANDLERS)
if _missing:
    raise RuntimeError(f"operations without a handler: {sorted(op.value for op in _missing)}")


class PasteService:
    """Runs one operation against the repository and projects its rows."""

    def __init__(self, repository: PasteRepository) -> None:
        self.repository = repository

    def execute(self, operation: Operation, **params: Any) -> Optional[Records]:
        """
        Run ``operation`` with keyword ``params``.

        Returns the projected records, ``[]`` for deletes/updates and ``None``
        for inserts. Storage and projection errors propagate to the caller.
        """
        handler = HANDLERS.get(operation)
        if handler is None:
            raise UnknownOperationError(f"Received a nonexistent operation: {operation!r}")
        logger.debug("Executing %s %s", getattr(operation, "value", operation), params)
        rowset = handler(self.repository, **params)
        if rowset is None:
            return None
        return project_rows(rowset.columns, rowset.rows)
