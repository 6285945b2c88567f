"""Interactive numbered menu over stdin/stdout."""
from __future__ import annotations

import json
import logging
import sys
from typing import Any, Optional, TextIO

from pastepouch.core.errors import PastePouchError
from pastepouch.services.operations import Operation, PasteService

logger = logging.getLogger(__name__)

MENU = """
(1) Display all users entries
(2) Display all pastes entries
(3) Create a new user
(4) Create a new paste
(5) Read a paste
(6) Delete a paste
(7) Update a paste
(8) Get total paste count
(9) Get total user count
(0) Quit
"""


class EndOfInput(Exception):
    """stdin was closed while the menu was waiting for a value."""


class PasteMenu:
    """Blocking read-evaluate loop; each choice runs one operation."""

    def __init__(self, service: PasteService, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self.service = service
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self._actions = {
            1: self._select_users,
            2: self._select_pastes,
            3: self._create_user,
            4: self._create_paste,
            5: self._read_paste,
            6: self._delete_paste,
            7: self._update_paste,
            8: self._get_paste_count,
            9: self._get_user_count,
        }

    # -------------------------- io helpers ---------------------
    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _read_line(self, prompt: str = "") -> str:
        if prompt:
            self._write(prompt)
        line = self.stdin.readline()
        if not line:
            raise EndOfInput()
        return line.strip()

    def _read_int(self, prompt: str) -> Optional[int]:
        raw = self._read_line(prompt)
        try:
            return int(raw)
        except ValueError:
            self._write(f"Not a number: {raw!r}\n")
            return None

    def _print_records(self, records: Optional[list[dict[str, Any]]]) -> None:
        self._write(json.dumps(records if records is not None else [], separators=(",", ":")) + "\n")

    # -------------------------- loop ---------------------------
    def run(self) -> None:
        while True:
            self._write(MENU)
            try:
                choice = self._read_line()
            except EndOfInput:
                return
            try:
                value = int(choice)
            except ValueError:
                continue
            if value == 0:
                return
            action = self._actions.get(value)
            if action is None:
                continue
            try:
                action()
            except EndOfInput:
                return
            except PastePouchError as exc:
                logger.warning("CLI operation failed: %s", exc)
                self._write(f"error: {exc}\n")

    # -------------------------- actions ------------------------
    def _select_users(self) -> None:
        self._print_records(self.service.execute(Operation.SELECT_USERS))

    def _select_pastes(self) -> None:
        self._print_records(self.service.execute(Operation.SELECT_PASTES))

    def _create_user(self) -> None:
        name = self._read_line("createUser> Enter name: ")
        email = self._read_line("createUser> Enter email: ")
        self.service.execute(Operation.CREATE_USER, name=name, email=email)
        self._write("createUser> OK\n")

    def _create_paste(self) -> None:
        userid = self._read_int("createPaste> Enter userid: ")
        if userid is None:
            return
        content = self._read_line("createPaste> Enter content: ")
        self._write(f"createPaste> Your content was: {content}\n")
        self.service.execute(Operation.CREATE_PASTE, userid=userid, content=content)
        self._write("createPaste> OK\n")

    def _read_paste(self) -> None:
        paste_id = self._read_int("readPaste> Enter pasteid: ")
        if paste_id is None:
            return
        self._print_records(self.service.execute(Operation.READ_PASTE, paste_id=paste_id))

    def _delete_paste(self) -> None:
        paste_id = self._read_int("deletePaste> Enter pasteid: ")
        if paste_id is None:
            return
        self._print_records(self.service.execute(Operation.DELETE_PASTE, paste_id=paste_id))

    def _update_paste(self) -> None:
        paste_id = self._read_int("updatePaste> Enter pasteid: ")
        if paste_id is None:
            return
        content = self._read_line("updatePaste> Enter content: ")
        self._write(f"updatePaste> Your content was: {content}\n")
        self._print_records(self.service.execute(Operation.UPDATE_PASTE, paste_id=paste_id, content=content))

    def _get_paste_count(self) -> None:
        self._print_records(self.service.execute(Operation.GET_PASTE_COUNT))

    def _get_user_count(self) -> None:
        self._print_records(self.service.execute(Operation.GET_USER_COUNT))
