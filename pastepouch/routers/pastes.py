from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from pastepouch.core.errors import (
    DuplicateEmailError,
    PastePouchError,
    UnknownOperationError,
)
from pastepouch.services.operations import Operation, PasteService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pastes"])

NO_ROWS = "No rows to return."


class CreateUserBody(BaseModel):
    name: str = ""
    email: str = ""


class CreatePasteBody(BaseModel):
    userid: int = 0
    content: str = ""


class UpdatePasteBody(BaseModel):
    content: str = ""


def _get_paste_service(request: Request) -> PasteService:
    svc = getattr(getattr(request.app, "state", None), "paste_service", None)
    if not svc:
        raise RuntimeError("PasteService not configured")
    return svc


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _execute(request: Request, operation: Operation, **params: Any):
    svc = _get_paste_service(request)
    try:
        records = svc.execute(operation, **params)
    except DuplicateEmailError as exc:
        return _error(409, str(exc))
    except UnknownOperationError as exc:
        logger.error("%s", exc)
        return _error(500, str(exc))
    except PastePouchError as exc:
        logger.warning("%s failed: %s", operation.value, exc)
        return _error(500, str(exc))
    if operation.is_write or records is None:
        return NO_ROWS
    return records


@router.get("/selectUsers")
def select_users(request: Request):
    return _execute(request, Operation.SELECT_USERS)


@router.get("/selectPastes")
def select_pastes(request: Request):
    return _execute(request, Operation.SELECT_PASTES)


@router.get("/readPaste/{paste_id}")
def read_paste(paste_id: int, request: Request):
    return _execute(request, Operation.READ_PASTE, paste_id=paste_id)


@router.get("/getPasteCount")
def get_paste_count(request: Request):
    return _execute(request, Operation.GET_PASTE_COUNT)


@router.get("/getUserCount")
def get_user_count(request: Request):
    return _execute(request, Operation.GET_USER_COUNT)


@router.post("/createUser")
def create_user(body: CreateUserBody, request: Request):
    return _execute(request, Operation.CREATE_USER, name=body.name, email=body.email)


@router.post("/createPaste")
def create_paste(body: CreatePasteBody, request: Request):
    return _execute(request, Operation.CREATE_PASTE, userid=body.userid, content=body.content)


@router.delete("/deletePaste/{paste_id}")
def delete_paste(paste_id: int, request: Request):
    return _execute(request, Operation.DELETE_PASTE, paste_id=paste_id)


@router.put("/updatePaste/{paste_id}")
def update_paste(paste_id: int, body: UpdatePasteBody, request: Request):
    return _execute(request, Operation.UPDATE_PASTE, paste_id=paste_id, content=body.content)
