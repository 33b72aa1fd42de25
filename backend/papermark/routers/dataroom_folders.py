import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from papermark.database import get_db, get_session_factory
from papermark.dependencies import get_team_dataroom
from papermark.middleware.rate_limit import folders_limiter
from papermark.models import Dataroom
from papermark.schemas.folder import CreatedFolder, FolderCreate
from papermark.services import dataroom_folders

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/teams/{team_id}/datarooms/{dataroom_id}/folders", tags=["dataroom folders"])


@router.get("", response_model=None)
@folders_limiter
async def get_folders(
    request: Request,
    root: bool = False,
    include_documents: bool = False,
    dataroom: Dataroom = Depends(get_team_dataroom),
    db: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """List folders of a dataroom.

    ``root=true``: top-level folders with subtree counts.
    ``include_documents=true``: root document links then every folder, tagged by ``kind``.
    Otherwise: every folder with its documents and direct child folders.
    """
    dataroom_id = dataroom.id
    try:
        if root:
            return await dataroom_folders.list_root_folders(db, session_factory, dataroom_id)
        if include_documents:
            return await dataroom_folders.list_folders_with_root_documents(db, dataroom_id)
        return await dataroom_folders.list_folders(db, dataroom_id)
    except SQLAlchemyError:
        logger.exception("Request error", extra={"dataroom_id": dataroom_id})
        return JSONResponse(status_code=500, content={"error": "Error fetching folders"})


# The body is read inside the handler so the team guard runs before any
# payload checks.
@router.post(
    "",
    response_model=CreatedFolder,
    status_code=201,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": FolderCreate.model_json_schema()}},
        }
    },
)
@folders_limiter
async def create_folder(
    request: Request,
    dataroom: Dataroom = Depends(get_team_dataroom),
    db: AsyncSession = Depends(get_db),
):
    dataroom_id = dataroom.id
    try:
        payload = await request.json()
    except ValueError:
        return JSONResponse(
            status_code=400,
            content={"error": "Failed to create folder", "message": "Request body must be valid JSON"},
        )
    try:
        data = FolderCreate.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    try:
        return await dataroom_folders.create_folder(db, dataroom_id, data.name, data.path)
    except dataroom_folders.FolderNameExhaustedError:
        return JSONResponse(
            status_code=400,
            content={"error": "Failed to create folder", "message": "Too many folders with similar names"},
        )
    except dataroom_folders.InvalidFolderNameError as e:
        return JSONResponse(status_code=400, content={"error": "Failed to create folder", "message": str(e)})
    except SQLAlchemyError:
        logger.exception("Request error", extra={"dataroom_id": dataroom_id})
        return JSONResponse(status_code=500, content={"error": "Error creating folder"})


@router.api_route(
    "", methods=["PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "TRACE"], include_in_schema=False
)
async def folders_method_not_allowed(request: Request) -> None:
    raise HTTPException(
        status_code=405,
        detail=f"Method {request.method} Not Allowed",
        headers={"Allow": "GET, POST"},
    )
