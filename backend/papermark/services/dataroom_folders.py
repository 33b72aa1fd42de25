"""Listing and creation of folders inside a dataroom."""

import asyncio
import logging
from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import contains_eager

from papermark.config import settings
from papermark.models import DataroomDocument, DataroomFolder, Document
from papermark.schemas.folder import (
    ChildFolder,
    CreatedFolder,
    DataroomDocumentRef,
    DataroomItem,
    FolderResponse,
    FolderWithChildren,
    FolderWithCounts,
    FolderWithDocuments,
)
from papermark.services.folder_counts import get_recursive_folder_counts
from papermark.services.slug import join_path, slugify

logger = logging.getLogger(__name__)

ROOT_PATH = "/"
MAX_NAME_RETRIES = 50

FOLDER_ORDER = (DataroomFolder.order_index.asc().nulls_last(), DataroomFolder.name.asc())
DOCUMENT_ORDER = (DataroomDocument.order_index.asc().nulls_last(), Document.name.asc())


class FolderNameExhaustedError(Exception):
    """Every disambiguated variant of the folder name is already taken."""


class InvalidFolderNameError(ValueError):
    pass


def _folder_fields(folder: DataroomFolder) -> dict:
    return FolderResponse.model_validate(folder).model_dump()


async def _get_folders(db: AsyncSession, dataroom_id: str, roots_only: bool = False) -> list[DataroomFolder]:
    q = select(DataroomFolder).where(DataroomFolder.dataroom_id == dataroom_id)
    if roots_only:
        q = q.where(DataroomFolder.parent_id.is_(None))
    result = await db.execute(q.order_by(*FOLDER_ORDER))
    return list(result.scalars().all())


async def _get_document_refs(db: AsyncSession, dataroom_id: str) -> dict[str | None, list[DataroomDocumentRef]]:
    """Document links of a dataroom grouped by folder id (None for the root)."""
    q = (
        select(DataroomDocument)
        .join(DataroomDocument.document)
        .options(contains_eager(DataroomDocument.document))
        .where(DataroomDocument.dataroom_id == dataroom_id)
    )
    result = await db.execute(q.order_by(*DOCUMENT_ORDER))

    refs_by_folder: dict[str | None, list[DataroomDocumentRef]] = defaultdict(list)
    for link in result.scalars().all():
        refs_by_folder[link.folder_id].append(DataroomDocumentRef.model_validate(link))
    return refs_by_folder


async def list_root_folders(
    db: AsyncSession,
    session_factory: async_sessionmaker[AsyncSession],
    dataroom_id: str,
) -> list[FolderWithCounts]:
    """Top-level folders, each with document/folder counts for its whole subtree."""
    roots = [_folder_fields(f) for f in await _get_folders(db, dataroom_id, roots_only=True)]
    # hand the request connection back so the fan-out below never waits on a
    # pool slot this request is itself holding
    await db.close()

    limit = asyncio.Semaphore(settings.folder_count_concurrency)

    async def _count(folder_id: str):
        # one session per task, an AsyncSession cannot be shared across gather()
        async with limit, session_factory() as session:
            return await get_recursive_folder_counts(session, folder_id)

    counts = await asyncio.gather(*(_count(f["id"]) for f in roots))
    return [FolderWithCounts(**fields, counts=c) for fields, c in zip(roots, counts)]


async def list_folders_with_root_documents(db: AsyncSession, dataroom_id: str) -> list[DataroomItem]:
    """Root-level document links followed by every folder with its own links."""
    folders = await _get_folders(db, dataroom_id)
    refs_by_folder = await _get_document_refs(db, dataroom_id)

    items: list[DataroomItem] = list(refs_by_folder.get(None, []))
    for f in folders:
        items.append(FolderWithDocuments(**_folder_fields(f), documents=refs_by_folder.get(f.id, [])))
    return items


async def list_folders(db: AsyncSession, dataroom_id: str) -> list[FolderWithChildren]:
    """Every folder with its documents and one level of child folders."""
    folders = await _get_folders(db, dataroom_id)
    refs_by_folder = await _get_document_refs(db, dataroom_id)

    children_by_parent: dict[str, list[ChildFolder]] = defaultdict(list)
    for f in folders:
        if f.parent_id is not None:
            children_by_parent[f.parent_id].append(
                ChildFolder(**_folder_fields(f), documents=refs_by_folder.get(f.id, []))
            )

    return [
        FolderWithChildren(
            **_folder_fields(f),
            documents=refs_by_folder.get(f.id, []),
            child_folders=children_by_parent.get(f.id, []),
        )
        for f in folders
    ]


async def _path_exists(db: AsyncSession, dataroom_id: str, path: str) -> bool:
    result = await db.execute(
        select(DataroomFolder.id).where(
            DataroomFolder.dataroom_id == dataroom_id,
            DataroomFolder.path == path,
        )
    )
    return result.scalar_one_or_none() is not None


async def create_folder(
    db: AsyncSession, dataroom_id: str, name: str, parent_path: str | None = None
) -> CreatedFolder:
    """Create a folder under ``parent_path``, renaming to "name (N)" on path collisions.

    A missing parent folder is not an error, the folder is then parented to the
    dataroom root. Collisions are detected both by lookup and by the
    (dataroom_id, path) unique constraint, so a concurrent insert of the same
    path only costs one retry.
    """
    if not slugify(name):
        raise InvalidFolderNameError("Folder name must contain letters or digits")

    parent_folder_path = f"/{parent_path}" if parent_path else ROOT_PATH
    result = await db.execute(
        select(DataroomFolder.id).where(
            DataroomFolder.dataroom_id == dataroom_id,
            DataroomFolder.path == parent_folder_path,
        )
    )
    parent_id = result.scalar_one_or_none()

    folder_name = name
    counter = 0
    while True:
        child_path = join_path(parent_path, slugify(folder_name))
        if not await _path_exists(db, dataroom_id, child_path):
            folder = DataroomFolder(
                name=folder_name,
                path=child_path,
                parent_id=parent_id,
                dataroom_id=dataroom_id,
            )
            db.add(folder)
            try:
                await db.commit()
                break
            except IntegrityError:
                await db.rollback()
                if not await _path_exists(db, dataroom_id, child_path):
                    # not a path collision, e.g. the dataroom was deleted meanwhile
                    raise
                logger.info(
                    "Folder path taken concurrently",
                    extra={"dataroom_id": dataroom_id, "path": child_path},
                )

        if counter >= MAX_NAME_RETRIES:
            raise FolderNameExhaustedError(name)
        counter += 1
        folder_name = f"{name} ({counter})"

    return CreatedFolder(
        **_folder_fields(folder),
        documents=[],
        child_folders=[],
        parent_folder_path=parent_folder_path,
    )
