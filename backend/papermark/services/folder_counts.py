"""Transitive document and sub-folder counts for a dataroom folder."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from papermark.models import DataroomDocument, DataroomFolder
from papermark.schemas.folder import FolderCounts


async def get_descendant_folder_ids(db: AsyncSession, folder_id: str) -> set[str]:
    result: set[str] = set()
    frontier = [folder_id]
    while frontier:
        r = await db.execute(
            select(DataroomFolder.id).where(DataroomFolder.parent_id.in_(frontier))
        )
        next_ids = list(r.scalars().all())
        frontier = [i for i in next_ids if i not in result and i != folder_id]
        result.update(frontier)
    return result


async def get_recursive_folder_counts(db: AsyncSession, folder_id: str) -> FolderCounts:
    """Documents and folders anywhere beneath ``folder_id``.

    Documents placed directly in the folder are counted; the folder itself is not.
    Always computed from current rows, nothing is cached.
    """
    descendants = await get_descendant_folder_ids(db, folder_id)
    r = await db.execute(
        select(func.count(DataroomDocument.id)).where(
            DataroomDocument.folder_id.in_([folder_id, *descendants])
        )
    )
    return FolderCounts(documents=r.scalar_one(), child_folders=len(descendants))
