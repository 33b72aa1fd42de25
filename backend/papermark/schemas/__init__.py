from papermark.schemas.auth import TokenData
from papermark.schemas.folder import (
    ChildFolder,
    CreatedFolder,
    DataroomDocumentRef,
    DataroomItem,
    DocumentBrief,
    FolderCounts,
    FolderCreate,
    FolderResponse,
    FolderWithChildren,
    FolderWithCounts,
    FolderWithDocuments,
)

__all__ = [
    "TokenData",
    "FolderCreate",
    "FolderResponse",
    "FolderCounts",
    "FolderWithCounts",
    "FolderWithDocuments",
    "FolderWithChildren",
    "ChildFolder",
    "CreatedFolder",
    "DocumentBrief",
    "DataroomDocumentRef",
    "DataroomItem",
]
