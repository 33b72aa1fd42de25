from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator


class FolderCreate(BaseModel):
    name: str
    path: str | None = None  # parent folder path without the leading "/"

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Folder name must not be empty")
        return v

    @field_validator("path")
    @classmethod
    def strip_slashes(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip("/") or None


class DocumentBrief(BaseModel):
    id: str
    name: str
    type: str | None = None

    model_config = {"from_attributes": True}


class DataroomDocumentRef(BaseModel):
    kind: Literal["document"] = "document"
    id: str
    folder_id: str | None
    document: DocumentBrief

    model_config = {"from_attributes": True}


class FolderResponse(BaseModel):
    id: str
    name: str
    path: str
    parent_id: str | None
    dataroom_id: str
    order_index: int | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class FolderCounts(BaseModel):
    documents: int = 0
    child_folders: int = 0


class FolderWithCounts(FolderResponse):
    counts: FolderCounts


class FolderWithDocuments(FolderResponse):
    kind: Literal["folder"] = "folder"
    documents: list[DataroomDocumentRef] = []


class ChildFolder(FolderResponse):
    documents: list[DataroomDocumentRef] = []


class FolderWithChildren(FolderResponse):
    documents: list[DataroomDocumentRef] = []
    child_folders: list[ChildFolder] = []


class CreatedFolder(FolderResponse):
    documents: list[DataroomDocumentRef] = []
    child_folders: list[ChildFolder] = []
    parent_folder_path: str


DataroomItem = Annotated[DataroomDocumentRef | FolderWithDocuments, Field(discriminator="kind")]
