# src/drive2blob/storage/dto.py
from datetime import date
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, computed_field
from typing import Literal, Optional

from ..exceptions import MigrationError
from ..utils import format_size


class ProviderKind(str, Enum):
    HIERARCHICAL = "hierarchical"
    FLAT = "flat"


class ObjectDescriptor(BaseModel):
    """
    A standardized Data Transfer Object for object metadata to abstract away
    provider-specific file representations. Never carries the object's bytes.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    size_bytes: int = Field(0, ge=0)
    kind: Optional[str] = None
    created_at: Optional[date] = None
    provider_object_id: Optional[str] = None

    @computed_field
    @property
    def human_size(self) -> str:
        return format_size(self.size_bytes)

    @property
    def is_transferable(self) -> bool:
        # Folders, shortcuts and native Google documents report no size.
        return self.size_bytes > 0 and bool(self.provider_object_id)


class TransferRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source_object_id: Optional[str] = Field(None, alias="fileId")
    target_name: Optional[str] = Field(None, alias="fileName")


TransferStage = Literal["validation", "bootstrap", "download", "upload"]


class TransferOutcome(BaseModel):
    """Tagged result of one transfer: either success or error, never partial."""

    status: Literal["success", "error"]
    message: str
    kind: Optional[str] = None
    detail: Optional[str] = None
    stage: Optional[TransferStage] = None
    size_bytes: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def success(cls, target_name: str, size_bytes: int) -> "TransferOutcome":
        return cls(
            status="success",
            message=f"File {target_name} migrated successfully.",
            size_bytes=size_bytes,
        )

    @classmethod
    def failure(
        cls, target_name: str, error: MigrationError, stage: TransferStage
    ) -> "TransferOutcome":
        return cls(
            status="error",
            message=f"Failed to migrate {target_name or 'file'} ({stage}).",
            kind=error.kind,
            detail=str(error),
            stage=stage,
        )
