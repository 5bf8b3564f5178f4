"""
Backup export document.
"""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from .schema import NpcRecord, PlaceRecord, to_record

if TYPE_CHECKING:
    from .repository import Repository

EXPORT_COMMENT = (
    "This document is exported from initiative.sh. Please note that this format is currently "
    "undocumented and no guarantees of forward compatibility are provided, although a "
    "reasonable effort will be made to ensure that older backups can be safely imported."
)


class KeyValueExport(BaseModel):
    time: str | None = None


class ExportData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    comment: str = Field(default=EXPORT_COMMENT, alias="_")
    things: list[NpcRecord | PlaceRecord] = Field(default_factory=list)
    key_value: KeyValueExport = Field(default_factory=KeyValueExport, alias="keyValue")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


def build_export(repository: "Repository") -> ExportData:
    """Snapshot the journal and clock of a repository."""
    return ExportData(
        things=[to_record(thing) for thing in repository.journal()],
        key_value=KeyValueExport(time=repository.get_time().display_short()),
    )
