"""
Pydantic records for persisted things.

The in-memory model (Npc/Place with Field attributes) is converted to these
flat records at the storage boundary; everything read back is locked.
"""

from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field, TypeAdapter

from ..world.field import Field as ThingField
from ..world.npc import Age, Gender, Npc, Species
from ..world.place import Place, PlaceType
from ..world.thing import Thing


class NpcRecord(BaseModel):
    type: Literal["npc"] = "npc"
    uuid: UUID | None = None
    name: str
    gender: Gender | None = None
    age: Age | None = None
    age_years: int | None = None
    species: Species | None = None


class PlaceRecord(BaseModel):
    type: Literal["place"] = "place"
    uuid: UUID | None = None
    name: str
    subtype: PlaceType | None = None


ThingRecord = Annotated[Union[NpcRecord, PlaceRecord], Field(discriminator="type")]

things_adapter = TypeAdapter(list[ThingRecord])


def to_record(thing: Thing) -> NpcRecord | PlaceRecord:
    if isinstance(thing, Npc):
        return NpcRecord(
            uuid=thing.uuid,
            name=str(thing.name),
            gender=thing.gender.value,
            age=thing.age.value,
            age_years=thing.age_years.value,
            species=thing.species.value,
        )
    return PlaceRecord(
        uuid=thing.uuid,
        name=str(thing.name),
        subtype=thing.subtype.value,
    )


def _locked(value) -> ThingField:
    # Missing values stay unlocked so they can still be filled in
    return ThingField(value) if value is not None else ThingField()


def from_record(record: NpcRecord | PlaceRecord) -> Thing:
    if isinstance(record, NpcRecord):
        return Npc(
            uuid=record.uuid,
            name=_locked(record.name),
            gender=_locked(record.gender),
            age=_locked(record.age),
            age_years=_locked(record.age_years),
            species=_locked(record.species),
        )
    return Place(
        uuid=record.uuid,
        name=_locked(record.name),
        subtype=_locked(record.subtype),
    )
