"""Figure record and its public search projection."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class FigureRecord(BaseModel):
    """A collectible figure as kept by the record store.

    Records are created and updated by the CRUD layer; the search subsystem
    only reads them. Unknown keys from the store are preserved in
    ``model_extra`` and never reach a search result.

    Document-store exports are accepted as-is: ``_id`` stands in for ``id``
    and camelCase keys (``userId``, ``boxNumber``, ...) for their snake_case
    fields.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("id", "_id"), description="Record identifier")
    manufacturer: str = Field(description="Figure manufacturer (e.g. 'Good Smile Company')")
    name: str = Field(description="Figure name")
    scale: str = Field(default="", description="Figure scale (e.g. '1/7')")
    mfc_link: str = Field(
        default="",
        validation_alias=AliasChoices("mfc_link", "mfcLink"),
        description="Link to the external reference entry",
    )
    location: str = Field(default="", description="Where the figure is stored")
    box_number: str = Field(
        default="",
        validation_alias=AliasChoices("box_number", "boxNumber"),
        description="Storage box identifier",
    )
    image_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("image_url", "imageUrl"),
        description="Image reference",
    )
    user_id: str = Field(validation_alias=AliasChoices("user_id", "userId"), description="Owning user identifier")
    created_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("created_at", "createdAt"),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        description="Last update timestamp",
    )

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _object_id_to_str(cls, v: object) -> object:
        # Extended JSON exports wrap object ids as {"$oid": "..."}.
        if isinstance(v, dict) and "$oid" in v:
            return v["$oid"]
        return v


class FigureResult(BaseModel):
    """Public projection of a figure returned by every search operation."""

    id: str
    manufacturer: str
    name: str
    scale: str = ""
    mfc_link: str = ""
    location: str = ""
    box_number: str = ""
    image_url: str | None = None
    user_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
