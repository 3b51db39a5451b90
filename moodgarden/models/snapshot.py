"""GardenSnapshot data model."""

from typing import Literal

from pydantic import BaseModel, Field

from moodgarden.models.entry import MoodEntry

# Bump together with a migration in moodgarden.db.migrations.
SCHEMA_VERSION = 1

TabName = Literal["garden", "stats", "history"]


class GardenSnapshot(BaseModel):
    """The full persisted state of a garden, written as one unit."""

    schema_version: int = Field(
        default=SCHEMA_VERSION, alias="schemaVersion", description="Snapshot schema version"
    )
    entries: list[MoodEntry] = Field(default_factory=list, description="Entries, newest first")
    active_tab: TabName = Field(default="garden", alias="activeTab", description="Active view")
    is_adding_entry: bool = Field(
        default=False, alias="isAddingEntry", description="Whether the planting dialog is open"
    )
    is_chat_open: bool = Field(
        default=False, alias="isChatOpen", description="Whether the guardian chat is open"
    )

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}
