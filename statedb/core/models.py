"""
Data model for StateDB.

A state document is partitioned into a fixed set of categories. Each
category maps entity IDs to a StorageObject, the bag of arbitrary JSON
values owned by that entity:

    {
      "channels": {
        "channel-1": {"data": {"mode": "strict"}}
      }
    }

Empty mappings are omitted when the document is serialized, so an empty
store is written as `{}`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, JsonValue, field_validator


class Category(str, Enum):
    """The fixed top-level partitions of a state document."""

    CONFIGS = "configs"
    CHANNELS = "channels"
    MESSAGES = "messages"
    SERVERS = "servers"
    USERS = "users"

    @classmethod
    def parse(cls, value: Category | str) -> Category:
        """Resolve a Category from an enum member or its name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            if value in ("extra", "extras"):
                return cls.CONFIGS
            raise ValueError(
                f"Unknown category: {value!r} "
                f"(expected one of {[c.value for c in cls]})"
            ) from None


class StorageObject(BaseModel):
    """The key-value bag owned by one entity within one category."""

    data: dict[str, JsonValue] = Field(default_factory=dict, description="Entity data")

    model_config = {"extra": "ignore"}

    @field_validator("data", mode="before")
    @classmethod
    def _null_data(cls, v: Any) -> Any:
        return {} if v is None else v

    def get(self, key: str) -> JsonValue:
        """Return the value for key; raises KeyError when absent."""
        return self.data[key]

    def set(self, key: str, value: JsonValue) -> None:
        self.data[key] = value

    def delete(self, key: str) -> bool:
        """Remove key, returning whether it was present."""
        return self.data.pop(key, _MISSING) is not _MISSING

    def has(self, key: str) -> bool:
        return key in self.data


_MISSING = object()


class StateDocument(BaseModel):
    """
    The whole persisted state.

    Unknown top-level keys are ignored and `null` categories load as
    empty mappings. The configs category also accepts the legacy
    `extra`/`extras` keys on input.
    """

    configs: dict[str, StorageObject] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("configs", "extra", "extras"),
    )
    channels: dict[str, StorageObject] = Field(default_factory=dict)
    messages: dict[str, StorageObject] = Field(default_factory=dict)
    servers: dict[str, StorageObject] = Field(default_factory=dict)
    users: dict[str, StorageObject] = Field(default_factory=dict)

    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator("configs", "channels", "messages", "servers", "users", mode="before")
    @classmethod
    def _null_category(cls, v: Any) -> Any:
        if v is None:
            return {}
        if isinstance(v, dict):
            return {
                entity_id: ({} if bag is None else bag)
                for entity_id, bag in v.items()
            }
        return v

    def category(self, category: Category) -> dict[str, StorageObject]:
        """Return the mapping for a category."""
        return getattr(self, category.value)

    def bag(
        self,
        category: Category,
        entity_id: str,
        create: bool = False,
    ) -> Optional[StorageObject]:
        """
        Return the StorageObject for an entity.

        Args:
            category: Category to look in
            entity_id: Entity identifier
            create: Create an empty bag when the entity is missing

        Returns:
            The entity's bag, or None when missing and create is False
        """
        entities = self.category(category)
        bag = entities.get(entity_id)
        if bag is None and create:
            bag = StorageObject()
            entities[entity_id] = bag
        return bag

    def clear(self) -> None:
        """Replace every category with a fresh empty mapping."""
        for category in Category:
            setattr(self, category.value, {})

    def to_dict(self) -> dict[str, Any]:
        """Plain dict form with empty mappings omitted."""
        document: dict[str, Any] = {}
        for category in Category:
            entities = self.category(category)
            if not entities:
                continue
            document[category.value] = {
                entity_id: ({"data": dict(bag.data)} if bag.data else {})
                for entity_id, bag in entities.items()
            }
        return document
