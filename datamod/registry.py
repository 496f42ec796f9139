"""
Registry of DataMod classes by name.

Lets step code refer to another entity by its class name, e.g.
``sub_select("Status", "id", {"name": "enabled"})``, without importing it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from datamod.core.errors import UnknownEntityError

if TYPE_CHECKING:
    from datamod.provider import BaseProvider

_entities: dict[str, type[BaseProvider]] = {}


def register_entity(entity: type[BaseProvider]) -> None:
    """Register ``entity`` under its class name; a redefinition replaces the old class."""
    _entities[entity.__name__] = entity


def unregister_entity(name: str) -> None:
    _entities.pop(name, None)


def get_entity(name: str) -> type[BaseProvider]:
    """
    Look up a registered DataMod class.

    Raises:
        UnknownEntityError: If no DataMod with that name was defined
    """
    try:
        return _entities[name]
    except KeyError:
        raise UnknownEntityError(
            f"No DataMod registered as '{name}'",
            details={"registered": sorted(_entities)},
        ) from None


def find_entity(name: str) -> type[BaseProvider] | None:
    return _entities.get(name)


def registered_entities() -> list[str]:
    return sorted(_entities)
