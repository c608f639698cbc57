"""Entities that own a transform and a set of components kept in a registry."""

from __future__ import annotations

from itertools import count
from typing import Any, TypeVar

from noukit.transform import Transform

T = TypeVar("T")


class Registry:
    """Stores components per entity, one component of each type per entity."""

    def __init__(self) -> None:
        self._ids = count()
        self._components: dict[int, dict[type, Any]] = {}

    def create(self) -> int:
        """Create a new entity and return its id."""
        entity_id = next(self._ids)
        self._components[entity_id] = {}
        return entity_id

    def valid(self, entity_id: int) -> bool:
        return entity_id in self._components

    def _slots(self, entity_id: int) -> dict[type, Any]:
        try:
            return self._components[entity_id]
        except KeyError:
            raise KeyError(f"unknown entity {entity_id}") from None

    def destroy(self, entity_id: int) -> None:
        """Destroy an entity together with all its components."""
        self._slots(entity_id)
        del self._components[entity_id]

    def emplace(self, entity_id: int, component: T) -> T:
        """Attach ``component`` to the entity, keyed by its type."""
        slots = self._slots(entity_id)
        kind = type(component)
        if kind in slots:
            raise ValueError(f"entity {entity_id} already has a {kind.__name__}")
        slots[kind] = component
        return component

    def get(self, entity_id: int, component_type: type[T]) -> T:
        """Return the entity's component of ``component_type``."""
        slots = self._slots(entity_id)
        try:
            return slots[component_type]
        except KeyError:
            raise KeyError(
                f"entity {entity_id} has no {component_type.__name__}"
            ) from None

    def remove(self, entity_id: int, component_type: type) -> None:
        """Detach the entity's component of ``component_type``."""
        slots = self._slots(entity_id)
        try:
            del slots[component_type]
        except KeyError:
            raise KeyError(
                f"entity {entity_id} has no {component_type.__name__}"
            ) from None

    def __len__(self) -> int:
        return len(self._components)


_default_registry = Registry()


class Entity:
    """An object in the scene: its own transform plus registry components."""

    def __init__(self, registry: Registry | None = None) -> None:
        self.registry = registry if registry is not None else _default_registry
        self.transform = Transform()
        self.id: int | None = self.registry.create()

    def _require_id(self) -> int:
        if self.id is None:
            raise RuntimeError("entity has been destroyed")
        return self.id

    def add(self, component_type: type[T], *args, **kwargs) -> T:
        """Build a component from the arguments and attach it."""
        component = component_type(*args, **kwargs)
        return self.registry.emplace(self._require_id(), component)

    def get(self, component_type: type[T]) -> T:
        return self.registry.get(self._require_id(), component_type)

    def remove(self, component_type: type) -> None:
        self.registry.remove(self._require_id(), component_type)

    def destroy(self) -> None:
        """Remove the entity from its registry and detach its transform."""
        if self.id is not None:
            self.registry.destroy(self.id)
            self.id = None
        self.transform.set_parent(None)

    def __enter__(self) -> Entity:
        return self

    def __exit__(self, *exc_info) -> None:
        self.destroy()