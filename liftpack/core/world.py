"""World: Entity-Component-System manager.

The World is the central ECS registry that manages:
- Entity creation (integer IDs, one per signal)
- Component storage (type -> entity -> component mapping)
- Component queries (find entities with specific component combinations)
- Arena memory management (bulk release with clear())

Example:
    >>> world = World()
    >>> eid = world.spawn_signal(np.array([4, 6, 10, 12]))
    >>> tree = world.pipe(eid).to(PacketTransform("haar")).out(PacketTree)
    >>> world.clear()  # Release every tree node and buffer at once
"""

from __future__ import annotations

from typing import Any, TypeVar

import numpy as np
from pydantic import BaseModel

from liftpack.core.arena import Arena

Component = BaseModel

T = TypeVar("T", bound=Component)


class World:
    """Central ECS registry managing entities, components, and memory.

    The World owns:
    - Arena: Bump allocator for every tree node, container and buffer
    - Entity registry: Integer entity IDs
    - Component stores: Mappings from (component_type, entity_id) to component
    - Metadata: Arbitrary key-value data per entity (metrics, reports)

    Attributes:
        arena: Memory arena for tensor allocation
        metadata: Per-entity metadata dict
    """

    def __init__(self, arena_block_bytes: int = 1 << 20):
        """Create World with the given arena block size.

        Args:
            arena_block_bytes: Size of each arena block in bytes (default 1 MB)
        """
        self.arena = Arena(block_bytes=arena_block_bytes)
        self._next_eid = 0
        self._components: dict[type[Component], dict[int, Component]] = {}
        self.metadata: dict[int, dict[str, Any]] = {}

    def new_entity(self) -> int:
        """Create a new entity and return its ID."""
        eid = self._next_eid
        self._next_eid += 1
        self.metadata[eid] = {}
        return eid

    def spawn_signal(self, values: np.ndarray | list[int] | list[float]) -> int:
        """Ingest a 1-D signal into the world.

        Integer input is stored as int64, anything else as float64.

        Args:
            values: Signal values, length a power of two for packet transforms

        Returns:
            Entity ID with a Signal component attached

        Raises:
            ValueError: If the signal is not one dimensional or is empty
        """
        from liftpack.components.signal import Signal

        arr = np.asarray(values)
        if arr.ndim != 1 or arr.shape[0] == 0:
            raise ValueError(f"Expected non-empty 1-D signal, got shape {arr.shape}")
        dtype = np.int64 if np.issubdtype(arr.dtype, np.integer) else np.float64

        eid = self.new_entity()
        ref = self.arena.copy_tensor(arr.astype(dtype))
        self.add_component(eid, Signal(data=ref))

        self.metadata[eid]["length"] = arr.shape[0]
        self.metadata[eid]["dtype"] = str(np.dtype(dtype))

        return eid

    def spawn_samples(
        self,
        values: np.ndarray | list[float],
        source: str = "",
        field: str | None = None,
    ) -> int:
        """Ingest raw real-valued samples (e.g. prices) for quantization.

        Args:
            values: Sample values, oldest first
            source: Name of the file or generator the samples came from
            field: Price column the samples were taken from

        Returns:
            Entity ID with a Samples component attached
        """
        from liftpack.components.signal import Samples

        arr = np.asarray(values, dtype=np.float64)
        if arr.ndim != 1 or arr.shape[0] == 0:
            raise ValueError(f"Expected non-empty 1-D samples, got shape {arr.shape}")

        eid = self.new_entity()
        ref = self.arena.copy_tensor(arr)
        self.add_component(eid, Samples(data=ref, source=source, field=field))
        self.metadata[eid]["length"] = arr.shape[0]
        self.metadata[eid]["source"] = source

        return eid

    def clear(self) -> None:
        """Release the arena and clear all entities/components for reuse.

        After clear(), all TensorRefs from previous entities are invalidated,
        including those held by packet tree nodes and best basis lists.
        """
        self.arena.reset()
        self._next_eid = 0
        self._components.clear()
        self.metadata.clear()

    def add_component(self, eid: int, component: Component) -> None:
        """Attach a component to an entity.

        Raises:
            ValueError: If entity does not exist
        """
        if eid not in self.metadata:
            raise ValueError(f"Entity {eid} does not exist")

        comp_type = type(component)
        if comp_type not in self._components:
            self._components[comp_type] = {}

        self._components[comp_type][eid] = component

    def get_component(self, eid: int, comp_type: type[T]) -> T:
        """Retrieve a component from an entity.

        Raises:
            KeyError: If entity does not have the component
        """
        if comp_type not in self._components:
            raise KeyError(f"No entities have component type {comp_type.__name__}")
        if eid not in self._components[comp_type]:
            raise KeyError(f"Entity {eid} does not have component {comp_type.__name__}")

        return self._components[comp_type][eid]  # type: ignore

    def has_component(self, eid: int, comp_type: type[Component]) -> bool:
        """Check if entity has a specific component type."""
        return (
            comp_type in self._components
            and eid in self._components[comp_type]
        )

    def remove_component(self, eid: int, comp_type: type[Component]) -> None:
        """Remove a component from an entity.

        Raises:
            KeyError: If entity does not have the component
        """
        if not self.has_component(eid, comp_type):
            raise KeyError(f"Entity {eid} does not have component {comp_type.__name__}")

        del self._components[comp_type][eid]

    def query(self, *comp_types: type[Component]) -> list[int]:
        """Query entities that have ALL specified component types.

        Example:
            >>> eids = world.query(PacketTree, BestBasis)
        """
        if not comp_types:
            return list(self.metadata.keys())

        result_set = set(self._components.get(comp_types[0], {}).keys())

        for comp_type in comp_types[1:]:
            if comp_type not in self._components:
                return []
            result_set &= set(self._components[comp_type].keys())

        return sorted(result_set)

    def destroy_entity(self, eid: int) -> None:
        """Remove entity and all its components.

        Note:
            This does not free arena memory (use clear() for that).
        """
        if eid not in self.metadata:
            raise ValueError(f"Entity {eid} does not exist")

        for comp_store in self._components.values():
            comp_store.pop(eid, None)

        del self.metadata[eid]

    def pipe(self, entity: int) -> Any:
        """Create a pipeline for the given entity.

        Example:
            >>> recon = (
            ...     world.pipe(entity)
            ...     .to(PacketTransform("line"))
            ...     .to(CostAnnotate(BitWidthCost()))
            ...     .to(BestBasisSelect())
            ...     .to(InversePacketTransform())
            ...     .out(Reconstruction)
            ... )
        """
        from liftpack.core.pipeline import Pipe

        return Pipe(world=self, entity=entity)

    def __repr__(self) -> str:
        num_entities = len(self.metadata)
        num_comp_types = len(self._components)
        return (
            f"World(entities={num_entities}, component_types={num_comp_types}, "
            f"arena={self.arena})"
        )
