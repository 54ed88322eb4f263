from dataclasses import dataclass, fields
from typing import Any, Dict


@dataclass
class GenerationModifiers:
    """Tweakable generation parameters.

    Central store for the defaults the engine falls back to when a request
    leaves a parameter out. Hosts can load their own values from JSON with
    :meth:`from_dict`.
    """

    # World-space conversion: tile model depth 20.0 / 3 gives the centre-to-vertex size
    hex_size: float = 20.0 / 3.0
    world_scale: float = 1.34

    # Region assignment seed counts
    forest_seeds: int = 4
    water_seeds: int = 3
    grass_seeds: int = 6

    # Roads and buildings
    road_target_count: int = 40
    min_adjacent_roads: int = 1
    building_target_count: int = 20

    # Chunk streaming
    chunk_rings: int = 5
    visibility_distance: int = 22

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationModifiers":
        """Build modifiers from a mapping, keeping defaults for missing keys."""
        known = {f.name: f for f in fields(cls)}
        unknown = set(data).difference(known)
        if unknown:
            raise ValueError(f"unknown modifier keys: {sorted(unknown)}")
        values = {}
        for name, value in data.items():
            caster = float if known[name].type in (float, "float") else int
            if isinstance(value, bool):
                raise ValueError(f"{name} must be numeric, got {value!r}")
            try:
                values[name] = caster(value)
            except (TypeError, ValueError):
                raise ValueError(f"{name} must be numeric, got {value!r}") from None
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# Global modifiers instance used when no explicit configuration is supplied
MODIFIERS = GenerationModifiers()
