from __future__ import annotations

"""Structured records exchanged with the host.

Every operation speaks the same JSON-compatible shapes: coordinates are
``{"q": int, "r": int}``, tile records add ``"tileType"``, chunk states add
``"enabled"``. Decoding validates structure and raises :class:`RecordError`;
encoding never fails.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from worldgen.tiles import TileType

Coord = Tuple[int, int]


class RecordError(ValueError):
    """A request record is structurally invalid."""


def _int_field(entry: Mapping[str, Any], key: str, where: str) -> int:
    if key not in entry:
        raise RecordError(f"{where}: missing {key!r}")
    value = entry[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordError(f"{where}: {key!r} must be an int, got {value!r}")
    return value


def _entries(data: Any, what: str) -> Sequence[Any]:
    if data is None:
        return []
    if not isinstance(data, (list, tuple)):
        raise RecordError(f"{what} must be a list, got {type(data).__name__}")
    return data


def _mapping(entry: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(entry, Mapping):
        raise RecordError(f"{where}: expected an object, got {entry!r}")
    return entry


# ---------------------------------------------------------------------------
# Decoding


def decode_coord(entry: Any, where: str = "coord") -> Coord:
    entry = _mapping(entry, where)
    return _int_field(entry, "q", where), _int_field(entry, "r", where)


def decode_optional_coord(entry: Any, where: str = "coord") -> Optional[Coord]:
    return None if entry is None else decode_coord(entry, where)


def decode_coords(data: Any, what: str = "coords") -> List[Coord]:
    """Decode a coordinate list, keeping order and duplicates."""
    return [decode_coord(e, f"{what}[{i}]") for i, e in enumerate(_entries(data, what))]


def decode_tile_records(data: Any, what: str = "tiles") -> List[Tuple[Coord, int]]:
    """Decode ``[{"q", "r", "tileType"}]``.

    The tile type code is returned raw so the store can accept or refuse it.
    """
    out = []
    for i, e in enumerate(_entries(data, what)):
        where = f"{what}[{i}]"
        entry = _mapping(e, where)
        out.append((decode_coord(entry, where), _int_field(entry, "tileType", where)))
    return out


def decode_chunk_states(data: Any, what: str = "chunks") -> List[Tuple[Coord, bool]]:
    out = []
    for i, e in enumerate(_entries(data, what)):
        where = f"{what}[{i}]"
        entry = _mapping(e, where)
        enabled = entry.get("enabled")
        if not isinstance(enabled, bool):
            raise RecordError(f"{where}: 'enabled' must be a bool, got {enabled!r}")
        out.append((decode_coord(entry, where), enabled))
    return out


# ---------------------------------------------------------------------------
# Encoding


def encode_coord(coord: Coord) -> Dict[str, int]:
    return {"q": int(coord[0]), "r": int(coord[1])}


def encode_optional_coord(coord: Optional[Coord]) -> Optional[Dict[str, int]]:
    return None if coord is None else encode_coord(coord)


def encode_coords(coords: Optional[Iterable[Coord]]) -> Optional[List[Dict[str, int]]]:
    """Encode a coordinate list; ``None`` (no result) stays ``None``."""
    if coords is None:
        return None
    return [encode_coord(c) for c in coords]


def encode_tile_records(tiles: Iterable[Tuple[Coord, TileType]]) -> List[Dict[str, int]]:
    return [{"q": q, "r": r, "tileType": int(t)} for (q, r), t in tiles]


def encode_world_positions(rows: Iterable[Tuple[Coord, float, float]]) -> List[Dict[str, Any]]:
    return [{"q": q, "r": r, "x": x, "z": z} for (q, r), x, z in rows]
