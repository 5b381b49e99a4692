"""AFL-style edge coverage built from the program counters of one execution."""

from __future__ import annotations

from typing import Any, Iterable

from movefuzz.input import EntryFunction, Script

MAP_SIZE = 1 << 16

_FNV_OFFSET = 0x811C9DC5
_FNV_PRIME = 0x01000193
_U32_MASK = 0xFFFF_FFFF


def hash32(data: bytes) -> int:
    """32-bit FNV-1a hash."""
    value = _FNV_OFFSET
    for byte in data:
        value ^= byte
        value = (value * _FNV_PRIME) & _U32_MASK
    return value


def payload_base_id(payload: Any) -> int:
    """A stable per-function id that keeps edges of different functions apart."""
    if isinstance(payload, EntryFunction):
        module = payload.module
        return hash32(module.address + module.name.encode() + payload.function.encode())
    if isinstance(payload, Script):
        return hash32(payload.code)
    return 0


class EdgeCoverage:
    """A hit-count map of edges between consecutive program counters."""

    def __init__(self) -> None:
        self._map = bytearray(MAP_SIZE)
        self._prev_loc = 0

    @property
    def map(self) -> bytes:
        return bytes(self._map)

    def reset(self) -> None:
        self._map[:] = bytes(MAP_SIZE)
        self._prev_loc = 0

    def record(self, payload: Any, pcs: Iterable[int]) -> None:
        """Replace the map with the edges of one execution of ``payload``."""
        self.reset()
        base_id = payload_base_id(payload)
        for pc in pcs:
            cur_id = (base_id ^ pc) & _U32_MASK
            index = (cur_id ^ self._prev_loc) & (MAP_SIZE - 1)
            if self._map[index] < 0xFF:
                self._map[index] += 1
            self._prev_loc = cur_id >> 1

    def hit_count(self) -> int:
        """Number of distinct map cells hit."""
        return sum(1 for cell in self._map if cell)