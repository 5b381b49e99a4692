"""Transaction payloads that the Move fuzzer executes and mutates."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Union

ADDRESS_LENGTH = 32

_IDENTIFIER = re.compile(r"(?:[A-Za-z][A-Za-z0-9_]*|_[A-Za-z0-9_]+)\Z")


def _check_identifier(name: str, what: str) -> None:
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        raise ValueError(f"invalid {what} identifier: {name!r}")


def _check_address(address: bytes) -> bytes:
    address = bytes(address)
    if len(address) != ADDRESS_LENGTH:
        raise ValueError(f"address must be {ADDRESS_LENGTH} bytes, got {len(address)}")
    return address


@dataclass(frozen=True)
class ModuleId:
    """A module identified by its account address and name."""

    address: bytes
    name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", _check_address(self.address))
        _check_identifier(self.name, "module")

    def __str__(self) -> str:
        return f"0x{self.address.hex()}::{self.name}"


@dataclass(frozen=True)
class EntryFunction:
    """A call of an entry function; each argument is already BCS encoded."""

    module: ModuleId
    function: str
    ty_args: tuple[str, ...] = ()
    args: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        _check_identifier(self.function, "function")
        object.__setattr__(self, "ty_args", tuple(self.ty_args))
        object.__setattr__(self, "args", tuple(bytes(arg) for arg in self.args))


class ArgKind(enum.Enum):
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    U256 = "u256"
    BOOL = "bool"
    ADDRESS = "address"
    U8_VECTOR = "vector<u8>"
    SERIALIZED = "serialized"


_INT_BITS = {
    ArgKind.U8: 8,
    ArgKind.U16: 16,
    ArgKind.U32: 32,
    ArgKind.U64: 64,
    ArgKind.U128: 128,
    ArgKind.U256: 256,
}


@dataclass(frozen=True)
class TransactionArgument:
    """A typed script argument; the value is checked against its kind."""

    kind: ArgKind
    value: Union[int, bool, bytes]

    def __post_init__(self) -> None:
        kind, value = self.kind, self.value
        if kind in _INT_BITS:
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{kind.value} argument needs an int, got {type(value).__name__}")
            if not 0 <= value < (1 << _INT_BITS[kind]):
                raise ValueError(f"{value} does not fit in {kind.value}")
        elif kind is ArgKind.BOOL:
            if not isinstance(value, bool):
                raise TypeError(f"bool argument needs a bool, got {type(value).__name__}")
        elif kind is ArgKind.ADDRESS:
            if not isinstance(value, (bytes, bytearray)):
                raise TypeError("address argument needs bytes")
            object.__setattr__(self, "value", _check_address(value))
        else:
            if not isinstance(value, (bytes, bytearray)):
                raise TypeError(f"{kind.value} argument needs bytes")
            object.__setattr__(self, "value", bytes(value))


@dataclass(frozen=True)
class Script:
    """A script transaction: code, type arguments and typed arguments."""

    code: bytes
    ty_args: tuple[str, ...] = ()
    args: tuple[TransactionArgument, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", bytes(self.code))
        object.__setattr__(self, "ty_args", tuple(self.ty_args))
        args = tuple(self.args)
        for arg in args:
            if not isinstance(arg, TransactionArgument):
                raise TypeError(f"script arguments must be TransactionArgument, got {type(arg).__name__}")
        object.__setattr__(self, "args", args)


Payload = Union[EntryFunction, Script]


@dataclass(unsafe_hash=True)
class FuzzerInput:
    """One fuzzing input: the transaction payload to execute."""

    payload: Payload = field()