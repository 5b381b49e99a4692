"""Core data types and the abstract interfaces that a chain back end implements."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, Sequence, TypeVar

if TYPE_CHECKING:
    from movefuzz.config import FuzzerConfig

V = TypeVar("V", bound="ChainValue")
IdT = TypeVar("IdT")
ObjT = TypeVar("ObjT")


class ChainValue(ABC):
    """A chain-specific argument value that the fuzzer can inspect and mutate."""

    @abstractmethod
    def is_integer(self) -> bool:
        """True if the value is an integer."""

    @abstractmethod
    def is_integer_vector(self) -> bool:
        """True if the value is a vector holding only integers."""

    @abstractmethod
    def contains_integers(self) -> bool:
        """True if the value holds integers anywhere inside it."""

    @abstractmethod
    def is_mutable_object(self) -> bool:
        """True if the value refers to a mutable on-chain object."""

    @abstractmethod
    def get_object_id(self) -> bytes | None:
        """The id of the referenced object, or None if the value is not an object."""

    @abstractmethod
    def type_name(self) -> str:
        """A short name of the value's type, for logs and reports."""


class MutationStrategy(ABC, Generic[V]):
    """Mutates argument values between fuzzing iterations."""

    @abstractmethod
    def mutate(self, value: V) -> V:
        """Return the mutated value; it may be the same object changed in place."""


@dataclass
class Parameter(Generic[V]):
    """One argument of the function under test."""

    index: int
    name: str
    type_name: str
    value: V

    def value_type_name(self) -> str:
        """The type name reported by the current value."""
        return self.value.type_name()

    def is_integer(self) -> bool:
        return self.value.is_integer()

    def is_mutable_object(self) -> bool:
        return self.value.is_mutable_object()


@dataclass
class FunctionInfo:
    """The fully qualified function under test."""

    package_id: str
    module_name: str
    function_name: str
    type_arguments: list[str] = field(default_factory=list)


@dataclass
class ViolationInfo:
    """A shift violation observed during execution."""

    location: str
    operation: str
    left_operand: int
    right_operand: int


@dataclass
class ObjectChange(Generic[IdT, ObjT]):
    """An object written by an execution, used to refresh the object cache."""

    object_id: IdT
    obj: ObjT


class FuzzingStatus(enum.Enum):
    IN_PROGRESS = "in_progress"
    VIOLATION_FOUND = "violation_found"
    NO_VIOLATION_FOUND = "no_violation_found"
    ERROR = "error"


@dataclass
class FuzzingResult:
    """The outcome of a fuzzing run."""

    status: FuzzingStatus
    violations: list[ViolationInfo] = field(default_factory=list)
    iterations_completed: int = 0
    total_iterations: int = 0
    error_message: str | None = None

    @classmethod
    def violation_found(cls, violations: Sequence[ViolationInfo], iterations: int) -> FuzzingResult:
        return cls(
            status=FuzzingStatus.VIOLATION_FOUND,
            violations=list(violations),
            iterations_completed=iterations,
            total_iterations=iterations,
        )

    @classmethod
    def no_violation_found(cls) -> FuzzingResult:
        return cls(status=FuzzingStatus.NO_VIOLATION_FOUND)

    @classmethod
    def error(cls, message: str) -> FuzzingResult:
        return cls(status=FuzzingStatus.ERROR, error_message=message)


class ChainAdapter(ABC, Generic[V, IdT, ObjT]):
    """Everything the core fuzzer needs from a specific blockchain."""

    @abstractmethod
    def create_mutator(self) -> MutationStrategy[V]:
        """Create the chain-specific mutation strategy."""

    @abstractmethod
    async def resolve_function(self, config: FuzzerConfig) -> FunctionInfo:
        """Resolve the target function described by the configuration."""

    @abstractmethod
    async def initialize_parameters(self, function: FunctionInfo, args: Sequence[str]) -> list[Parameter[V]]:
        """Build the initial parameters from the textual arguments."""

    @abstractmethod
    async def execute(self, sender: Any, function: FunctionInfo, params: Sequence[Parameter[V]]) -> Any:
        """Execute the function and return the chain-specific result."""

    @abstractmethod
    def compute_object_digest(self, obj: ObjT) -> bytes:
        """Digest identifying one version of an object."""

    @abstractmethod
    def update_value_with_cached_object(self, value: V, obj: ObjT) -> V:
        """Return the value refreshed from a cached object version."""

    @abstractmethod
    def bytes_to_object_id(self, data: bytes) -> IdT:
        """Convert raw bytes to an object id; raise ValueError if they are not one."""

    @abstractmethod
    def object_id_to_bytes(self, object_id: IdT) -> bytes:
        """Convert an object id to raw bytes."""

    @abstractmethod
    def has_shift_violations(self, result: Any) -> bool:
        """True if the execution result reports shift violations."""

    @abstractmethod
    def extract_violations(self, result: Any) -> list[ViolationInfo]:
        """The violations reported by the execution result."""

    @abstractmethod
    def extract_object_changes(self, result: Any) -> list[ObjectChange[IdT, ObjT]]:
        """Objects written by the execution, for the cache."""

    @abstractmethod
    def get_sender_from_config(self, config: FuzzerConfig) -> Any:
        """The sender address to execute with."""