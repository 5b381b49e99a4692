import asyncio
from dataclasses import dataclass

import pytest

from movefuzz.config import FuzzerConfig
from movefuzz.fuzzer import CoreFuzzer
from movefuzz.types import (
    ChainAdapter,
    ChainValue,
    FunctionInfo,
    FuzzingStatus,
    MutationStrategy,
    ObjectChange,
    Parameter,
    ViolationInfo,
)


@dataclass
class IntValue(ChainValue):
    n: int

    def is_integer(self):
        return True

    def is_integer_vector(self):
        return False

    def contains_integers(self):
        return True

    def is_mutable_object(self):
        return False

    def get_object_id(self):
        return None

    def type_name(self):
        return "u64"


@dataclass
class ObjValue(ChainValue):
    object_id: bytes
    version: int

    def is_integer(self):
        return False

    def is_integer_vector(self):
        return False

    def contains_integers(self):
        return False

    def is_mutable_object(self):
        return True

    def get_object_id(self):
        return self.object_id

    def type_name(self):
        return "object"


class Incrementer(MutationStrategy):
    def __init__(self):
        self.calls = 0

    def mutate(self, value):
        self.calls += 1
        if isinstance(value, IntValue):
            return IntValue(value.n + 1)
        return value


class FakeAdapter(ChainAdapter):
    def __init__(self, values, violate_at=None, fail_at=None, delay=0.0, changes=None, bad_ids=False):
        self.values = values
        self.violate_at = violate_at
        self.fail_at = fail_at
        self.delay = delay
        self.changes = changes or {}
        self.bad_ids = bad_ids
        self.executions = 0
        self.seen = []
        self.mutator = Incrementer()

    def create_mutator(self):
        return self.mutator

    async def resolve_function(self, config):
        return FunctionInfo(config.package_id, config.module_name, config.function_name, list(config.type_arguments))

    async def initialize_parameters(self, function, args):
        return [Parameter(i, f"arg{i}", v.type_name(), v) for i, v in enumerate(self.values)]

    async def execute(self, sender, function, params):
        if self.delay:
            await asyncio.sleep(self.delay)
        self.executions += 1
        if self.executions == self.fail_at:
            raise RuntimeError("boom")
        self.seen.append([p.value for p in params])
        return {"iteration": self.executions}

    def compute_object_digest(self, obj):
        return str(obj.version).encode()

    def update_value_with_cached_object(self, value, obj):
        return obj

    def bytes_to_object_id(self, data):
        if self.bad_ids:
            raise ValueError("not an id")
        return bytes(data)

    def object_id_to_bytes(self, object_id):
        return bytes(object_id)

    def has_shift_violations(self, result):
        return result["iteration"] == self.violate_at

    def extract_violations(self, result):
        return [ViolationInfo("m::f", "shl", 1, 64)]

    def extract_object_changes(self, result):
        return [ObjectChange(o.object_id, o) for o in self.changes.get(result["iteration"], [])]

    def get_sender_from_config(self, config):
        return config.sender


def make_config(iterations=5, timeout=300):
    return (
        FuzzerConfig("http://localhost:9000", "0x123", "test_module", "test_function")
        .with_iterations(iterations)
        .with_timeout_seconds(timeout)
    )


@pytest.mark.asyncio
async def test_create_resolves_function_and_parameters():
    adapter = FakeAdapter([IntValue(1), IntValue(2)])
    fuzzer = await CoreFuzzer.create(adapter, make_config())
    assert fuzzer.function == FunctionInfo("0x123", "test_module", "test_function", [])
    assert [p.value for p in fuzzer.parameters] == [IntValue(1), IntValue(2)]
    assert fuzzer.adapter is adapter


@pytest.mark.asyncio
async def test_run_without_violation_completes_all_iterations():
    adapter = FakeAdapter([IntValue(0)])
    fuzzer = await CoreFuzzer.create(adapter, make_config(iterations=4))
    result = await fuzzer.run()
    assert result.status is FuzzingStatus.NO_VIOLATION_FOUND
    assert adapter.executions == 4
    assert adapter.mutator.calls == 3
    assert adapter.seen == [[IntValue(0)], [IntValue(1)], [IntValue(2)], [IntValue(3)]]


@pytest.mark.asyncio
async def test_run_stops_at_violation():
    adapter = FakeAdapter([IntValue(0)], violate_at=3)
    fuzzer = await CoreFuzzer.create(adapter, make_config(iterations=10))
    result = await fuzzer.run()
    assert result.status is FuzzingStatus.VIOLATION_FOUND
    assert result.iterations_completed == 3
    assert result.total_iterations == 3
    assert result.violations == [ViolationInfo("m::f", "shl", 1, 64)]
    assert adapter.executions == 3


@pytest.mark.asyncio
async def test_execution_failure_becomes_error_result():
    adapter = FakeAdapter([IntValue(0)], fail_at=2)
    fuzzer = await CoreFuzzer.create(adapter, make_config(iterations=10))
    result = await fuzzer.run()
    assert result.status is FuzzingStatus.ERROR
    assert result.error_message == "boom"


@pytest.mark.asyncio
async def test_timeout_becomes_error_result():
    adapter = FakeAdapter([IntValue(0)], delay=5.0)
    fuzzer = await CoreFuzzer.create(adapter, make_config(iterations=10, timeout=1))
    result = await fuzzer.run()
    assert result.status is FuzzingStatus.ERROR
    assert result.error_message == "Timeout"


@pytest.mark.asyncio
async def test_zero_iterations_executes_nothing():
    adapter = FakeAdapter([IntValue(0)])
    fuzzer = await CoreFuzzer.create(adapter, make_config(iterations=0))
    result = await fuzzer.run()
    assert result.status is FuzzingStatus.NO_VIOLATION_FOUND
    assert adapter.executions == 0


@pytest.mark.asyncio
async def test_object_changes_fill_cache_and_refresh_parameters():
    oid = b"\x01" * 4
    newer = ObjValue(oid, 7)
    adapter = FakeAdapter([ObjValue(oid, 1)], changes={1: [newer]})
    fuzzer = await CoreFuzzer.create(adapter, make_config(iterations=2))
    await fuzzer.run()
    total, ids = fuzzer.cache_stats()
    assert total == 1
    assert ids == [oid]
    assert adapter.seen[1] == [newer]


@pytest.mark.asyncio
async def test_unconvertible_object_id_is_skipped():
    oid = b"\x02" * 4
    original = ObjValue(oid, 1)
    adapter = FakeAdapter([original], changes={1: [ObjValue(oid, 9)]}, bad_ids=True)
    fuzzer = await CoreFuzzer.create(adapter, make_config(iterations=2))
    result = await fuzzer.run()
    assert result.status is FuzzingStatus.NO_VIOLATION_FOUND
    assert adapter.seen[1] == [original]