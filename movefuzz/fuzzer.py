"""Core fuzzing loop driving a chain adapter: execute, check, refresh, mutate."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Generic, Sequence, TypeVar

from movefuzz.cache import ObjectCache
from movefuzz.config import FuzzerConfig
from movefuzz.types import (
    ChainAdapter,
    ChainValue,
    FunctionInfo,
    FuzzingResult,
    MutationStrategy,
    Parameter,
)

log = logging.getLogger(__name__)

V = TypeVar("V", bound=ChainValue)

PROGRESS_INTERVAL = 10_000


class CoreFuzzer(Generic[V]):
    """Runs the fuzzing loop for one target function through a chain adapter."""

    def __init__(
        self,
        adapter: ChainAdapter,
        config: FuzzerConfig,
        function: FunctionInfo,
        parameters: list[Parameter[V]],
        mutator: MutationStrategy[V],
        cache: ObjectCache,
    ) -> None:
        self._adapter = adapter
        self._config = config
        self._function = function
        self._parameters = parameters
        self._mutator = mutator
        self._cache = cache
        self._iteration = 0

    @classmethod
    async def create(cls, adapter: ChainAdapter, config: FuzzerConfig) -> CoreFuzzer:
        """Resolve the target and its initial parameters through the adapter."""
        log.info("Initializing CoreFuzzer with config: %r", config)
        function = await adapter.resolve_function(config)
        parameters = list(await adapter.initialize_parameters(function, config.args))
        mutator = adapter.create_mutator()
        cache = ObjectCache(adapter)
        log.info(
            "CoreFuzzer initialized for %s::%s::%s with %d parameters",
            function.package_id,
            function.module_name,
            function.function_name,
            len(parameters),
        )
        return cls(adapter, config, function, parameters, mutator, cache)

    @property
    def adapter(self) -> ChainAdapter:
        return self._adapter

    @property
    def function(self) -> FunctionInfo:
        return self._function

    @property
    def parameters(self) -> Sequence[Parameter[V]]:
        return tuple(self._parameters)

    async def run(self) -> FuzzingResult:
        """Fuzz until a violation, the iteration limit or the timeout is reached.

        Failures of the loop and the timeout are reported as error results.
        """
        started = time.monotonic()
        max_iterations = self._config.iterations
        timeout = self._config.timeout_duration().total_seconds()
        log.info("Starting fuzzing: %d iterations, timeout: %ds", max_iterations, self._config.timeout_seconds)

        sender = self._adapter.get_sender_from_config(self._config)
        try:
            result = await asyncio.wait_for(self._fuzzing_loop(sender, max_iterations), timeout)
        except asyncio.TimeoutError:
            log.warning("Fuzzing timed out after %.2fs", time.monotonic() - started)
            return FuzzingResult.error("Timeout")
        except Exception as exc:  # noqa: BLE001 - every loop failure becomes an error result
            log.warning("Fuzzing failed: %s", exc)
            return FuzzingResult.error(str(exc))

        log.info("Fuzzing completed in %.2fs", time.monotonic() - started)
        return result

    async def _fuzzing_loop(self, sender: Any, max_iterations: int) -> FuzzingResult:
        started = time.monotonic()
        for iteration in range(1, max_iterations + 1):
            self._iteration = iteration
            log.debug("Starting iteration %d/%d", iteration, max_iterations)
            if iteration % PROGRESS_INTERVAL == 0:
                log.info("Progress: %d/%d iterations", iteration, max_iterations)

            outcome = await self._adapter.execute(sender, self._function, self._parameters)

            changes = self._adapter.extract_object_changes(outcome)
            if changes:
                log.debug("Processing %d object changes to update cache", len(changes))
                self._cache.process_changes(changes)

            if self._adapter.has_shift_violations(outcome):
                log.info("Shift violation detected on iteration %d/%d!", iteration, max_iterations)
                violations = self._adapter.extract_violations(outcome)
                return FuzzingResult.violation_found(violations, iteration)

            log.debug("Iteration %d completed - no violations found", iteration)

            if iteration < max_iterations:
                self._update_cached_objects()
                self._mutate_parameters()

        log.info(
            "Completed all %d iterations in %.2fs - no violations found",
            max_iterations,
            time.monotonic() - started,
        )
        return FuzzingResult.no_violation_found()

    def _update_cached_objects(self) -> None:
        """Replace mutable object arguments with a random cached version."""
        updated = 0
        for param in self._parameters:
            if not param.value.is_mutable_object():
                continue
            raw_id = param.value.get_object_id()
            if raw_id is None:
                continue
            try:
                object_id = self._adapter.bytes_to_object_id(raw_id)
            except ValueError:
                continue
            cached = self._cache.get_random_version(object_id)
            if cached is None:
                continue
            param.value = self._adapter.update_value_with_cached_object(param.value, cached)
            updated += 1
            log.debug("Updated parameter %d with cached object", param.index)
        if updated:
            log.debug("Updated %d parameters with cached objects", updated)

    def _mutate_parameters(self) -> None:
        log.debug("Mutating %d parameters", len(self._parameters))
        for param in self._parameters:
            param.value = self._mutator.mutate(param.value)
            log.debug("Mutated parameter %d: %s = %r", param.index, param.value_type_name(), param.value)

    def cache_stats(self) -> tuple[int, list]:
        """Total cached versions and the ids of all cached objects."""
        return self._cache.total_cached_objects(), self._cache.cached_object_ids()