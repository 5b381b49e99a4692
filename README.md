# movefuzz

Building blocks for fuzzing smart-contract functions:

- an asynchronous, chain-agnostic fuzzing driver (`CoreFuzzer`) that runs a
  function through a `ChainAdapter` you supply, until a shift violation is
  reported, the iteration budget is spent, or a timeout is hit;
- a per-object LRU cache of historical object versions (`ObjectCache`);
- a console reporter for targets, progress and results (`ConsoleReporter`);
- validated Move transaction payload types (`EntryFunction`, `Script`,
  `TransactionArgument`);
- AFL-style edge coverage computed from executed program counters
  (`EdgeCoverage`).

The package has no dependencies outside the standard library.

## Installation

```
pip install movefuzz
```

To run the test suite:

```
pip install "movefuzz[test]"
pytest
```

## Modules

- `movefuzz.types` – the abstract interfaces `ChainValue`, `MutationStrategy`
  and `ChainAdapter`, and the data classes `Parameter`, `FunctionInfo`,
  `ViolationInfo`, `ObjectChange`, `FuzzingStatus` and `FuzzingResult`
  (built with `FuzzingResult.violation_found`, `no_violation_found` and
  `error`).
- `movefuzz.config` – `FuzzerConfig`, an immutable configuration with
  `with_type_arguments`, `with_args`, `with_iterations`,
  `with_timeout_seconds` and `with_sender` returning updated copies,
  `timeout_duration()`, and `validate()`, which raises `ConfigError` when the
  RPC URL, package id, module or function name is empty, or when the
  iteration count or timeout is zero. Defaults: 1,000,000 iterations and a
  300 second timeout.
- `movefuzz.cache` – `ObjectCache(adapter, max_versions_per_object=10_000, rng=None)`.
  `process_changes` stores each changed object under the digest the adapter
  computes for it, so identical versions are kept once; the least recently
  stored version is evicted when an object exceeds its limit.
  `get_random_version`, `has_cached_versions`, `cached_version_count`,
  `total_cached_objects`, `cached_object_ids` and `clear` query and reset it.
- `movefuzz.fuzzer` – `CoreFuzzer`. `await CoreFuzzer.create(adapter, config)`
  resolves the function and its initial parameters; `await fuzzer.run()`
  executes, feeds object changes into the cache, stops at the first shift
  violation, and otherwise refreshes mutable object arguments from the cache
  and mutates all parameters before the next iteration. Errors raised in the
  loop and the timeout are returned as `FuzzingResult` with status `ERROR`
  (the timeout as the message `"Timeout"`). `cache_stats()` returns the total
  number of cached versions and the cached object ids.
- `movefuzz.reporter` – `ConsoleReporter(show_progress=True)` with
  `print_progress` (every 10,000 iterations), `print_fuzzing_result`,
  `print_function_info`, `print_fuzzing_start`, `print_message`,
  `print_error` (to standard error), `print_warning` and `print_success`.
- `movefuzz.input` – `ModuleId` (32-byte address and identifier),
  `EntryFunction` (arguments as already encoded bytes), `Script` (code and
  `TransactionArgument`s), `ArgKind` and `FuzzerInput`, which wraps a payload.
  Identifiers, address lengths and argument values are checked on
  construction, raising `ValueError` or `TypeError`.
- `movefuzz.coverage` – `hash32` (32-bit FNV-1a), `payload_base_id`, and
  `EdgeCoverage`, a 64 KiB hit-count map: `record(payload, pcs)` replaces the
  map with the edges of one execution (counts saturate at 255), `reset()`
  clears it, `hit_count()` counts the cells hit and `map` returns its bytes.

## Example: running the driver

```python
import asyncio

from movefuzz.config import FuzzerConfig
from movefuzz.fuzzer import CoreFuzzer
from movefuzz.reporter import ConsoleReporter

config = (
    FuzzerConfig("http://localhost:9000", "0x123", "pool", "swap")
    .with_iterations(5000)
    .with_timeout_seconds(60)
)
config.validate()


async def main(adapter):
    fuzzer = await CoreFuzzer.create(adapter, config)
    reporter = ConsoleReporter()
    reporter.print_function_info(fuzzer.function, fuzzer.parameters)
    reporter.print_fuzzing_start(config.iterations, config.timeout_duration())
    result = await fuzzer.run()
    reporter.print_fuzzing_result(result)

# asyncio.run(main(my_adapter))  # my_adapter implements ChainAdapter
```

## Example: edge coverage of an entry function

```python
from movefuzz.coverage import EdgeCoverage
from movefuzz.input import EntryFunction, FuzzerInput, ModuleId

entry = EntryFunction(ModuleId(bytes(32), "counter"), "bump", (), (bytes(8),))
fuzz_input = FuzzerInput(entry)

coverage = EdgeCoverage()
coverage.record(fuzz_input.payload, [0, 4, 9, 4, 12])
print(coverage.hit_count())
```

## What this package does not do

- It does not execute transactions. There is no Move virtual machine here:
  program counters for `EdgeCoverage` and execution results for `CoreFuzzer`
  must come from your own executor or `ChainAdapter`.
- It does not keep a corpus or a fuzzing state, does not randomly mutate
  `FuzzerInput` payloads, and does not decide which inputs are interesting
  from abort codes. Only `CoreFuzzer` mutates, through the
  `MutationStrategy` your adapter returns.
- It does not read ABI files or compiled modules from disk.
- It installs no command-line program; it is used as a library.