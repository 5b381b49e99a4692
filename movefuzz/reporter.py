"""Console reporting of fuzzing targets, progress and results."""

from __future__ import annotations

import math
import sys
from datetime import timedelta
from typing import Sequence

from movefuzz.types import FunctionInfo, FuzzingResult, FuzzingStatus, Parameter

RULE = "=" * 80
PROGRESS_INTERVAL = 10_000


class ConsoleReporter:
    """Writes human-readable fuzzing reports to standard output."""

    def __init__(self, show_progress: bool = True) -> None:
        self.show_progress = show_progress
        self._last_progress_iteration = 0

    def print_progress(self, current_iteration: int, max_iterations: int) -> None:
        if not self.show_progress:
            return
        if current_iteration % PROGRESS_INTERVAL != 0 or current_iteration == self._last_progress_iteration:
            return
        percentage = current_iteration / max_iterations * 100.0 if max_iterations else math.inf
        print(
            f"\rProgress: {current_iteration}/{max_iterations} iterations ({percentage:.1f}%)",
            end="",
            flush=True,
        )
        self._last_progress_iteration = current_iteration

    def print_fuzzing_result(self, result: FuzzingResult) -> None:
        if self.show_progress:
            print("\r" + " " * 80 + "\r", end="")

        print(f"\n{RULE}")
        print("FUZZING RESULT")
        print(RULE)

        if result.status is FuzzingStatus.VIOLATION_FOUND:
            print("🎯 STATUS: VIOLATION DETECTED!")
            print(f"🚨 Found {len(result.violations)} shift violation(s)")
            for number, violation in enumerate(result.violations, start=1):
                print(f"\nViolation #{number}: ")
                print(f"  Location: {violation.location}")
                print(f"  Operation: {violation.operation}")
                print(f"  Left operand: {violation.left_operand}")
                print(f"  Right operand: {violation.right_operand}")
        elif result.status is FuzzingStatus.NO_VIOLATION_FOUND:
            print("✅ STATUS: NO VIOLATIONS FOUND")
            print(f"Completed all {result.total_iterations} iterations without detecting violations")
        elif result.status is FuzzingStatus.IN_PROGRESS:
            print("⏳ STATUS: IN PROGRESS")
        else:
            print("❌ STATUS: ERROR")
            print(f"Error: {result.error_message}")

        print(f"\nIterations completed: {result.iterations_completed}/{result.total_iterations}")
        print(f"\n{RULE}")

    def print_function_info(self, function: FunctionInfo, parameters: Sequence[Parameter]) -> None:
        print(f"\n{RULE}")
        print("FUZZING TARGET")
        print(RULE)

        print(f"Package: {function.package_id}")
        print(f"Module: {function.module_name}")
        print(f"Function: {function.function_name}")

        if function.type_arguments:
            quoted = ", ".join(f'"{arg}"' for arg in function.type_arguments)
            print(f"Type Arguments: [{quoted}]")

        print(f"\nParameters ({len(parameters)}):")
        for position, param in enumerate(parameters):
            print(f"  {position}: {param.type_name} = {param.value!r}")

        print(RULE)

    def print_fuzzing_start(self, iterations: int, timeout: timedelta) -> None:
        print("\n🚀 Starting fuzzing...")
        print(f"  Max iterations: {iterations}")
        print(f"  Timeout: {int(timeout.total_seconds())}s")
        print("  Target: Shift violations in integer operations")
        print()

    def print_message(self, message: str) -> None:
        print(message)

    def print_error(self, error: str) -> None:
        print(f"❌ Error: {error}", file=sys.stderr)

    def print_warning(self, warning: str) -> None:
        print(f"⚠️  Warning: {warning}")

    def print_success(self, message: str) -> None:
        print(f"✅ {message}")