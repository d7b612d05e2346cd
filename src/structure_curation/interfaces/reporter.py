"""
Reporter Protocol.

Defines the abstract interface for collecting diagnostics of a curation
run. A reporter outlives individual runs: it is initialized at the start
of a run and finalized at its end.

The reporter is responsible for:
    - Accepting ReportEntry diagnostics while a run is active
    - Deciding whether a diagnostic is fatal (raise FatalRunError)
    - Validating the collected diagnostics in finalize()

Lifecycle:
    initialize() -> accept()* -> finalize()
    clear() resets collected state and keeps the initialized flag.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from structure_curation.domain.value_objects import ReportEntry


@runtime_checkable
class Reporter(Protocol):
    """Abstract interface for run diagnostics."""

    ended_with_fatal_exception: bool

    def initialize(self) -> None:
        """Prepare the reporter for a new run."""
        ...

    def accept(self, entry: "ReportEntry") -> None:
        """
        Accept one diagnostic.

        Raises:
            NotInitializedError: If initialize() was not called
            FatalRunError: If the reporter declares the run fatal
        """
        ...

    def finalize(self) -> None:
        """
        Finish the run.

        Raises:
            NotInitializedError: If initialize() was not called
            ReportValidationError: If the collected diagnostics are not acceptable
        """
        ...

    def clear(self) -> None:
        """Reset collected entries and counts."""
        ...
