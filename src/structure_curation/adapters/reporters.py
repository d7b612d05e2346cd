"""
Reporter Implementations.

Reporters collect the diagnostics of curation runs:
    - LoggingReporter: writes entries to the log (default reporter)
    - AllowedErrorsReporter: validates entries against allowed error codes
    - NullReporter: accepts everything silently
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, List, Optional

from structure_curation.domain.entities import ErrorCode
from structure_curation.domain.exceptions import (
    FatalRunError,
    InvalidConfigurationError,
    NotInitializedError,
    ReportValidationError,
)
from structure_curation.domain.value_objects import ReportEntry

logger = logging.getLogger(__name__)


class BaseReporter:
    """
    Lifecycle shared by the built-in reporters.

    Entries are only accepted between initialize() and finalize(). If
    max_entries is set, accepting more entries than that raises
    FatalRunError.
    """

    def __init__(self, max_entries: Optional[int] = None) -> None:
        if max_entries is not None and (isinstance(max_entries, bool) or max_entries < 0):
            raise InvalidConfigurationError(
                f"max_entries={max_entries!r} is below zero", field="max_entries"
            )
        self.max_entries = max_entries
        self.ended_with_fatal_exception = False
        self._initialized = False
        self._entries: List[ReportEntry] = []

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def entries(self) -> List[ReportEntry]:
        """Entries accepted since the last initialize() or clear()."""
        return list(self._entries)

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    def count_by_code(self) -> Dict[ErrorCode, int]:
        """Number of accepted entries per error code."""
        return dict(Counter(entry.error_code for entry in self._entries))

    def initialize(self) -> None:
        self._entries = []
        self.ended_with_fatal_exception = False
        self._initialized = True

    def accept(self, entry: ReportEntry) -> None:
        if not self._initialized:
            raise NotInitializedError(f"{type(self).__name__} was not initialized")
        self._entries.append(entry)
        self._on_accept(entry)
        if self.max_entries is not None and len(self._entries) > self.max_entries:
            raise FatalRunError(
                f"more than {self.max_entries} report entries, run aborted"
            )

    def finalize(self) -> None:
        if not self._initialized:
            raise NotInitializedError(f"{type(self).__name__} was not initialized")
        self._on_finalize()

    def clear(self) -> None:
        self._entries = []
        self.ended_with_fatal_exception = False

    def _on_accept(self, entry: ReportEntry) -> None:
        pass

    def _on_finalize(self) -> None:
        if self.ended_with_fatal_exception:
            raise ReportValidationError(
                "curation run ended with a fatal exception",
                ended_with_fatal_exception=True,
            )


class NullReporter(BaseReporter):
    """Accepts every entry. finalize() only fails after a fatal run."""


class LoggingReporter(BaseReporter):
    """Reporter writing every entry through the logging module."""

    def __init__(
        self,
        level: int = logging.WARNING,
        max_entries: Optional[int] = None,
    ) -> None:
        """
        Initialize logging reporter.

        Args:
            level: Log level used for entries
            max_entries: Optional limit on accepted entries
        """
        super().__init__(max_entries=max_entries)
        self._level = level

    def _on_accept(self, entry: ReportEntry) -> None:
        location = entry.step_name if entry.step_name is not None else "-"
        logger.log(
            self._level,
            f"[{entry.error_code.value}] step={location} "
            f"record={entry.record_id} external_id={entry.external_id}: {entry.message}",
        )

    def _on_finalize(self) -> None:
        if self._entries:
            summary = ", ".join(
                f"{code.value}={count}" for code, count in self.count_by_code().items()
            )
            logger.info(f"Curation report: {len(self._entries)} entries ({summary})")
        super()._on_finalize()


class AllowedErrorsReporter(BaseReporter):
    """
    Reporter that only tolerates a given set of error codes.

    Entries with other codes are counted as disallowed. finalize() raises
    ReportValidationError if any disallowed entry was accepted or the run
    ended with a fatal exception. With fail_fast=True the first disallowed
    entry raises FatalRunError instead.

    Usage:
        reporter = AllowedErrorsReporter(ErrorCode.MISSING_PROPERTY_ERROR)
        pipeline = CurationPipeline(reporter=reporter)
    """

    def __init__(
        self,
        *allowed_codes: ErrorCode,
        fail_fast: bool = False,
        max_entries: Optional[int] = None,
    ) -> None:
        super().__init__(max_entries=max_entries)
        self.allowed_codes = frozenset(ErrorCode(code) for code in allowed_codes)
        self.fail_fast = fail_fast
        self.allowed_count = 0
        self.disallowed_count = 0

    @property
    def disallowed_entries(self) -> List[ReportEntry]:
        return [e for e in self._entries if e.error_code not in self.allowed_codes]

    def initialize(self) -> None:
        super().initialize()
        self.allowed_count = 0
        self.disallowed_count = 0

    def clear(self) -> None:
        super().clear()
        self.allowed_count = 0
        self.disallowed_count = 0

    def _on_accept(self, entry: ReportEntry) -> None:
        if entry.error_code in self.allowed_codes:
            self.allowed_count += 1
            return
        self.disallowed_count += 1
        if self.fail_fast:
            raise FatalRunError(f"disallowed error code {entry.error_code.value}")

    def _on_finalize(self) -> None:
        if self.disallowed_count or self.ended_with_fatal_exception:
            codes = sorted({e.error_code.value for e in self.disallowed_entries})
            raise ReportValidationError(
                f"{self.disallowed_count} disallowed report entries {codes}, "
                f"fatal={self.ended_with_fatal_exception}",
                disallowed_count=self.disallowed_count,
                ended_with_fatal_exception=self.ended_with_fatal_exception,
            )
