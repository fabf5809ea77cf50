"""Scan orchestrator — drives Additions through the evaluator and the detectors.

Exception safety: anything unexpected raised while scanning an Addition is
re-raised as ScanError naming only the exception type and the path, so
matched secret values never leak into tracebacks or error messages.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Deque, Iterable, Iterator, List, Optional, Sequence, Tuple

from leakgate.config.talismanrc import TalismanRC
from leakgate.detectors.filesize import DEFAULT_MAX_SIZE
from leakgate.detectors.models import DetectorError
from leakgate.detectors.registry import Detector, default_detectors
from leakgate.findings.aggregator import Results
from leakgate.findings.models import Finding
from leakgate.git.models import Addition
from leakgate.scanner.checksum import ChecksumCalculator
from leakgate.scanner.models import ScanMode, ScanOutcome, ScanState
from leakgate.scanner.suppression import Evaluator, evaluator_for

logger = logging.getLogger(__name__)

# (addition, findings) per Addition of a unit; findings is None when the
# evaluator ruled the Addition out before any detector ran.
_Scanned = List[Tuple[Addition, Optional[List[Finding]]]]


class ScanError(Exception):
    """Raised on internal scanner error (never contains secret values)."""


class Scanner:
    """One scan over one set of additions.

    In current mode *additions* is an iterable of Addition; it is read in
    full so the checksum calculator sees every path. With *repo_root* and
    *content_rev* set, checksums cover each file whole as it stands at that
    revision (``""`` for the index); otherwise they cover the additions. In history mode it is an
    iterable of ``(CommitContext, [Addition])`` pairs, consumed lazily, one
    commit per unit of work.
    """

    def __init__(
        self,
        mode: ScanMode,
        talisman_rc: Optional[TalismanRC] = None,
        *,
        detectors: Optional[Sequence[Detector]] = None,
        workers: int = 1,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
        repo_root: Optional[Path] = None,
        content_rev: Optional[str] = None,
        max_file_size: int = DEFAULT_MAX_SIZE,
    ) -> None:
        self.mode = ScanMode(mode)
        self.talisman_rc = talisman_rc if talisman_rc is not None else TalismanRC()
        if detectors is None:
            detectors = default_detectors(self.talisman_rc, max_file_size)
        self.detectors = list(detectors)
        self.workers = max(1, int(workers))
        self.timeout = timeout
        self.cancel_event = cancel_event if cancel_event is not None else threading.Event()
        self.repo_root = repo_root
        self.content_rev = content_rev
        self.state = ScanState.INITIALIZED
        self.calculator: Optional[ChecksumCalculator] = None
        self._deadline: Optional[float] = None

    def cancel(self) -> None:
        self.cancel_event.set()

    def _cancelled(self) -> bool:
        if self.cancel_event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def _threshold(self) -> str:
        # history reports ignore the RC entirely, threshold included
        if self.mode is ScanMode.HISTORY:
            return "low"
        return self.talisman_rc.threshold

    # ── units of work ─────────────────────────────────────────────────────

    def _collect(self, additions: Iterable[Any]) -> Iterator[List[Addition]]:
        if self.mode is ScanMode.CURRENT:
            materialised = list(additions)
            self.calculator = ChecksumCalculator(materialised, self.repo_root, self.content_rev)
            logger.info("Scanning %d addition(s)", len(materialised))
            return ([addition] for addition in materialised)
        self.calculator = None
        return self._commit_units(additions)

    @staticmethod
    def _commit_units(items: Iterable[Any]) -> Iterator[List[Addition]]:
        for item in items:
            if isinstance(item, Addition):
                yield [item]
                continue
            commit, batch = item
            logger.debug("Scanning commit %s", commit.short_sha if commit else "?")
            yield list(batch)

    def _scan_addition(self, addition: Addition, evaluator: Evaluator) -> Optional[List[Finding]]:
        if evaluator.is_scan_not_required(addition):
            logger.debug("Skipping %s: checksum matches .talismanrc", addition.path)
            return None
        findings: List[Finding] = []
        for detector in self.detectors:
            if evaluator.should_ignore(addition, detector.name):
                continue
            try:
                findings.extend(detector.detect(addition))
            except DetectorError as exc:
                logger.warning("Detector %s skipped %s: %s", detector.name, addition.path, exc)
        return findings

    def _scan_unit(self, unit: List[Addition], evaluator: Evaluator) -> _Scanned:
        scanned: _Scanned = []
        for addition in unit:
            try:
                scanned.append((addition, self._scan_addition(addition, evaluator)))
            except Exception as exc:
                # `from None` keeps the original exception, and whatever it
                # captured, out of the traceback
                raise ScanError(
                    f"Internal scanner error ({type(exc).__name__}) while scanning {addition.path}. "
                    "Secrets have been scrubbed from this error."
                ) from None
        return scanned

    @staticmethod
    def _record(scanned: _Scanned, outcome: ScanOutcome) -> None:
        for addition, findings in scanned:
            if findings is None:
                outcome.skipped.append(addition.path)
                continue
            outcome.scanned += 1
            outcome.results.add(findings)

    def _drive(self, units: Iterator[List[Addition]], evaluator: Evaluator, outcome: ScanOutcome) -> bool:
        """Run *units* on the pool, recording in submission order. Returns True if cut short."""
        in_flight: Deque[Future[_Scanned]] = deque()
        limit = 2 * self.workers
        incomplete = False

        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="leakgate-scan") as pool:
            try:
                for unit in units:
                    if self._cancelled():
                        incomplete = True
                        break
                    in_flight.append(pool.submit(self._scan_unit, unit, evaluator))
                    if len(in_flight) >= limit:
                        self._record(in_flight.popleft().result(), outcome)

                if incomplete:
                    for future in in_flight:
                        future.cancel()
                while in_flight:
                    future = in_flight.popleft()
                    if future.cancelled():
                        continue
                    self._record(future.result(), outcome)
            except BaseException:
                for future in in_flight:
                    future.cancel()
                raise
        return incomplete

    def run(self, additions: Iterable[Any]) -> ScanOutcome:
        """Execute the full scan pipeline. Returns a ScanOutcome."""
        start = time.perf_counter()
        if self.timeout is not None:
            self._deadline = time.monotonic() + self.timeout

        outcome = ScanOutcome(mode=self.mode, results=Results(threshold=self._threshold()))

        self.state = ScanState.COLLECTING
        units = self._collect(additions)
        evaluator = evaluator_for(self.mode, self.calculator, self.talisman_rc)

        self.state = ScanState.EVALUATING
        outcome.incomplete = self._drive(units, evaluator, outcome)

        self.state = ScanState.REPORTING
        if outcome.incomplete:
            logger.warning(
                "Scan cancelled after %d addition(s); results are incomplete",
                outcome.scanned + len(outcome.skipped),
            )
        outcome.duration_ms = round((time.perf_counter() - start) * 1000, 2)

        self.state = ScanState.DONE
        return outcome


def scan(
    mode: ScanMode,
    additions: Iterable[Any],
    talisman_rc: Optional[TalismanRC] = None,
    **options: Any,
) -> ScanOutcome:
    """Scan *additions* in *mode*; *options* are passed to Scanner."""
    return Scanner(mode, talisman_rc, **options).run(additions)
