"""Bounded-time loading of service descriptor documents."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor, wait
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError, XMLParser

from wsdl_flattener.configuration.runtime_settings import LoaderSettings

from .document_models import FailureKind, LoadBatch, LoadFailure, ParsedDocument

logger = logging.getLogger(__name__)

PARSE_CHUNK_SIZE = 64 * 1024

DocumentParser = Callable[[Path, threading.Event], Element]


class ParserConfigurationError(Exception):
    """Raised when the loader cannot be constructed."""


class DocumentLoadError(Exception):
    """Raised when the source directory cannot be enumerated."""


class ParseCancelledError(Exception):
    """Raised by a parser that observed its cancellation event."""


def parse_descriptor(path: Path, cancelled: threading.Event) -> Element:
    """Parse one file for well-formedness only, checking for cancellation between chunks.

    The parser is namespace-aware, never validates, and refuses entity
    declarations and external references.
    """
    parser = XMLParser()
    with path.open("rb") as stream:
        while True:
            if cancelled.is_set():
                raise ParseCancelledError(f"Parsing {path.name} was cancelled.")
            chunk = stream.read(PARSE_CHUNK_SIZE)
            if not chunk:
                break
            parser.feed(chunk)
    return parser.close()


class DocumentLoader:
    """Loads descriptor documents one at a time on a dedicated worker."""

    def __init__(
        self,
        settings: LoaderSettings,
        parse_document: DocumentParser | None = None,
    ) -> None:
        _validate_settings(settings)
        if parse_document is None:
            _probe_parser()
        self._settings = settings
        self._parse_document = parse_document or parse_descriptor
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="document-loader")
        self._pending: dict[Future[Element], threading.Event] = {}
        self._pending_lock = threading.Lock()
        self._closed = False

    @property
    def settings(self) -> LoaderSettings:
        return self._settings

    def __enter__(self) -> DocumentLoader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def load(self, directory: Path | str) -> LoadBatch:
        """Parse every eligible file in the directory, recording skipped files as failures."""
        if self._closed:
            raise DocumentLoadError("Document loader has been shut down.")
        source_dir = Path(directory)
        if not source_dir.is_dir():
            raise DocumentLoadError(f"Source directory not found: {source_dir}")

        logger.debug("Loading %s documents in %s", self._settings.extension, source_dir)
        outcomes: list[ParsedDocument | LoadFailure] = []
        for path in self.iter_candidates(source_dir):
            if self._closed:
                outcome: ParsedDocument | LoadFailure = _interrupted(path, "Loader shut down.")
                _log_failure(outcome, self._settings.parse_timeout_ms)
            else:
                outcome = self.load_file(path)
            outcomes.append(outcome)
        batch = LoadBatch(outcomes=tuple(outcomes))
        logger.debug(
            "Completed loading %s: %d parsed, %d skipped",
            source_dir,
            len(batch.documents),
            len(batch.failures),
        )
        return batch

    def iter_candidates(self, source_dir: Path) -> Iterator[Path]:
        """Yield eligible files in stable name order, honouring the skip list and file cap."""
        extension = self._settings.extension
        accepted = 0
        for path in sorted(source_dir.iterdir(), key=lambda item: item.name):
            if not path.name.endswith(extension) or not path.is_file():
                continue
            stem = path.name.removesuffix(extension)
            if stem in self._settings.skip_list:
                logger.debug("Skipping %s due to skip list entry", path.name)
                continue
            if self._settings.max_files is not None and accepted >= self._settings.max_files:
                logger.debug("Stopping after %d files due to max_files", accepted)
                return
            accepted += 1
            yield path

    def shutdown(self) -> None:
        """Cancel outstanding parses and wait up to the timeout bound for the worker."""
        with self._pending_lock:
            if self._closed:
                return
            self._closed = True
            pending = dict(self._pending)
        for cancelled in pending.values():
            cancelled.set()
        self._executor.shutdown(wait=False, cancel_futures=True)
        in_flight = [future for future in pending if not future.done()]
        if in_flight:
            _, not_done = wait(in_flight, timeout=self._settings.parse_timeout_seconds)
            if not_done:
                logger.warning("Abandoning %d in-flight parse(s) at shutdown", len(not_done))
        with self._pending_lock:
            self._pending.clear()

    def load_file(self, path: Path) -> ParsedDocument | LoadFailure:
        """Parse a single file on the worker, classifying any failure."""
        if self._closed:
            raise DocumentLoadError("Document loader has been shut down.")
        outcome = self._parse_on_worker(path)
        if isinstance(outcome, LoadFailure):
            _log_failure(outcome, self._settings.parse_timeout_ms)
        return outcome

    def _parse_on_worker(self, path: Path) -> ParsedDocument | LoadFailure:
        logger.debug("Parsing %s", path.name)
        cancelled = threading.Event()
        with self._pending_lock:
            if self._closed:
                return _interrupted(path, "Loader shut down before parsing started.")
            future = self._executor.submit(self._parse_document, path, cancelled)
            self._pending[future] = cancelled
        try:
            root = future.result(timeout=self._settings.parse_timeout_seconds)
        except FutureTimeoutError:
            cancelled.set()
            future.cancel()
            return LoadFailure(
                path,
                FailureKind.TIMEOUT,
                f"Parsing took longer than {self._settings.parse_timeout_ms}ms.",
            )
        except (CancelledError, ParseCancelledError) as exc:
            return _interrupted(path, str(exc) or "Parse was cancelled.")
        except (ParseError, DefusedXmlException) as exc:
            return LoadFailure(path, FailureKind.PARSE_FAILURE, str(exc))
        except OSError as exc:
            return LoadFailure(path, FailureKind.IO_FAILURE, str(exc))
        finally:
            self._prune_pending()
        return ParsedDocument(source_path=path, root=root)

    def _prune_pending(self) -> None:
        with self._pending_lock:
            for done in [future for future in self._pending if future.done()]:
                del self._pending[done]


def _validate_settings(settings: LoaderSettings) -> None:
    if not settings.extension:
        raise ParserConfigurationError("Loader extension must not be empty.")
    if settings.parse_timeout_ms <= 0:
        raise ParserConfigurationError("Parse timeout must be greater than zero.")
    if settings.max_files is not None and settings.max_files <= 0:
        raise ParserConfigurationError("max_files must be greater than zero when set.")


def _probe_parser() -> None:
    try:
        XMLParser()
    except Exception as exc:  # pylint: disable=broad-exception-caught
        raise ParserConfigurationError(f"Could not construct XML parser: {exc}") from exc


def _log_failure(failure: LoadFailure, timeout_ms: int) -> None:
    name = failure.source_path.name
    if failure.kind is FailureKind.TIMEOUT:
        logger.warning("Parsing %s took longer than %dms and was skipped.", name, timeout_ms)
    elif failure.kind is FailureKind.INTERRUPTED:
        logger.warning("Interrupted when parsing %s", name)
    elif failure.kind is FailureKind.PARSE_FAILURE:
        logger.error("Could not parse %s: %s", failure.source_path, failure.detail)
    else:
        logger.error("I/O failure on %s: %s", failure.source_path, failure.detail)


def _interrupted(path: Path, detail: str) -> LoadFailure:
    return LoadFailure(path, FailureKind.INTERRUPTED, detail)
