from __future__ import annotations

"""
Streaming Directory Tree Emitter.

Rebuilds the directory hierarchy of a depth-first stream of file paths and
writes it as an NCDU export without ever holding the tree in memory. The
only state is the PathStack of currently open directories: for every file,
scopes that the file is not under are closed, the missing intermediate
directories are opened, and the file is written as a plain entry.

Because the source visits a directory and all of its descendants before any
sibling, each input path needs at most one ascend and one descend, and the
total work is proportional to the number of path components in the input.
"""

import logging
import os
from pathlib import PurePath
from typing import Iterable, List, Optional, Set, Tuple

from duplicacy2ncdu.core.pipeline.components.resolver import (
    MetadataResolver,
    resolve_metadata,
)
from duplicacy2ncdu.core.pipeline.components.writer import JsonStreamWriter
from duplicacy2ncdu.domain.constants import (
    NCDU_FORMAT_VERSION,
    ORDER_CHECK_MODES,
    ORDER_CHECK_OFF,
    ORDER_CHECK_STRICT,
)
from duplicacy2ncdu.domain.errors import EmitterStateError, OrderingError
from duplicacy2ncdu.domain.export_models import ExportMetadata
from duplicacy2ncdu.domain.pipeline_models import EmitterStats
from duplicacy2ncdu.domain.tree_models import PathStack

logger = logging.getLogger(__name__)

_STATE_NEW = "new"
_STATE_OPEN = "open"
_STATE_FINISHED = "finished"


def split_components(path: str) -> Tuple[str, ...]:
    """
    Split a log path into tree components, dropping any anchor.

    '/a/b/f' and 'a/b/f' both yield ('a', 'b', 'f'). Empty and '.'
    components are discarded.
    """
    pure = PurePath(path)
    parts = pure.parts[1:] if pure.anchor else pure.parts
    return tuple(p for p in parts if p not in ("", "."))


class TreeEmitter:
    """
    Writes the NCDU document for a depth-first sequence of file paths.

    Usage is strictly start() -> visit()* -> finish(). Input paths must be
    in depth-first order: once a directory has been left, no later path may
    lie below it. How violations are treated depends on order_check:

    - 'strict': raise OrderingError.
    - 'warn': log a warning and emit a second scope for the directory.
    - 'off': no bookkeeping; behaves as 'warn' without noticing.

    Attributes:
        stack: The currently open directories below the export root.
        stats: Counters describing the emitted document.
    """

    def __init__(
            self,
            writer: JsonStreamWriter,
            root_path: str,
            resolver: MetadataResolver = resolve_metadata,
            order_check: str = ORDER_CHECK_STRICT,
            stats: Optional[EmitterStats] = None,
    ):
        if order_check not in ORDER_CHECK_MODES:
            raise ValueError(f"Unknown order_check mode: {order_check!r}")

        self._writer = writer
        self._root_path = os.path.abspath(root_path)
        self._resolve = resolver
        self._order_check = order_check
        # Names of already closed children, one set per open scope (root
        # first). Only tracked when checking order.
        self._closed: List[Set[str]] = [set()]
        self._state = _STATE_NEW

        self.stack = PathStack()
        self.stats = stats if stats is not None else EmitterStats()

    # -------------------------------------------------------------------------
    # DOCUMENT LIFECYCLE
    # -------------------------------------------------------------------------

    def start(self, metadata: ExportMetadata) -> None:
        """
        Write the document header and open the root directory scope.

        The root info block is named after the absolute root path.
        """
        if self._state != _STATE_NEW:
            raise EmitterStateError("start() may only be called once")

        major, minor = NCDU_FORMAT_VERSION
        self._writer.begin_array()
        self._writer.value(major)
        self._writer.value(minor)
        self._writer.value(metadata.to_dict())

        self._writer.begin_array()
        self._writer.value(self._resolve(self._root_path, self._root_path).to_dict())

        self._state = _STATE_OPEN
        logger.debug(f"Export root opened at {self._root_path}")

    def visit(self, path: str) -> None:
        """
        Emit one file and whatever scope changes it requires.

        Precondition: path follows all previously visited paths in
        depth-first order.

        Args:
            path: File path as logged, relative to the root or absolute.

        Raises:
            EmitterStateError: If called before start() or after finish().
            OrderingError: In strict mode, if the path reopens a closed directory.
            FilesystemError: If metadata for the file or a directory fails.
        """
        if self._state != _STATE_OPEN:
            raise EmitterStateError(f"visit() called in state '{self._state}'")

        parts = split_components(path)
        if not parts:
            logger.warning(f"Ignoring path without components: {path!r}")
            return
        parent = parts[:-1]

        # Ascend to the common ancestor of the open directory and the parent
        while not self.stack.is_ancestor_of(parent):
            self._close_scope()

        # Descend into the directories between the ancestor and the parent
        for component in parent[self.stack.depth:]:
            self._open_scope(component, path)

        self._writer.value(self._resolve(self._location(parts), None).to_dict())
        self.stats.files_emitted += 1

    def visit_all(self, paths: Iterable[str]) -> None:
        """Visit every path of an ordered iterable, stopping at the first error."""
        for path in paths:
            self.visit(path)

    def finish(self) -> None:
        """
        Close every open directory, the root scope and the document.

        Safe to call at any point after start(): an input that ends in the
        middle of a subtree still yields a well-formed document.
        """
        if self._state != _STATE_OPEN:
            raise EmitterStateError(f"finish() called in state '{self._state}'")

        while self.stack:
            self._close_scope()

        self._writer.end_array()
        self._writer.end_array()
        self._writer.finish()
        self._state = _STATE_FINISHED
        logger.debug(
            f"Export finished: {self.stats.files_emitted} files, "
            f"{self.stats.directories_opened} directories, max depth {self.stats.max_depth}"
        )

    # -------------------------------------------------------------------------
    # SCOPE HANDLING
    # -------------------------------------------------------------------------

    def _open_scope(self, component: str, path: str) -> None:
        if self._order_check != ORDER_CHECK_OFF:
            if component in self._closed[-1]:
                self._report_violation(path, self.stack.components + (component,))
            self._closed.append(set())

        self.stack.push(component)

        self._writer.begin_array()
        self._writer.value(self._resolve(self._location(self.stack.components), None).to_dict())

        self.stats.directories_opened += 1
        if self.stack.depth > self.stats.max_depth:
            self.stats.max_depth = self.stack.depth

    def _close_scope(self) -> None:
        component = self.stack.pop()
        if self._order_check != ORDER_CHECK_OFF:
            # Descendants of a closed directory can only come back through it
            self._closed.pop()
            self._closed[-1].add(component)
        self._writer.end_array()

    def _report_violation(self, path: str, key: Tuple[str, ...]) -> None:
        directory = "/".join(key)
        if self._order_check == ORDER_CHECK_STRICT:
            raise OrderingError(path, directory)
        self.stats.ordering_violations += 1
        logger.warning(
            f"Input is not depth-first: '{path}' reopens '{directory}'. "
            f"The export will list this directory twice."
        )

    def _location(self, parts: Tuple[str, ...]) -> str:
        return os.path.join(self._root_path, *parts)
