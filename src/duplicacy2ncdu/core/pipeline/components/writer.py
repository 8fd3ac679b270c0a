from __future__ import annotations

"""
Streaming JSON Writer.

Writes a JSON document token by token straight to a text stream. Only the
array nesting is tracked (one flag per open array), which is all the NCDU
export needs: objects are always leaves and are serialized in one piece.
"""

import json
from typing import IO, Any, List

_SEPARATORS = (",", ":")

# -----------------------------------------------------------------------------
# WRITER
# -----------------------------------------------------------------------------

class JsonStreamWriter:
    """
    Incremental compact JSON emitter for nested arrays.

    Attributes:
        opens: Number of arrays opened so far.
        closes: Number of arrays closed so far.
    """

    def __init__(self, stream: IO[str]):
        self._stream = stream
        # One entry per open array: True once it holds at least one element
        self._has_items: List[bool] = []
        self._finished = False
        self.opens = 0
        self.closes = 0

    @property
    def depth(self) -> int:
        return len(self._has_items)

    def begin_array(self) -> None:
        self._before_value()
        self._stream.write("[")
        self._has_items.append(False)
        self.opens += 1

    def end_array(self) -> None:
        if not self._has_items:
            raise ValueError("end_array() called with no open array")
        self._has_items.pop()
        self._stream.write("]")
        self.closes += 1
        if not self._has_items:
            self._finished = True

    def value(self, obj: Any) -> None:
        """
        Write one complete JSON value (number, string, object...).

        Strings are written unescaped beyond what JSON requires, so lone
        surrogates from undecodable file names reach the stream as-is and are
        restored to their original bytes by the 'surrogateescape' handler.
        """
        self._before_value()
        self._stream.write(json.dumps(obj, ensure_ascii=False, separators=_SEPARATORS))
        if not self._has_items:
            self._finished = True

    def finish(self) -> None:
        """
        Terminate the document and flush the stream.

        Raises:
            ValueError: If arrays are still open or nothing was written.
        """
        if self._has_items:
            raise ValueError(f"Document incomplete: {len(self._has_items)} array(s) still open")
        if not self._finished:
            raise ValueError("Document is empty")
        self._stream.write("\n")
        self._stream.flush()

    def _before_value(self) -> None:
        if self._has_items:
            if self._has_items[-1]:
                self._stream.write(",")
            else:
                self._has_items[-1] = True
        elif self._finished:
            raise ValueError("A complete top-level value was already written")
