from __future__ import annotations

"""
Directory Scope Data Models.

Provides the PathStack, the only mutable state of a streaming conversion:
the chain of directories currently open in the output document.
"""

from typing import List, Sequence, Tuple

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class PathStack:
    """
    Ordered components of the currently open directory, root first.

    An empty stack denotes the export root. Every push must be matched by
    exactly one structural open in the output and every pop by one close.
    """

    def __init__(self) -> None:
        self._parts: List[str] = []

    def push(self, component: str) -> None:
        self._parts.append(component)

    def pop(self) -> str:
        """
        Remove and return the innermost component.

        Raises:
            IndexError: If the stack is already at the export root.
        """
        return self._parts.pop()

    @property
    def depth(self) -> int:
        return len(self._parts)

    @property
    def components(self) -> Tuple[str, ...]:
        return tuple(self._parts)

    def is_ancestor_of(self, parts: Sequence[str]) -> bool:
        """
        Check whether the open directory is a prefix of the given components.

        A directory counts as its own ancestor, so an equal sequence matches.
        """
        n = len(self._parts)
        return len(parts) >= n and tuple(parts[:n]) == tuple(self._parts)

    def __len__(self) -> int:
        return len(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)

    def __repr__(self) -> str:
        return f"PathStack({'/'.join(self._parts)!r})"
