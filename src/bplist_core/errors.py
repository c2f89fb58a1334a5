"""Exception hierarchy for bplist decoding."""

from __future__ import annotations


class BPListError(Exception):
    """Base class for all errors raised by bplist_core."""


class FormatError(BPListError):
    """The input violates the binary property list layout."""


class BPListIOError(BPListError, OSError):
    """The source could not be read, or ended before a complete element."""


class ResolutionError(BPListError):
    """A container could not be resolved against its object table."""


class CyclicReferenceError(ResolutionError):
    """A container refers back to itself through one of its references."""

    def __init__(self, index: int, path: tuple[int, ...]) -> None:
        self.index = index
        self.path = path
        chain = " -> ".join(str(i) for i in (*path, index))
        super().__init__(f"cyclic reference to object {index} ({chain})")


class ReferenceRangeError(ResolutionError):
    """A reference points outside the object table."""

    def __init__(self, ref: int, size: int) -> None:
        self.ref = ref
        self.size = size
        super().__init__(f"reference {ref} out of range for table of {size} objects")


__all__ = [
    "BPListError",
    "FormatError",
    "BPListIOError",
    "ResolutionError",
    "CyclicReferenceError",
    "ReferenceRangeError",
]
