"""Error types that carry source positions, and package-path helpers."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Protocol


class Node(Protocol):
    """Anything with a source position."""

    pos: int


class ErrList(Exception):
    """Several errors gathered into one."""

    def __init__(self, errors: Iterable[BaseException]) -> None:
        self.errors = list(errors)
        super().__init__(self.errors)

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __getitem__(self, index: int) -> BaseException:
        return self.errors[index]

    def __str__(self) -> str:
        return "[" + " ".join(str(e) for e in self.errors) + "]"


class PositionedError(Exception):
    """An error attached to a position in the source."""

    def __init__(self, pos: int, err: BaseException) -> None:
        self.pos = pos
        self.err = err
        super().__init__(pos, err)

    def __str__(self) -> str:
        return str(self.err)


def err_from_node(err: BaseException, node: Node) -> Exception:
    """Attach the node's position to an error, mapping over error lists."""
    if isinstance(err, ErrList):
        return ErrList(err_from_node(e, node) for e in err)
    return PositionedError(node.pos, err)


def maybe_err_list(errs: Iterable[BaseException]) -> Optional[ErrList]:
    """Return an ErrList of the errors, or None when there are none."""
    errs = list(errs)
    return ErrList(errs) if errs else None


def non_vendor_path(raw_path: str) -> str:
    """Strip everything up to and including the last ``/vendor/`` segment."""
    return raw_path.split("/vendor/")[-1]