"""
Suite and test data contracts.

These are the fields the reporter reads from the host engine's run tree.
Counters on a suite are derived from its children the same way the host
computes them; the reporter never writes them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union


@dataclass(eq=False)
class Test:
    """A single test outcome (leaf of the run tree)."""

    __test__ = False  # not a pytest test class

    id: str
    name: str = ""
    session_id: str = ""
    time_elapsed: float = 0.0  # milliseconds
    error: Any = None
    skipped: str | None = None
    parent: Suite | None = field(default=None, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "session_id": self.session_id,
            "time_elapsed": self.time_elapsed,
            "error": _error_to_dict(self.error),
            "skipped": self.skipped,
            "parent": self.parent.id if self.parent is not None else None,
        }


@dataclass(eq=False)
class Suite:
    """A named group of tests and nested suites. Root suites have no parent."""

    id: str
    name: str = ""
    session_id: str = ""
    error: Any = None
    parent: Suite | None = field(default=None, repr=False)
    tests: list[Union[Suite, Test]] = field(default_factory=list, repr=False)

    def add(self, child: Union[Suite, Test]) -> None:
        child.parent = self
        self.tests.append(child)

    def iter_tests(self) -> Iterator[Test]:
        """Yield every leaf test below this suite, depth first."""
        for child in self.tests:
            if isinstance(child, Suite):
                yield from child.iter_tests()
            else:
                yield child

    @property
    def num_tests(self) -> int:
        return sum(1 for _ in self.iter_tests())

    @property
    def num_failed_tests(self) -> int:
        return sum(1 for t in self.iter_tests() if t.error is not None)

    @property
    def num_skipped_tests(self) -> int:
        return sum(1 for t in self.iter_tests() if t.skipped is not None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "session_id": self.session_id,
            "error": _error_to_dict(self.error),
            "parent": self.parent.id if self.parent is not None else None,
        }


def has_error(node: Any) -> bool:
    """
    True if the suite, or any suite below it, carries a terminal error.

    Leaf tests never count: a failed test is recorded as a failure, not as a
    suite-level error.
    """
    children = getattr(node, "tests", None)
    if children is None:
        return False
    if getattr(node, "error", None):
        return True
    return any(has_error(child) for child in children)


def _error_to_dict(error: Any) -> Any:
    if error is None or isinstance(error, (str, dict)):
        return error
    return {"name": type(error).__name__, "message": str(error)}
