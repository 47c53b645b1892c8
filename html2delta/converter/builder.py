"""Accumulator for delta operations.

DeltaBuilder collects operations in document order, coalescing adjacent
text runs with identical formatting, and guarantees the final operation
list ends with a newline as rich-text deltas require.
"""

import copy
import logging
from typing import Any, List, Mapping, Optional

from delta import Delta

from .models import Operation

logger = logging.getLogger(__name__)

NEWLINE = "\n"


def make_operation(insert: Any, attributes: Optional[Mapping] = None) -> Operation:
    """Build an operation dict, omitting empty attributes."""
    operation: Operation = {"insert": insert}
    if attributes:
        operation["attributes"] = dict(attributes)
    return operation


class DeltaBuilder:
    """Ordered operation accumulator.

    Text inserts with structurally equal attributes are concatenated.
    Structural newlines (block endings and line breaks) and embeds are
    always kept as separate operations.

    Example:
        >>> builder = DeltaBuilder()
        >>> builder.insert_text("Hello, ")
        >>> builder.insert_text("world")
        >>> builder.to_operation_list()
        [{'insert': 'Hello, world'}, {'insert': '\\n'}]
    """

    def __init__(self):
        """Initialize an empty builder."""
        self._ops: List[Operation] = []
        # Index of the last op that may absorb following text, or None
        self._mergeable: Optional[int] = None

    def __len__(self) -> int:
        return len(self._ops)

    @property
    def ends_with_newline(self) -> bool:
        """True if the accumulated content ends in a newline."""
        if not self._ops:
            return False
        last = self._ops[-1]["insert"]
        return isinstance(last, str) and last.endswith(NEWLINE)

    @property
    def line_open(self) -> bool:
        """True if content has been added since the last newline."""
        return bool(self._ops) and not self.ends_with_newline

    def mark(self) -> int:
        """Current position, for later comparison with len()."""
        return len(self._ops)

    def append(self, operation: Mapping) -> None:
        """Append an operation, coalescing it with the previous text run.

        Args:
            operation: Operation dict with an "insert" key and optional
                "attributes"
        """
        insert = operation["insert"]
        attributes = operation.get("attributes") or {}

        if isinstance(insert, str):
            if not insert:
                return
            if insert == NEWLINE:
                self.append_newline(attributes)
                return
            if self._mergeable is not None:
                previous = self._ops[self._mergeable]
                if previous.get("attributes", {}) == attributes:
                    previous["insert"] += insert
                    return
            self._ops.append(make_operation(insert, attributes))
            self._mergeable = len(self._ops) - 1
        else:
            self._ops.append(make_operation(copy.deepcopy(insert), attributes))
            self._mergeable = None

    def insert_text(self, text: str, attributes: Optional[Mapping] = None) -> None:
        """Append a text run with the given formatting."""
        self.append(make_operation(text, attributes))

    def insert_embed(self, embed: Mapping, attributes: Optional[Mapping] = None) -> None:
        """Append an embed (image, video, ...) operation."""
        self.append(make_operation(dict(embed), attributes))

    def append_newline(self, attributes: Optional[Mapping] = None) -> None:
        """Append a structural newline that is never coalesced."""
        self._ops.append(make_operation(NEWLINE, attributes))
        self._mergeable = None

    def pop(self) -> Operation:
        """Remove and return the last operation."""
        self._mergeable = None
        return self._ops.pop()

    def to_operation_list(self) -> List[Operation]:
        """Return the final operations, terminated by a newline.

        Returns:
            Deep copy of the accumulated operations
        """
        if not self.ends_with_newline:
            self.append_newline()
        return copy.deepcopy(self._ops)

    def to_delta(self) -> Delta:
        """Return the final operations wrapped in a Delta container."""
        return Delta(self.to_operation_list())
