"""Cyclic order over enabled metric kinds."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ..models import MetricKind


class Rotation:
    """Tracks which kind is active.

    ``active`` is always a kind for which ``is_enabled`` held when it was
    chosen, or ``None`` when nothing is enabled (idle).
    """

    def __init__(
        self,
        order: Sequence[MetricKind],
        is_enabled: Callable[[MetricKind], bool],
    ):
        self.order: tuple[MetricKind, ...] = tuple(order)
        self._is_enabled = is_enabled
        self.active: MetricKind | None = self.first()

    @property
    def idle(self) -> bool:
        return self.active is None

    def enabled_kinds(self) -> list[MetricKind]:
        return [kind for kind in self.order if self._is_enabled(kind)]

    def first(self) -> MetricKind | None:
        """First enabled kind in declaration order."""
        for kind in self.order:
            if self._is_enabled(kind):
                return kind
        return None

    def next_after(self, kind: MetricKind) -> MetricKind | None:
        """Next enabled kind after *kind*, wrapping around.

        *kind* itself is the last candidate, so a lone enabled kind maps to
        itself and ``None`` means nothing is enabled.
        """
        count = len(self.order)
        start = self.order.index(kind)
        for step in range(1, count + 1):
            candidate = self.order[(start + step) % count]
            if self._is_enabled(candidate):
                return candidate
        return None

    def advance(self) -> MetricKind | None:
        if self.active is None:
            self.active = self.first()
        else:
            self.active = self.next_after(self.active)
        return self.active

    def settle(self) -> MetricKind | None:
        """Make sure ``active`` is enabled, moving forward if it is not."""
        if self.active is not None and self._is_enabled(self.active):
            return self.active
        return self.advance()
