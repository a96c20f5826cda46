"""Expand/collapse state for recommendation cards.

The render layer owns this state, but its contract is fixed here: a toggle
that originates inside an action element (call, map, website) must never
change the card's state, so invoking an action does not also collapse it.
Instances are not thread-safe; keep them on the thread that owns the view.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from garagescout.recommendations.models import ViewModel


class CardState(StrEnum):
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


@dataclass(frozen=True)
class ToggleEvent:
    """A tap/click on a card, relayed by the render layer."""

    from_action: bool = False


class CardToggle:
    """Two-state machine for one card."""

    def __init__(self, expanded_by_default: bool, has_details: bool = True) -> None:
        self.has_details = has_details
        self.state = CardState.EXPANDED if expanded_by_default else CardState.COLLAPSED

    @classmethod
    def for_view(cls, view: ViewModel) -> CardToggle:
        return cls(view.expanded_by_default, view.has_details)

    @property
    def is_expanded(self) -> bool:
        return self.state is CardState.EXPANDED

    def handle(self, event: ToggleEvent) -> CardState:
        """Apply a toggle trigger and return the resulting state."""
        if event.from_action or not self.has_details:
            return self.state
        self.state = CardState.COLLAPSED if self.is_expanded else CardState.EXPANDED
        return self.state


class CardStateStore:
    """Per-card toggle state keyed by ``ViewModel.key``.

    Looking a card up again after a re-render returns the same toggle, so a
    card the user opened stays open.
    """

    def __init__(self) -> None:
        self._toggles: dict[str, CardToggle] = {}

    def __len__(self) -> int:
        return len(self._toggles)

    def toggle_for(self, view: ViewModel) -> CardToggle:
        toggle = self._toggles.get(view.key)
        if toggle is None:
            toggle = CardToggle.for_view(view)
            self._toggles[view.key] = toggle
        return toggle

    def handle(self, view: ViewModel, event: ToggleEvent) -> CardState:
        return self.toggle_for(view).handle(event)

    def retain(self, views: tuple[ViewModel, ...] | list[ViewModel]) -> None:
        """Forget state for cards no longer on screen (e.g. after a new search)."""
        keep = {view.key for view in views}
        self._toggles = {key: t for key, t in self._toggles.items() if key in keep}
