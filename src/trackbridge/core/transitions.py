"""
Transition Resolver - Picks the workflow transition for a status change.

Workflows are configurable per tracker and per project, so the transitions
on offer are fetched fresh for every update and passed in explicitly. The
resolver itself holds only the fixed status-pair table.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from trackbridge.core.domain import IssueStatus, Transition


TransitionTable = Mapping[tuple[IssueStatus, IssueStatus], str]


class TransitionResolver:
    """
    Resolve (current, desired) status pairs to one available transition.

    Only a single hop is ever attempted; if the desired status is not one
    transition away, nothing is done.
    """

    def __init__(self, table: TransitionTable):
        self.table = dict(table)
        self.logger = logging.getLogger("TransitionResolver")

    def label_for(self, current: IssueStatus, desired: IssueStatus) -> str | None:
        """Get the configured transition label, if any."""
        return self.table.get((current, desired))

    def resolve(
        self,
        current: IssueStatus,
        desired: IssueStatus,
        available: Iterable[Transition],
    ) -> Transition | None:
        """
        Find the transition that moves an issue from `current` to `desired`.

        Args:
            current: Canonical status of the issue as fetched
            desired: Canonical status requested by the caller
            available: Transitions the backend offers right now

        Returns:
            The matching transition, or None when the status is unchanged,
            no label is configured, or the label is not on offer.
        """
        if current == desired:
            return None

        label = self.label_for(current, desired)
        if label is None:
            self.logger.debug(f"No transition configured for {current.name} -> {desired.name}")
            return None

        for transition in available:
            if transition.name == label:
                return transition

        self.logger.debug(f"Transition '{label}' not available for {current.name} -> {desired.name}")
        return None
