"""Thread-safe registry owning flows by unique name."""

from __future__ import annotations

import logging
import threading
from typing import TextIO

from stepflow._errors import DuplicateFlowError, FlowNotFound
from stepflow._flow import Flow
from stepflow._prompt import Prompter
from stepflow._types import FlowAnalytics

logger = logging.getLogger("stepflow.registry")


class FlowRegistry:
    """Creates, resolves and releases flows, keeping insertion order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._flows: dict[str, Flow] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._flows)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._flows

    def create(self, name: str) -> Flow:
        """Register and return a new empty flow.

        Raises ``ValueError`` for an empty name and :class:`DuplicateFlowError`
        if *name* is already registered.
        """
        if not name:
            raise ValueError("Flow name must not be empty")
        with self._lock:
            if name in self._flows:
                raise DuplicateFlowError(name)
            flow = Flow(name)
            self._flows[name] = flow
        logger.info("flow.created", extra={"flow": name})
        return flow

    def delete(self, name: str) -> None:
        """Release the flow called *name*. Raises :class:`FlowNotFound` if absent."""
        with self._lock:
            if self._flows.pop(name, None) is None:
                raise FlowNotFound(name)
        logger.info("flow.deleted", extra={"flow": name})

    def get(self, name: str) -> Flow:
        """Return the flow called *name*. Raises :class:`FlowNotFound` if absent."""
        with self._lock:
            flow = self._flows.get(name)
        if flow is None:
            raise FlowNotFound(name)
        return flow

    def names(self) -> list[str]:
        """Return registered flow names in creation order."""
        with self._lock:
            return list(self._flows)

    def run(
        self,
        name: str,
        prompter: Prompter,
        *,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> FlowAnalytics:
        """Resolve *name* and run it. Raises :class:`FlowNotFound` if absent."""
        return self.get(name).run(prompter, out=out, err=err)

    def clear(self) -> None:
        """Release every registered flow."""
        with self._lock:
            self._flows.clear()
