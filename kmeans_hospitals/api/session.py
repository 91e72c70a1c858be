"""View session: request state for the simulation and the pretrained model.

Each operation owns a :class:`RequestSlot` whose state is one of
:class:`Idle`, :class:`Loading`, :class:`Ready` or :class:`Failed`.  A slot
hands out a token when a request starts; only the completion carrying the
latest token is applied, so a slow response to an older request can never
replace the result of a newer one.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

from ..core.errors import KMeansDashboardError
from ..core.models import EnrichedResult, PretrainedModel, SimulationParams
from ..derive.enrich import enrich
from .client import KMeansClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading(Generic[T]):
    previous: Optional[T] = None


@dataclass(frozen=True)
class Ready(Generic[T]):
    data: T


@dataclass(frozen=True)
class Failed(Generic[T]):
    message: str
    previous: Optional[T] = None


RequestState = Union[Idle, Loading, Ready, Failed]


class RequestSlot(Generic[T]):
    """State of one kind of request (run simulation, fetch pretrained)."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.state: RequestState = Idle()
        self._token = 0
        self._lock = threading.Lock()

    @property
    def data(self) -> Optional[T]:
        """The data currently on screen, kept through Loading and Failed."""
        state = self.state
        if isinstance(state, Ready):
            return state.data
        if isinstance(state, (Loading, Failed)):
            return state.previous
        return None

    @property
    def error(self) -> Optional[str]:
        state = self.state
        return state.message if isinstance(state, Failed) else None

    @property
    def loading(self) -> bool:
        return isinstance(self.state, Loading)

    def begin(self) -> int:
        """Enter Loading and return the token of the new request."""
        with self._lock:
            self._token += 1
            self.state = Loading(previous=self.data)
            return self._token

    def succeed(self, token: int, data: T) -> bool:
        """Apply a result; returns ``False`` if *token* is stale."""
        with self._lock:
            if token != self._token:
                logger.info("Discarding stale %s response (token %d)", self.name, token)
                return False
            self.state = Ready(data)
            return True

    def fail(self, token: int, message: str) -> bool:
        """Record a failure; the previous data stays on screen."""
        with self._lock:
            if token != self._token:
                logger.info("Discarding stale %s failure (token %d)", self.name, token)
                return False
            self.state = Failed(message, previous=self.data)
            return True


class ViewSession:
    """Everything the dashboard shows, for a single user."""

    def __init__(self, client: Optional[KMeansClient] = None) -> None:
        self._client = client
        self.simulation: RequestSlot[EnrichedResult] = RequestSlot("simulation")
        self.pretrained: RequestSlot[PretrainedModel] = RequestSlot("pretrained")

    @property
    def client(self) -> KMeansClient:
        if self._client is None:
            self._client = KMeansClient()
        return self._client

    def _complete(self, slot: RequestSlot[Any], token: int, call) -> RequestState:
        try:
            data = call()
        except KMeansDashboardError as exc:
            slot.fail(token, str(exc))
        else:
            slot.succeed(token, data)
        return slot.state

    def run_simulation(self, params: SimulationParams) -> RequestState:
        """Run K-Means remotely and store the enriched result."""
        token = self.simulation.begin()
        return self._complete(
            self.simulation, token,
            lambda: enrich(self.client.run_simulation(params)),
        )

    def reject_params(self, message: str) -> RequestState:
        """Fail the simulation slot without a request (invalid form input)."""
        token = self.simulation.begin()
        self.simulation.fail(token, message)
        return self.simulation.state

    def fetch_pretrained(self) -> RequestState:
        token = self.pretrained.begin()
        return self._complete(self.pretrained, token, self.client.fetch_pretrained)
