"""HTTP client for the remote K-Means computation service."""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..config import ApiSettings, get_api_settings
from ..core.errors import DecodeError, TransportError
from ..core.models import PretrainedModel, SimulationParams, SimulationResponse

logger = logging.getLogger(__name__)

RUN_FAILED_MESSAGE = "K-Means could not be run."
NO_PRETRAINED_MESSAGE = "No pretrained model is available."
MALFORMED_MESSAGE = "The K-Means API returned a malformed response."


class KMeansClient:
    """Talks to ``/kmeans/run`` and ``/kmeans/pretrained``.

    Every failure is raised as a :class:`KMeansDashboardError` whose
    message is ready to show to the user.
    """

    def __init__(
        self,
        settings: Optional[ApiSettings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or get_api_settings()
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, payload: Optional[dict] = None):
        kwargs: dict[str, Any] = {"timeout": self.settings.timeout}
        if payload is not None:
            kwargs["json"] = payload
        logger.debug("%s %s %s", method, self._url(path), payload or "")
        try:
            return self.session.request(method, self._url(path), **kwargs)
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", self._url(path), exc)
            raise TransportError(
                f"Could not reach the K-Means API at {self.base_url}."
            ) from exc

    @staticmethod
    def _json(resp) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise DecodeError(MALFORMED_MESSAGE) from exc

    @staticmethod
    def _error_detail(resp) -> Optional[str]:
        try:
            body = resp.json()
        except ValueError:
            return None
        if isinstance(body, dict) and isinstance(body.get("detail"), str):
            return body["detail"]
        return None

    def run_simulation(self, params: SimulationParams) -> SimulationResponse:
        """POST the parameters and decode the clustering result."""
        resp = self._request("POST", "/kmeans/run", params.to_payload())
        if not resp.ok:
            message = self._error_detail(resp) or RUN_FAILED_MESSAGE
            logger.warning("K-Means run rejected (%s): %s", resp.status_code, message)
            raise TransportError(message, status_code=resp.status_code)
        try:
            return SimulationResponse.from_payload(self._json(resp))
        except DecodeError as exc:
            logger.warning("Malformed simulation payload: %s", exc)
            raise DecodeError(MALFORMED_MESSAGE) from exc

    def fetch_pretrained(self) -> PretrainedModel:
        """GET the centroids of the pretrained model."""
        resp = self._request("GET", "/kmeans/pretrained")
        if not resp.ok:
            logger.warning("Pretrained model unavailable (%s)", resp.status_code)
            raise TransportError(NO_PRETRAINED_MESSAGE, status_code=resp.status_code)
        try:
            return PretrainedModel.from_payload(self._json(resp))
        except DecodeError as exc:
            logger.warning("Malformed pretrained payload: %s", exc)
            raise DecodeError(MALFORMED_MESSAGE) from exc
