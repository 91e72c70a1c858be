"""Data model for simulation requests and results.

All records are frozen dataclasses holding tuples, so a decoded result is
immutable and hashable.  That lets derived views be memoized on the result
itself (see :mod:`kmeans_hospitals.derive.views`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .errors import DecodeError

# Input bounds of the parameter form.
GRID_SIZE_BOUNDS = (5, 100)
NEIGHBORHOOD_BOUNDS = (10, 500)
HOSPITAL_BOUNDS = (1, 12)

_FORM_FIELDS = (
    ("m", "City size (m)", GRID_SIZE_BOUNDS),
    ("n", "Neighborhoods (n)", NEIGHBORHOOD_BOUNDS),
    ("k", "Hospitals (k)", HOSPITAL_BOUNDS),
)


def _whole_number(raw: Any) -> Optional[int]:
    """``raw`` as an int if it is a whole number, else ``None``."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            raw = float(raw.strip())
        except ValueError:
            return None
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    return None


# ── Payload helpers ──────────────────────────────────────────────────

def _field(payload: Any, key: str) -> Any:
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected an object, got {type(payload).__name__}")
    if key not in payload:
        raise DecodeError(f"Missing field {key!r}")
    return payload[key]


def _as_number(value: Any, key: str) -> float:
    # bool is an int subclass; a JSON true/false is never a coordinate.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"Field {key!r} must be a number, got {value!r}")
    return float(value)


def _as_int(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise DecodeError(f"Field {key!r} must be an integer, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int):
        raise DecodeError(f"Field {key!r} must be an integer, got {value!r}")
    return value


def _as_list(value: Any, key: str) -> list:
    if not isinstance(value, list):
        raise DecodeError(f"Field {key!r} must be a list")
    return value


# ── Records ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SimulationParams:
    """Grid side length ``m``, neighborhood count ``n``, hospital count ``k``."""

    m: int = 20
    n: int = 80
    k: int = 4

    @classmethod
    def from_form(cls, m: Any, n: Any, k: Any) -> SimulationParams:
        """Validate raw form values.

        Number inputs report ``None`` when the typed value breaks their
        ``min``/``max``/``step``, so the message always names the range.
        Fractional values are rejected, never truncated.
        """
        values = {}
        for (name, label, (low, high)), raw in zip(_FORM_FIELDS, (m, n, k)):
            value = _whole_number(raw)
            if value is None or not low <= value <= high:
                raise ValueError(
                    f"{label} must be a whole number between {low} and {high}"
                )
            values[name] = value
        return cls(**values)

    def to_payload(self) -> dict[str, int]:
        return {"m": self.m, "n": self.n, "k": self.k}


@dataclass(frozen=True)
class Neighborhood:
    id: int
    x: float
    y: float

    @classmethod
    def from_payload(cls, payload: Any) -> Neighborhood:
        return cls(
            id=_as_int(_field(payload, "id"), "id"),
            x=_as_number(_field(payload, "x"), "x"),
            y=_as_number(_field(payload, "y"), "y"),
        )


@dataclass(frozen=True)
class Hospital:
    id: int
    x: float
    y: float

    @classmethod
    def from_payload(cls, payload: Any) -> Hospital:
        return cls(
            id=_as_int(_field(payload, "id"), "id"),
            x=_as_number(_field(payload, "x"), "x"),
            y=_as_number(_field(payload, "y"), "y"),
        )


@dataclass(frozen=True)
class ClusterStat:
    """Server-side statistics for one hospital's cluster."""

    hospital_id: int
    count: int
    avg_distance: float
    max_distance: float

    @classmethod
    def from_payload(cls, payload: Any) -> ClusterStat:
        return cls(
            hospital_id=_as_int(_field(payload, "hospital_id"), "hospital_id"),
            count=_as_int(_field(payload, "count"), "count"),
            avg_distance=_as_number(_field(payload, "avg_distance"), "avg_distance"),
            max_distance=_as_number(_field(payload, "max_distance"), "max_distance"),
        )


@dataclass(frozen=True)
class DistanceBin:
    label: str
    count: int

    @classmethod
    def from_payload(cls, payload: Any) -> DistanceBin:
        return cls(
            label=str(_field(payload, "label")),
            count=_as_int(_field(payload, "count"), "count"),
        )


@dataclass(frozen=True)
class SimulationResponse:
    """Raw result of ``POST /kmeans/run``.

    ``assignments[i]`` is the cluster index of ``neighborhoods[i]``; the
    cluster index is a position in ``hospitals``.
    """

    neighborhoods: tuple[Neighborhood, ...]
    hospitals: tuple[Hospital, ...]
    assignments: tuple[int, ...]
    iterations: int
    grid_size: int
    inertia: float
    overall_avg_distance: float
    overall_max_distance: float
    cluster_stats: tuple[ClusterStat, ...] = ()
    distance_bins: tuple[DistanceBin, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> SimulationResponse:
        return cls(
            neighborhoods=tuple(
                Neighborhood.from_payload(item)
                for item in _as_list(_field(payload, "neighborhoods"), "neighborhoods")
            ),
            hospitals=tuple(
                Hospital.from_payload(item)
                for item in _as_list(_field(payload, "hospitals"), "hospitals")
            ),
            assignments=tuple(
                _as_int(item, "assignments")
                for item in _as_list(_field(payload, "assignments"), "assignments")
            ),
            iterations=_as_int(_field(payload, "iterations"), "iterations"),
            grid_size=_as_int(_field(payload, "grid_size"), "grid_size"),
            inertia=_as_number(_field(payload, "inertia"), "inertia"),
            overall_avg_distance=_as_number(
                _field(payload, "overall_avg_distance"), "overall_avg_distance"
            ),
            overall_max_distance=_as_number(
                _field(payload, "overall_max_distance"), "overall_max_distance"
            ),
            cluster_stats=tuple(
                ClusterStat.from_payload(item)
                for item in _as_list(_field(payload, "cluster_stats"), "cluster_stats")
            ),
            distance_bins=tuple(
                DistanceBin.from_payload(item)
                for item in _as_list(_field(payload, "distance_bins"), "distance_bins")
            ),
        )


@dataclass(frozen=True)
class PretrainedModel:
    """Centroids saved from the training notebook (``GET /kmeans/pretrained``)."""

    k: int
    hospitals: tuple[tuple[float, float], ...]
    description: str

    @classmethod
    def from_payload(cls, payload: Any) -> PretrainedModel:
        centroids = []
        for item in _as_list(_field(payload, "hospitals"), "hospitals"):
            if not isinstance(item, list) or len(item) < 2:
                raise DecodeError("Each pretrained hospital must be an [x, y] pair")
            centroids.append(
                (_as_number(item[0], "hospitals"), _as_number(item[1], "hospitals"))
            )
        return cls(
            k=_as_int(_field(payload, "k"), "k"),
            hospitals=tuple(centroids),
            description=str(_field(payload, "description")),
        )


@dataclass(frozen=True)
class EnrichedNeighborhood:
    """A neighborhood labeled with the index of the hospital serving it."""

    id: int
    x: float
    y: float
    cluster: int


@dataclass(frozen=True)
class EnrichedResult:
    """A :class:`SimulationResponse` whose neighborhoods carry cluster labels."""

    neighborhoods: tuple[EnrichedNeighborhood, ...]
    hospitals: tuple[Hospital, ...]
    assignments: tuple[int, ...]
    iterations: int
    grid_size: int
    inertia: float
    overall_avg_distance: float
    overall_max_distance: float
    cluster_stats: tuple[ClusterStat, ...] = ()
    distance_bins: tuple[DistanceBin, ...] = ()
