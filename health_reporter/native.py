"""Native object shapes handed over by the platform-access layer."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple, Union

from .errors import InvalidValue
from .units import Quantity

__all__ = [
    "Quantity",
    "NativeDevice",
    "NativeSource",
    "OperatingSystemVersion",
    "NativeSourceRevision",
    "QuantitySample",
    "CategorySample",
    "CorrelationSample",
    "StatisticsSample",
    "ActivitySummarySample",
    "WorkoutEventSample",
    "WorkoutSample",
    "VoltageMeasurement",
    "ElectrocardiogramSample",
    "CharacteristicsSample",
    "Heartbeat",
    "HeartbeatSeriesSample",
    "NativeObject",
]


def _freeze(obj: Any, name: str) -> None:
    object.__setattr__(obj, name, tuple(getattr(obj, name) or ()))


@dataclass(frozen=True)
class NativeDevice:
    name: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    hardware_version: Optional[str] = None
    firmware_version: Optional[str] = None
    software_version: Optional[str] = None
    local_identifier: Optional[str] = None
    udi_device_identifier: Optional[str] = None


@dataclass(frozen=True)
class NativeSource:
    name: str
    bundle_identifier: str


@dataclass(frozen=True)
class OperatingSystemVersion:
    major_version: int
    minor_version: int = 0
    patch_version: int = 0

    def __post_init__(self) -> None:
        for name in ("major_version", "minor_version", "patch_version"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidValue(f"{name}: {value!r} is not a non-negative integer", field=name)

    def __str__(self) -> str:
        return f"{self.major_version}.{self.minor_version}.{self.patch_version}"


@dataclass(frozen=True)
class NativeSourceRevision:
    source: NativeSource
    version: Optional[str] = None
    product_type: Optional[str] = None
    operating_system_version: OperatingSystemVersion = field(
        default_factory=lambda: OperatingSystemVersion(0)
    )

    @property
    def system_version(self) -> str:
        return str(self.operating_system_version)


@dataclass(frozen=True)
class QuantitySample:
    quantity_type: str
    quantity: Optional[Quantity]
    start_date: dt.datetime
    end_date: dt.datetime
    source_revision: Optional[NativeSourceRevision] = None
    device: Optional[NativeDevice] = None
    metadata: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class CategorySample:
    category_type: str
    value: int
    start_date: dt.datetime
    end_date: dt.datetime
    source_revision: Optional[NativeSourceRevision] = None
    device: Optional[NativeDevice] = None
    metadata: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class CorrelationSample:
    """A set of quantity and category samples recorded together.

    ``objects`` is kept ordered quantities first, then categories.
    """

    correlation_type: str
    start_date: dt.datetime
    end_date: dt.datetime
    objects: Tuple[Union[QuantitySample, CategorySample], ...] = ()
    source_revision: Optional[NativeSourceRevision] = None
    device: Optional[NativeDevice] = None
    metadata: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        objects = tuple(self.objects or ())
        ordered = [o for o in objects if isinstance(o, QuantitySample)]
        ordered += [o for o in objects if not isinstance(o, QuantitySample)]
        object.__setattr__(self, "objects", tuple(ordered))

    @property
    def quantity_samples(self) -> Tuple[QuantitySample, ...]:
        return tuple(o for o in self.objects if isinstance(o, QuantitySample))

    @property
    def category_samples(self) -> Tuple[CategorySample, ...]:
        return tuple(o for o in self.objects if isinstance(o, CategorySample))


@dataclass(frozen=True)
class StatisticsSample:
    quantity_type: str
    start_date: dt.datetime
    end_date: dt.datetime
    sources: Optional[Tuple[NativeSource, ...]] = None
    sum_quantity: Optional[Quantity] = None
    average_quantity: Optional[Quantity] = None
    most_recent_quantity: Optional[Quantity] = None
    minimum_quantity: Optional[Quantity] = None
    maximum_quantity: Optional[Quantity] = None

    def __post_init__(self) -> None:
        if self.sources is not None:
            _freeze(self, "sources")


@dataclass(frozen=True)
class ActivitySummarySample:
    date: dt.date
    active_energy_burned: Optional[Quantity] = None
    active_energy_burned_goal: Optional[Quantity] = None
    apple_exercise_time: Optional[Quantity] = None
    apple_exercise_time_goal: Optional[Quantity] = None
    apple_stand_hours: Optional[Quantity] = None
    apple_stand_hours_goal: Optional[Quantity] = None


@dataclass(frozen=True)
class WorkoutEventSample:
    type: int
    start_date: dt.datetime
    end_date: dt.datetime
    metadata: Optional[Mapping[str, Any]] = None

    @property
    def duration(self) -> float:
        return (self.end_date - self.start_date).total_seconds()


@dataclass(frozen=True)
class WorkoutSample:
    activity_type: int
    start_date: dt.datetime
    end_date: dt.datetime
    duration: float
    source_revision: Optional[NativeSourceRevision] = None
    device: Optional[NativeDevice] = None
    workout_events: Tuple[WorkoutEventSample, ...] = ()
    total_energy_burned: Optional[Quantity] = None
    total_distance: Optional[Quantity] = None
    total_swimming_stroke_count: Optional[Quantity] = None
    total_flights_climbed: Optional[Quantity] = None
    metadata: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        _freeze(self, "workout_events")


@dataclass(frozen=True)
class VoltageMeasurement:
    time_since_sample_start: float
    quantity: Optional[Quantity]


@dataclass(frozen=True)
class ElectrocardiogramSample:
    start_date: dt.datetime
    end_date: dt.datetime
    number_of_voltage_measurements: int
    classification: int
    symptoms_status: int
    sampling_frequency: Optional[Quantity] = None
    average_heart_rate: Optional[Quantity] = None
    voltage_measurements: Tuple[VoltageMeasurement, ...] = ()
    source_revision: Optional[NativeSourceRevision] = None
    device: Optional[NativeDevice] = None
    metadata: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        _freeze(self, "voltage_measurements")


@dataclass(frozen=True)
class CharacteristicsSample:
    biological_sex: int = 0
    blood_type: int = 0
    skin_type: int = 0
    wheelchair_use: int = 0
    date_of_birth: Optional[dt.date] = None


@dataclass(frozen=True)
class Heartbeat:
    time_since_series_start: float
    preceded_by_gap: bool = False


@dataclass(frozen=True)
class HeartbeatSeriesSample:
    start_date: dt.datetime
    end_date: dt.datetime
    beats: Tuple[Heartbeat, ...] = ()
    source_revision: Optional[NativeSourceRevision] = None
    device: Optional[NativeDevice] = None
    metadata: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        _freeze(self, "beats")


NativeObject = Union[
    QuantitySample,
    CategorySample,
    CorrelationSample,
    StatisticsSample,
    ActivitySummarySample,
    WorkoutSample,
    WorkoutEventSample,
    ElectrocardiogramSample,
    CharacteristicsSample,
    HeartbeatSeriesSample,
]
