"""Portable records: one envelope plus one harmonized payload per kind."""

from __future__ import annotations

from typing import ClassVar, Dict, List, Optional, Tuple

from pydantic import Field, model_validator

from .identifiers import DataType, Kind
from .payloads import Device, PortableModel, Source, SourceRevision

Metadata = Dict[str, str]


class HarmonizedPayload(PortableModel):
    """Kind-specific payload.

    Every name in ``quantity_fields`` has a ``<name>_unit`` companion; the
    pair is either fully present or fully absent.
    """

    quantity_fields: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def check_unit_pairs(self) -> "HarmonizedPayload":
        for name in self.quantity_fields:
            value = getattr(self, name)
            unit = getattr(self, f"{name}_unit")
            if (value is None) != (unit is None):
                raise ValueError(
                    f"{name} and {name}Unit must be both present or both absent"
                )
        return self


# payloads

class QuantityHarmonized(HarmonizedPayload):
    value: float
    unit: str
    metadata: Optional[Metadata] = None


class CategoryHarmonized(HarmonizedPayload):
    value: int
    description: str
    metadata: Optional[Metadata] = None


class StatisticsHarmonized(HarmonizedPayload):
    quantity_fields: ClassVar[Tuple[str, ...]] = ("summary", "average", "recent", "min", "max")

    summary: Optional[float] = None
    summary_unit: Optional[str] = None
    average: Optional[float] = None
    average_unit: Optional[str] = None
    recent: Optional[float] = None
    recent_unit: Optional[str] = None
    min: Optional[float] = None
    min_unit: Optional[str] = None
    max: Optional[float] = None
    max_unit: Optional[str] = None


class ActivitySummaryHarmonized(HarmonizedPayload):
    quantity_fields: ClassVar[Tuple[str, ...]] = (
        "active_energy_burned",
        "active_energy_burned_goal",
        "apple_exercise_time",
        "apple_exercise_time_goal",
        "apple_stand_hours",
        "apple_stand_hours_goal",
    )

    active_energy_burned: Optional[float] = None
    active_energy_burned_unit: Optional[str] = None
    active_energy_burned_goal: Optional[float] = None
    active_energy_burned_goal_unit: Optional[str] = None
    apple_exercise_time: Optional[float] = None
    apple_exercise_time_unit: Optional[str] = None
    apple_exercise_time_goal: Optional[float] = None
    apple_exercise_time_goal_unit: Optional[str] = None
    apple_stand_hours: Optional[float] = None
    apple_stand_hours_unit: Optional[str] = None
    apple_stand_hours_goal: Optional[float] = None
    apple_stand_hours_goal_unit: Optional[str] = None


class WorkoutHarmonized(HarmonizedPayload):
    quantity_fields: ClassVar[Tuple[str, ...]] = (
        "total_energy_burned",
        "total_distance",
        "total_swimming_stroke_count",
        "total_flights_climbed",
    )

    value: int
    total_energy_burned: Optional[float] = None
    total_energy_burned_unit: Optional[str] = None
    total_distance: Optional[float] = None
    total_distance_unit: Optional[str] = None
    total_swimming_stroke_count: Optional[float] = None
    total_swimming_stroke_count_unit: Optional[str] = None
    total_flights_climbed: Optional[float] = None
    total_flights_climbed_unit: Optional[str] = None
    metadata: Optional[Metadata] = None


class WorkoutEventHarmonized(HarmonizedPayload):
    value: int
    metadata: Optional[Metadata] = None


class VoltageMeasurementHarmonized(HarmonizedPayload):
    value: float
    unit: str
    time_since_sample_start: float


class ElectrocardiogramHarmonized(HarmonizedPayload):
    quantity_fields: ClassVar[Tuple[str, ...]] = ("average_heart_rate", "sampling_frequency")

    average_heart_rate: Optional[float] = None
    average_heart_rate_unit: Optional[str] = None
    sampling_frequency: Optional[float] = None
    sampling_frequency_unit: Optional[str] = None
    classification: int
    symptoms_status: int
    count: int
    voltage_measurements: List[VoltageMeasurementHarmonized] = Field(default_factory=list)
    metadata: Optional[Metadata] = None


class CharacteristicsHarmonized(HarmonizedPayload):
    biological_sex: int
    birthday: Optional[str] = None
    blood_type: int
    skin_type: int
    wheelchair_use: int


class HeartbeatSeriesHarmonized(HarmonizedPayload):
    count: int
    ibi_array: List[float] = Field(default_factory=list)
    index_array: List[int] = Field(default_factory=list)
    metadata: Optional[Metadata] = None


# records

class Record(PortableModel):
    kind: ClassVar[Kind]

    identifier: str


class SampleRecord(Record):
    start_date: str
    end_date: str
    device: Optional[Device] = None
    source_revision: SourceRevision


class QuantityRecord(SampleRecord):
    kind: ClassVar[Kind] = Kind.QUANTITY

    harmonized: QuantityHarmonized


class CategoryRecord(SampleRecord):
    kind: ClassVar[Kind] = Kind.CATEGORY

    harmonized: CategoryHarmonized


class CorrelationHarmonized(HarmonizedPayload):
    quantity_samples: List[QuantityRecord] = Field(default_factory=list)
    category_samples: List[CategoryRecord] = Field(default_factory=list)
    metadata: Optional[Metadata] = None


class CorrelationRecord(SampleRecord):
    kind: ClassVar[Kind] = Kind.CORRELATION

    harmonized: CorrelationHarmonized


class StatisticsRecord(Record):
    kind: ClassVar[Kind] = Kind.STATISTICS

    start_date: str
    end_date: str
    sources: Optional[List[Source]] = None
    harmonized: StatisticsHarmonized


class ActivitySummaryRecord(Record):
    kind: ClassVar[Kind] = Kind.ACTIVITY_SUMMARY

    identifier: str = DataType.ACTIVITY_SUMMARY.value
    date: Optional[str] = None
    harmonized: ActivitySummaryHarmonized


class WorkoutEventRecord(PortableModel):
    kind: ClassVar[Kind] = Kind.WORKOUT_EVENT

    # set on standalone event records, left out when nested in a workout
    identifier: Optional[str] = None
    type: str
    start_date: str
    end_date: str
    duration: float
    harmonized: WorkoutEventHarmonized


class WorkoutRecord(SampleRecord):
    kind: ClassVar[Kind] = Kind.WORKOUT

    identifier: str = DataType.WORKOUT.value
    workout_name: str
    duration: float
    workout_events: List[WorkoutEventRecord] = Field(default_factory=list)
    harmonized: WorkoutHarmonized


class ElectrocardiogramRecord(SampleRecord):
    kind: ClassVar[Kind] = Kind.ELECTROCARDIOGRAM

    identifier: str = DataType.ELECTROCARDIOGRAM.value
    number_of_measurements: int
    harmonized: ElectrocardiogramHarmonized


class CharacteristicsRecord(Record):
    kind: ClassVar[Kind] = Kind.CHARACTERISTICS

    identifier: str = DataType.CHARACTERISTICS.value
    harmonized: CharacteristicsHarmonized


class HeartbeatSeriesRecord(SampleRecord):
    kind: ClassVar[Kind] = Kind.HEARTBEAT_SERIES

    identifier: str = DataType.HEARTBEAT_SERIES.value
    harmonized: HeartbeatSeriesHarmonized
