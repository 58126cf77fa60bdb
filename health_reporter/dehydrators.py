"""Portable record -> reconstructed native object, one rule per kind."""

from __future__ import annotations

import datetime as dt
from typing import Dict, Optional, Tuple

from .enums import (
    BiologicalSex,
    BloodType,
    ElectrocardiogramClassification,
    ElectrocardiogramSymptomsStatus,
    FitzpatrickSkinType,
    WheelchairUse,
    WorkoutActivityType,
    WorkoutEventType,
)
from .errors import InvalidType, InvalidValue
from .identifiers import DataType, category_type, correlation_type, expect_identifier, quantity_type
from .models import (
    ActivitySummaryRecord,
    CategoryRecord,
    CharacteristicsRecord,
    CorrelationRecord,
    ElectrocardiogramRecord,
    HeartbeatSeriesRecord,
    QuantityRecord,
    SampleRecord,
    StatisticsRecord,
    WorkoutEventRecord,
    WorkoutRecord,
)
from .native import (
    ActivitySummarySample,
    CategorySample,
    CharacteristicsSample,
    CorrelationSample,
    ElectrocardiogramSample,
    Heartbeat,
    HeartbeatSeriesSample,
    NativeDevice,
    NativeSourceRevision,
    QuantitySample,
    StatisticsSample,
    VoltageMeasurement,
    WorkoutEventSample,
    WorkoutSample,
)
from .units import decode, decode_optional
from .utils import parse_date, parse_timestamp


def _interval(start_date: str, end_date: str) -> Tuple[dt.datetime, dt.datetime]:
    return parse_timestamp(start_date, "startDate"), parse_timestamp(end_date, "endDate")


def _provenance(record: SampleRecord) -> Tuple[Optional[NativeDevice], NativeSourceRevision]:
    device = record.device.to_native() if record.device is not None else None
    return device, record.source_revision.to_native()


def _metadata(metadata: Optional[Dict[str, str]]) -> Optional[Dict[str, str]]:
    return dict(metadata) if metadata is not None else None


def dehydrate_quantity(record: QuantityRecord) -> QuantitySample:
    qtype = quantity_type(record.identifier)
    start, end = _interval(record.start_date, record.end_date)
    device, source_revision = _provenance(record)
    return QuantitySample(
        quantity_type=qtype.value,
        quantity=decode(record.harmonized.value, record.harmonized.unit, "quantity"),
        start_date=start,
        end_date=end,
        source_revision=source_revision,
        device=device,
        metadata=_metadata(record.harmonized.metadata),
    )


def dehydrate_category(record: CategoryRecord) -> CategorySample:
    ctype = category_type(record.identifier)
    value = ctype.values.resolve(record.harmonized.value, "value")
    start, end = _interval(record.start_date, record.end_date)
    device, source_revision = _provenance(record)
    return CategorySample(
        category_type=ctype.value,
        value=value,
        start_date=start,
        end_date=end,
        source_revision=source_revision,
        device=device,
        metadata=_metadata(record.harmonized.metadata),
    )


def dehydrate_correlation(record: CorrelationRecord) -> CorrelationSample:
    ctype = correlation_type(record.identifier)
    start, end = _interval(record.start_date, record.end_date)
    device, source_revision = _provenance(record)
    objects = [dehydrate_quantity(q) for q in record.harmonized.quantity_samples]
    objects += [dehydrate_category(c) for c in record.harmonized.category_samples]
    return CorrelationSample(
        correlation_type=ctype.value,
        start_date=start,
        end_date=end,
        objects=tuple(objects),
        source_revision=source_revision,
        device=device,
        metadata=_metadata(record.harmonized.metadata),
    )


def dehydrate_statistics(record: StatisticsRecord) -> StatisticsSample:
    qtype = quantity_type(record.identifier)
    start, end = _interval(record.start_date, record.end_date)
    h = record.harmonized
    return StatisticsSample(
        quantity_type=qtype.value,
        start_date=start,
        end_date=end,
        sources=(
            tuple(s.to_native() for s in record.sources) if record.sources is not None else None
        ),
        sum_quantity=decode_optional(h.summary, h.summary_unit, "summary"),
        average_quantity=decode_optional(h.average, h.average_unit, "average"),
        most_recent_quantity=decode_optional(h.recent, h.recent_unit, "recent"),
        minimum_quantity=decode_optional(h.min, h.min_unit, "min"),
        maximum_quantity=decode_optional(h.max, h.max_unit, "max"),
    )


def dehydrate_activity_summary(record: ActivitySummaryRecord) -> ActivitySummarySample:
    expect_identifier(record.identifier, DataType.ACTIVITY_SUMMARY)
    if record.date is None:
        raise InvalidValue("ActivitySummary date is missing", field="date")
    h = record.harmonized
    return ActivitySummarySample(
        date=parse_timestamp(record.date, "date").date(),
        active_energy_burned=decode_optional(
            h.active_energy_burned, h.active_energy_burned_unit, "activeEnergyBurned"
        ),
        active_energy_burned_goal=decode_optional(
            h.active_energy_burned_goal, h.active_energy_burned_goal_unit, "activeEnergyBurnedGoal"
        ),
        apple_exercise_time=decode_optional(
            h.apple_exercise_time, h.apple_exercise_time_unit, "appleExerciseTime"
        ),
        apple_exercise_time_goal=decode_optional(
            h.apple_exercise_time_goal, h.apple_exercise_time_goal_unit, "appleExerciseTimeGoal"
        ),
        apple_stand_hours=decode_optional(
            h.apple_stand_hours, h.apple_stand_hours_unit, "appleStandHours"
        ),
        apple_stand_hours_goal=decode_optional(
            h.apple_stand_hours_goal, h.apple_stand_hours_goal_unit, "appleStandHoursGoal"
        ),
    )


def dehydrate_workout_event(record: WorkoutEventRecord) -> WorkoutEventSample:
    if record.identifier is not None:
        expect_identifier(record.identifier, DataType.WORKOUT_EVENT)
    event_type = WorkoutEventType.resolve(record.harmonized.value, "value")
    if record.type != event_type.label:
        raise InvalidType(
            f"Workout event type: {record.type} does not match value {event_type.value}",
            field="type",
        )
    start, end = _interval(record.start_date, record.end_date)
    return WorkoutEventSample(
        type=event_type,
        start_date=start,
        end_date=end,
        metadata=_metadata(record.harmonized.metadata),
    )


def dehydrate_workout(record: WorkoutRecord) -> WorkoutSample:
    """Rebuild a workout; any nested event that fails fails the workout."""
    expect_identifier(record.identifier, DataType.WORKOUT)
    h = record.harmonized
    activity = WorkoutActivityType.resolve(h.value, "value")
    start, end = _interval(record.start_date, record.end_date)
    device, source_revision = _provenance(record)
    return WorkoutSample(
        activity_type=activity,
        start_date=start,
        end_date=end,
        duration=record.duration,
        source_revision=source_revision,
        device=device,
        workout_events=tuple(dehydrate_workout_event(e) for e in record.workout_events),
        total_energy_burned=decode_optional(
            h.total_energy_burned, h.total_energy_burned_unit, "totalEnergyBurned"
        ),
        total_distance=decode_optional(h.total_distance, h.total_distance_unit, "totalDistance"),
        total_swimming_stroke_count=decode_optional(
            h.total_swimming_stroke_count,
            h.total_swimming_stroke_count_unit,
            "totalSwimmingStrokeCount",
        ),
        total_flights_climbed=decode_optional(
            h.total_flights_climbed, h.total_flights_climbed_unit, "totalFlightsClimbed"
        ),
        metadata=_metadata(h.metadata),
    )


def dehydrate_electrocardiogram(record: ElectrocardiogramRecord) -> ElectrocardiogramSample:
    expect_identifier(record.identifier, DataType.ELECTROCARDIOGRAM)
    h = record.harmonized
    classification = ElectrocardiogramClassification.resolve(h.classification, "classification")
    symptoms = ElectrocardiogramSymptomsStatus.resolve(h.symptoms_status, "symptomsStatus")
    start, end = _interval(record.start_date, record.end_date)
    device, source_revision = _provenance(record)
    measurements = tuple(
        VoltageMeasurement(
            time_since_sample_start=m.time_since_sample_start,
            quantity=decode(m.value, m.unit, f"voltageMeasurements[{index}]"),
        )
        for index, m in enumerate(h.voltage_measurements)
    )
    return ElectrocardiogramSample(
        start_date=start,
        end_date=end,
        number_of_voltage_measurements=record.number_of_measurements,
        classification=classification,
        symptoms_status=symptoms,
        sampling_frequency=decode_optional(
            h.sampling_frequency, h.sampling_frequency_unit, "samplingFrequency"
        ),
        average_heart_rate=decode_optional(
            h.average_heart_rate, h.average_heart_rate_unit, "averageHeartRate"
        ),
        voltage_measurements=measurements,
        source_revision=source_revision,
        device=device,
        metadata=_metadata(h.metadata),
    )


def dehydrate_characteristics(record: CharacteristicsRecord) -> CharacteristicsSample:
    expect_identifier(record.identifier, DataType.CHARACTERISTICS)
    h = record.harmonized
    return CharacteristicsSample(
        biological_sex=BiologicalSex.resolve(h.biological_sex, "biologicalSex"),
        blood_type=BloodType.resolve(h.blood_type, "bloodType"),
        skin_type=FitzpatrickSkinType.resolve(h.skin_type, "skinType"),
        wheelchair_use=WheelchairUse.resolve(h.wheelchair_use, "wheelchairUse"),
        date_of_birth=parse_date(h.birthday, "birthday") if h.birthday is not None else None,
    )


def dehydrate_heartbeat_series(record: HeartbeatSeriesRecord) -> HeartbeatSeriesSample:
    expect_identifier(record.identifier, DataType.HEARTBEAT_SERIES)
    h = record.harmonized
    gaps = set(h.index_array)
    if any(i < 0 or i >= len(h.ibi_array) for i in gaps):
        raise InvalidValue(f"indexArray {h.index_array} points outside ibiArray", field="indexArray")
    start, end = _interval(record.start_date, record.end_date)
    device, source_revision = _provenance(record)
    return HeartbeatSeriesSample(
        start_date=start,
        end_date=end,
        beats=tuple(
            Heartbeat(time_since_series_start=t, preceded_by_gap=i in gaps)
            for i, t in enumerate(h.ibi_array)
        ),
        source_revision=source_revision,
        device=device,
        metadata=_metadata(h.metadata),
    )
