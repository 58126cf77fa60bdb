"""Record envelope: builds portable records and drives the per-kind converters.

Each kind has one entry in ``CONVERSIONS`` pairing its native type, its record
model, the record builder and the dehydrator. Lookups are pure; nothing here
keeps state between calls.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

import structlog
from pydantic import ValidationError

from . import dehydrators
from .config import get_settings
from .enums import WorkoutActivityType, WorkoutEventType
from .errors import HealthKitError, InvalidType, InvalidValue
from .harmonizers import (
    harmonize_activity_summary,
    harmonize_category,
    harmonize_characteristics,
    harmonize_correlation,
    harmonize_electrocardiogram,
    harmonize_heartbeat_series,
    harmonize_quantity,
    harmonize_statistics,
    harmonize_workout,
    harmonize_workout_event,
)
from .identifiers import (
    DataType,
    Kind,
    category_type,
    correlation_type,
    quantity_type,
    resolve_identifier,
)
from .models import (
    ActivitySummaryRecord,
    CategoryRecord,
    CharacteristicsRecord,
    CorrelationRecord,
    ElectrocardiogramRecord,
    HeartbeatSeriesRecord,
    QuantityRecord,
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
    HeartbeatSeriesSample,
    NativeObject,
    QuantitySample,
    StatisticsSample,
    WorkoutEventSample,
    WorkoutSample,
)
from .payloads import Device, PortableModel, Source, SourceRevision
from .units import Unit
from .utils import format_timestamp, start_of_day

logger = structlog.get_logger()


# --------------------------- Envelope fields ---------------------------

def _timestamp(value: Any, field: str) -> str:
    if not isinstance(value, dt.datetime):
        raise InvalidValue(f"Invalid {field} value: {value!r}", field=field)
    if value.utcoffset() is None:
        raise InvalidValue(f"Invalid {field} value: {value!r} has no UTC offset", field=field)
    return format_timestamp(value)


def _source_revision(native: Any) -> SourceRevision:
    if native.source_revision is None:
        raise InvalidValue("Invalid sourceRevision value: missing", field="sourceRevision")
    return SourceRevision.from_native(native.source_revision)


# --------------------------- Record builders ---------------------------

def quantity_record(sample: QuantitySample, unit: Optional[Unit] = None) -> QuantityRecord:
    return QuantityRecord(
        identifier=quantity_type(sample.quantity_type).value,
        start_date=_timestamp(sample.start_date, "startDate"),
        end_date=_timestamp(sample.end_date, "endDate"),
        device=Device.from_native(sample.device),
        source_revision=_source_revision(sample),
        harmonized=harmonize_quantity(sample, unit),
    )


def category_record(sample: CategorySample) -> CategoryRecord:
    return CategoryRecord(
        identifier=category_type(sample.category_type).value,
        start_date=_timestamp(sample.start_date, "startDate"),
        end_date=_timestamp(sample.end_date, "endDate"),
        device=Device.from_native(sample.device),
        source_revision=_source_revision(sample),
        harmonized=harmonize_category(sample),
    )


def correlation_record(sample: CorrelationSample) -> CorrelationRecord:
    """Nested samples are fail-fast: one bad sample fails the correlation."""
    return CorrelationRecord(
        identifier=correlation_type(sample.correlation_type).value,
        start_date=_timestamp(sample.start_date, "startDate"),
        end_date=_timestamp(sample.end_date, "endDate"),
        device=Device.from_native(sample.device),
        source_revision=_source_revision(sample),
        harmonized=harmonize_correlation(
            sample,
            [quantity_record(q) for q in sample.quantity_samples],
            [category_record(c) for c in sample.category_samples],
        ),
    )


def statistics_record(sample: StatisticsSample, unit: Optional[Unit] = None) -> StatisticsRecord:
    return StatisticsRecord(
        identifier=quantity_type(sample.quantity_type).value,
        start_date=_timestamp(sample.start_date, "startDate"),
        end_date=_timestamp(sample.end_date, "endDate"),
        sources=(
            [Source.from_native(s) for s in sample.sources] if sample.sources is not None else None
        ),
        harmonized=harmonize_statistics(sample, unit),
    )


def activity_summary_record(summary: ActivitySummarySample) -> ActivitySummaryRecord:
    if not isinstance(summary.date, dt.date):
        raise InvalidValue(f"Invalid date value: {summary.date!r}", field="date")
    return ActivitySummaryRecord(
        identifier=DataType.ACTIVITY_SUMMARY.value,
        date=format_timestamp(start_of_day(summary.date)),
        harmonized=harmonize_activity_summary(summary),
    )


def workout_event_record(
    event: WorkoutEventSample, identifier: Optional[str] = DataType.WORKOUT_EVENT.value
) -> WorkoutEventRecord:
    return WorkoutEventRecord(
        identifier=identifier,
        type=WorkoutEventType.resolve(event.type, "type").label,
        start_date=_timestamp(event.start_date, "startDate"),
        end_date=_timestamp(event.end_date, "endDate"),
        duration=event.duration,
        harmonized=harmonize_workout_event(event),
    )


def _workout_events(workout: WorkoutSample) -> list[WorkoutEventRecord]:
    strict = get_settings().WORKOUT_EVENT_POLICY == "strict"
    events: list[WorkoutEventRecord] = []
    for index, event in enumerate(workout.workout_events):
        try:
            events.append(workout_event_record(event, identifier=None))
        except HealthKitError as exc:
            if strict:
                raise
            logger.warning(
                "workout_event_dropped",
                index=index,
                field=exc.field,
                error=exc.message,
            )
    return events


def workout_record(workout: WorkoutSample) -> WorkoutRecord:
    """Build a workout record.

    Events that fail to harmonize are dropped unless the workout event policy
    is ``strict``, in which case the first failure fails the workout.
    """
    activity = WorkoutActivityType.resolve(workout.activity_type, "value")
    return WorkoutRecord(
        identifier=DataType.WORKOUT.value,
        start_date=_timestamp(workout.start_date, "startDate"),
        end_date=_timestamp(workout.end_date, "endDate"),
        workout_name=activity.label,
        device=Device.from_native(workout.device),
        source_revision=_source_revision(workout),
        duration=workout.duration,
        workout_events=_workout_events(workout),
        harmonized=harmonize_workout(workout),
    )


def electrocardiogram_record(sample: ElectrocardiogramSample) -> ElectrocardiogramRecord:
    return ElectrocardiogramRecord(
        identifier=DataType.ELECTROCARDIOGRAM.value,
        start_date=_timestamp(sample.start_date, "startDate"),
        end_date=_timestamp(sample.end_date, "endDate"),
        device=Device.from_native(sample.device),
        source_revision=_source_revision(sample),
        number_of_measurements=sample.number_of_voltage_measurements,
        harmonized=harmonize_electrocardiogram(sample),
    )


def characteristics_record(sample: CharacteristicsSample) -> CharacteristicsRecord:
    return CharacteristicsRecord(
        identifier=DataType.CHARACTERISTICS.value,
        harmonized=harmonize_characteristics(sample),
    )


def heartbeat_series_record(sample: HeartbeatSeriesSample) -> HeartbeatSeriesRecord:
    return HeartbeatSeriesRecord(
        identifier=DataType.HEARTBEAT_SERIES.value,
        start_date=_timestamp(sample.start_date, "startDate"),
        end_date=_timestamp(sample.end_date, "endDate"),
        device=Device.from_native(sample.device),
        source_revision=_source_revision(sample),
        harmonized=harmonize_heartbeat_series(sample),
    )


# --------------------------- Kind table ---------------------------

@dataclass(frozen=True)
class Conversion:
    kind: Kind
    native: type
    record: type
    build: Callable[[Any], Any]
    dehydrate: Callable[[Any], Any]


CONVERSIONS: Dict[Kind, Conversion] = {
    c.kind: c
    for c in (
        Conversion(Kind.QUANTITY, QuantitySample, QuantityRecord,
                   quantity_record, dehydrators.dehydrate_quantity),
        Conversion(Kind.CATEGORY, CategorySample, CategoryRecord,
                   category_record, dehydrators.dehydrate_category),
        Conversion(Kind.CORRELATION, CorrelationSample, CorrelationRecord,
                   correlation_record, dehydrators.dehydrate_correlation),
        Conversion(Kind.STATISTICS, StatisticsSample, StatisticsRecord,
                   statistics_record, dehydrators.dehydrate_statistics),
        Conversion(Kind.ACTIVITY_SUMMARY, ActivitySummarySample, ActivitySummaryRecord,
                   activity_summary_record, dehydrators.dehydrate_activity_summary),
        Conversion(Kind.WORKOUT, WorkoutSample, WorkoutRecord,
                   workout_record, dehydrators.dehydrate_workout),
        Conversion(Kind.WORKOUT_EVENT, WorkoutEventSample, WorkoutEventRecord,
                   workout_event_record, dehydrators.dehydrate_workout_event),
        Conversion(Kind.ELECTROCARDIOGRAM, ElectrocardiogramSample, ElectrocardiogramRecord,
                   electrocardiogram_record, dehydrators.dehydrate_electrocardiogram),
        Conversion(Kind.CHARACTERISTICS, CharacteristicsSample, CharacteristicsRecord,
                   characteristics_record, dehydrators.dehydrate_characteristics),
        Conversion(Kind.HEARTBEAT_SERIES, HeartbeatSeriesSample, HeartbeatSeriesRecord,
                   heartbeat_series_record, dehydrators.dehydrate_heartbeat_series),
    )
}

_BY_NATIVE: Dict[type, Conversion] = {c.native: c for c in CONVERSIONS.values()}
_BY_RECORD: Dict[type, Conversion] = {c.record: c for c in CONVERSIONS.values()}


def conversion_for(kind: Any) -> Conversion:
    return CONVERSIONS[Kind.make(kind)]


# --------------------------- Public entry points ---------------------------

def harmonize(native: NativeObject) -> PortableModel:
    """Convert one native object into its portable record."""
    conversion = _BY_NATIVE.get(type(native))
    if conversion is None:
        raise InvalidType(
            f"{type(native).__name__} is not a supported native object", field="native"
        )
    logger.debug("harmonize", kind=conversion.kind.value)
    return conversion.build(native)


def load_record(data: Mapping[str, Any], kind: Any = None) -> PortableModel:
    """Parse a portable mapping into its record model.

    Without ``kind`` the record's ``identifier`` picks it; statistics records
    share quantity identifiers and need their kind passed explicitly.
    """
    if not isinstance(data, Mapping):
        raise InvalidValue(f"Record must be a mapping, got {type(data).__name__}", field="record")
    if kind is None:
        kind = resolve_identifier(data.get("identifier"))
    conversion = conversion_for(kind)
    try:
        return conversion.record.model_validate(data)
    except ValidationError as exc:
        error = exc.errors()[0]
        location = ".".join(str(part) for part in error["loc"])
        raise InvalidValue(
            f"Invalid {conversion.kind.value} record: {location}: {error['msg']}", field=location or None
        ) from exc


def dehydrate(record: Any, kind: Any = None) -> NativeObject:
    """Rebuild the native object from a record model or a portable mapping."""
    if isinstance(record, Mapping):
        record = load_record(record, kind)
    conversion = _BY_RECORD.get(type(record))
    if conversion is None:
        raise InvalidType(f"{type(record).__name__} is not a portable record", field="record")
    logger.debug("dehydrate", kind=conversion.kind.value)
    return conversion.dehydrate(record)


def round_trip(record: Any, kind: Any = None) -> PortableModel:
    return harmonize(dehydrate(record, kind))
