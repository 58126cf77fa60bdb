"""Native object -> harmonized payload, one rule per kind.

Quantities are written in a unit fixed per field; enumerations keep their raw
codes. The first missing required attribute raises ``InvalidValue`` naming it.
"""

from __future__ import annotations

from typing import Optional, Sequence

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
from .identifiers import category_type, correlation_type, quantity_type
from .models import (
    ActivitySummaryHarmonized,
    CategoryHarmonized,
    CategoryRecord,
    CharacteristicsHarmonized,
    CorrelationHarmonized,
    ElectrocardiogramHarmonized,
    HeartbeatSeriesHarmonized,
    QuantityHarmonized,
    QuantityRecord,
    StatisticsHarmonized,
    VoltageMeasurementHarmonized,
    WorkoutEventHarmonized,
    WorkoutHarmonized,
)
from .native import (
    ActivitySummarySample,
    CategorySample,
    CharacteristicsSample,
    CorrelationSample,
    ElectrocardiogramSample,
    HeartbeatSeriesSample,
    QuantitySample,
    StatisticsSample,
    WorkoutEventSample,
    WorkoutSample,
)
from .payloads import normalize_metadata
from .units import Unit, encode, encode_optional
from .utils import format_date

ENERGY_UNIT = Unit.LARGE_CALORIE
DISTANCE_UNIT = Unit.METER
COUNT_UNIT = Unit.COUNT
EXERCISE_TIME_UNIT = Unit.MINUTE
HEART_RATE_UNIT = Unit.COUNT_PER_MINUTE
SAMPLING_FREQUENCY_UNIT = Unit.HERTZ
VOLTAGE_UNIT = Unit.MICROVOLT


def harmonize_quantity(sample: QuantitySample, unit: Optional[Unit] = None) -> QuantityHarmonized:
    unit = unit or quantity_type(sample.quantity_type).preferred_unit
    value, unit_string = encode(sample.quantity, unit, "quantity")
    return QuantityHarmonized(
        value=value,
        unit=unit_string,
        metadata=normalize_metadata(sample.metadata),
    )


def harmonize_category(sample: CategorySample) -> CategoryHarmonized:
    values = category_type(sample.category_type).values
    member = values.resolve(sample.value, "value")
    return CategoryHarmonized(
        value=int(member),
        description=member.label,
        metadata=normalize_metadata(sample.metadata),
    )


def harmonize_correlation(
    sample: CorrelationSample,
    quantity_samples: Sequence[QuantityRecord],
    category_samples: Sequence[CategoryRecord],
) -> CorrelationHarmonized:
    """Assemble the payload from nested records already built by the envelope."""
    correlation_type(sample.correlation_type)
    return CorrelationHarmonized(
        quantity_samples=list(quantity_samples),
        category_samples=list(category_samples),
        metadata=normalize_metadata(sample.metadata),
    )


def harmonize_statistics(sample: StatisticsSample, unit: Optional[Unit] = None) -> StatisticsHarmonized:
    unit = unit or quantity_type(sample.quantity_type).preferred_unit
    summary, summary_unit = encode_optional(sample.sum_quantity, unit, "summary")
    average, average_unit = encode_optional(sample.average_quantity, unit, "average")
    recent, recent_unit = encode_optional(sample.most_recent_quantity, unit, "recent")
    minimum, min_unit = encode_optional(sample.minimum_quantity, unit, "min")
    maximum, max_unit = encode_optional(sample.maximum_quantity, unit, "max")
    return StatisticsHarmonized(
        summary=summary,
        summary_unit=summary_unit,
        average=average,
        average_unit=average_unit,
        recent=recent,
        recent_unit=recent_unit,
        min=minimum,
        min_unit=min_unit,
        max=maximum,
        max_unit=max_unit,
    )


def harmonize_activity_summary(summary: ActivitySummarySample) -> ActivitySummaryHarmonized:
    energy, energy_unit = encode(summary.active_energy_burned, ENERGY_UNIT, "activeEnergyBurned")
    energy_goal, energy_goal_unit = encode(
        summary.active_energy_burned_goal, ENERGY_UNIT, "activeEnergyBurnedGoal"
    )
    exercise, exercise_unit = encode(
        summary.apple_exercise_time, EXERCISE_TIME_UNIT, "appleExerciseTime"
    )
    exercise_goal, exercise_goal_unit = encode(
        summary.apple_exercise_time_goal, EXERCISE_TIME_UNIT, "appleExerciseTimeGoal"
    )
    stand, stand_unit = encode(summary.apple_stand_hours, COUNT_UNIT, "appleStandHours")
    stand_goal, stand_goal_unit = encode(
        summary.apple_stand_hours_goal, COUNT_UNIT, "appleStandHoursGoal"
    )
    return ActivitySummaryHarmonized(
        active_energy_burned=energy,
        active_energy_burned_unit=energy_unit,
        active_energy_burned_goal=energy_goal,
        active_energy_burned_goal_unit=energy_goal_unit,
        apple_exercise_time=exercise,
        apple_exercise_time_unit=exercise_unit,
        apple_exercise_time_goal=exercise_goal,
        apple_exercise_time_goal_unit=exercise_goal_unit,
        apple_stand_hours=stand,
        apple_stand_hours_unit=stand_unit,
        apple_stand_hours_goal=stand_goal,
        apple_stand_hours_goal_unit=stand_goal_unit,
    )


def harmonize_workout(workout: WorkoutSample) -> WorkoutHarmonized:
    activity = WorkoutActivityType.resolve(workout.activity_type, "value")
    energy, energy_unit = encode(workout.total_energy_burned, ENERGY_UNIT, "totalEnergyBurned")
    distance, distance_unit = encode(workout.total_distance, DISTANCE_UNIT, "totalDistance")
    strokes, strokes_unit = encode_optional(
        workout.total_swimming_stroke_count, COUNT_UNIT, "totalSwimmingStrokeCount"
    )
    flights, flights_unit = encode_optional(
        workout.total_flights_climbed, COUNT_UNIT, "totalFlightsClimbed"
    )
    return WorkoutHarmonized(
        value=int(activity),
        total_energy_burned=energy,
        total_energy_burned_unit=energy_unit,
        total_distance=distance,
        total_distance_unit=distance_unit,
        total_swimming_stroke_count=strokes,
        total_swimming_stroke_count_unit=strokes_unit,
        total_flights_climbed=flights,
        total_flights_climbed_unit=flights_unit,
        metadata=normalize_metadata(workout.metadata),
    )


def harmonize_workout_event(event: WorkoutEventSample) -> WorkoutEventHarmonized:
    event_type = WorkoutEventType.resolve(event.type, "value")
    return WorkoutEventHarmonized(
        value=int(event_type),
        metadata=normalize_metadata(event.metadata),
    )


def harmonize_electrocardiogram(sample: ElectrocardiogramSample) -> ElectrocardiogramHarmonized:
    classification = ElectrocardiogramClassification.resolve(sample.classification, "classification")
    symptoms = ElectrocardiogramSymptomsStatus.resolve(sample.symptoms_status, "symptomsStatus")
    frequency, frequency_unit = encode(
        sample.sampling_frequency, SAMPLING_FREQUENCY_UNIT, "samplingFrequency"
    )
    heart_rate, heart_rate_unit = encode_optional(
        sample.average_heart_rate, HEART_RATE_UNIT, "averageHeartRate"
    )
    measurements = []
    for index, measurement in enumerate(sample.voltage_measurements):
        value, unit_string = encode(
            measurement.quantity, VOLTAGE_UNIT, f"voltageMeasurements[{index}]"
        )
        measurements.append(
            VoltageMeasurementHarmonized(
                value=value,
                unit=unit_string,
                time_since_sample_start=measurement.time_since_sample_start,
            )
        )
    return ElectrocardiogramHarmonized(
        average_heart_rate=heart_rate,
        average_heart_rate_unit=heart_rate_unit,
        sampling_frequency=frequency,
        sampling_frequency_unit=frequency_unit,
        classification=int(classification),
        symptoms_status=int(symptoms),
        count=len(measurements),
        voltage_measurements=measurements,
        metadata=normalize_metadata(sample.metadata),
    )


def harmonize_characteristics(sample: CharacteristicsSample) -> CharacteristicsHarmonized:
    return CharacteristicsHarmonized(
        biological_sex=int(BiologicalSex.resolve(sample.biological_sex, "biologicalSex")),
        birthday=format_date(sample.date_of_birth) if sample.date_of_birth else None,
        blood_type=int(BloodType.resolve(sample.blood_type, "bloodType")),
        skin_type=int(FitzpatrickSkinType.resolve(sample.skin_type, "skinType")),
        wheelchair_use=int(WheelchairUse.resolve(sample.wheelchair_use, "wheelchairUse")),
    )


def harmonize_heartbeat_series(sample: HeartbeatSeriesSample) -> HeartbeatSeriesHarmonized:
    # ibiArray holds each beat's offset from the series start, in seconds
    return HeartbeatSeriesHarmonized(
        count=len(sample.beats),
        ibi_array=[beat.time_since_series_start for beat in sample.beats],
        index_array=[i for i, beat in enumerate(sample.beats) if beat.preceded_by_gap],
        metadata=normalize_metadata(sample.metadata),
    )
