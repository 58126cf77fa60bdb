"""Type identifiers and the closed kind table."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Type

from .enums import (
    AppleStandHour,
    CategoryValue,
    CervicalMucusQuality,
    MenstrualFlow,
    OvulationTestResult,
    PlatformEnum,
    SleepAnalysis,
)
from .errors import InvalidIdentifier, InvalidType
from .units import Unit


class Kind(str, Enum):
    QUANTITY = "quantity"
    CATEGORY = "category"
    CORRELATION = "correlation"
    STATISTICS = "statistics"
    ACTIVITY_SUMMARY = "activitySummary"
    WORKOUT = "workout"
    WORKOUT_EVENT = "workoutEvent"
    ELECTROCARDIOGRAM = "electrocardiogram"
    CHARACTERISTICS = "characteristics"
    HEARTBEAT_SERIES = "heartbeatSeries"

    @classmethod
    def make(cls, key: Any) -> "Kind":
        if isinstance(key, Kind):
            return key
        try:
            return cls(key)
        except ValueError as exc:
            raise InvalidIdentifier(f"Invalid identifier: {key}", field="kind") from exc


class QuantityType(str, Enum):
    STEP_COUNT = "HKQuantityTypeIdentifierStepCount"
    DISTANCE_WALKING_RUNNING = "HKQuantityTypeIdentifierDistanceWalkingRunning"
    DISTANCE_CYCLING = "HKQuantityTypeIdentifierDistanceCycling"
    DISTANCE_SWIMMING = "HKQuantityTypeIdentifierDistanceSwimming"
    DISTANCE_WHEELCHAIR = "HKQuantityTypeIdentifierDistanceWheelchair"
    ACTIVE_ENERGY_BURNED = "HKQuantityTypeIdentifierActiveEnergyBurned"
    BASAL_ENERGY_BURNED = "HKQuantityTypeIdentifierBasalEnergyBurned"
    FLIGHTS_CLIMBED = "HKQuantityTypeIdentifierFlightsClimbed"
    SWIMMING_STROKE_COUNT = "HKQuantityTypeIdentifierSwimmingStrokeCount"
    APPLE_EXERCISE_TIME = "HKQuantityTypeIdentifierAppleExerciseTime"
    APPLE_STAND_TIME = "HKQuantityTypeIdentifierAppleStandTime"
    HEART_RATE = "HKQuantityTypeIdentifierHeartRate"
    RESTING_HEART_RATE = "HKQuantityTypeIdentifierRestingHeartRate"
    WALKING_HEART_RATE_AVERAGE = "HKQuantityTypeIdentifierWalkingHeartRateAverage"
    HEART_RATE_VARIABILITY_SDNN = "HKQuantityTypeIdentifierHeartRateVariabilitySDNN"
    RESPIRATORY_RATE = "HKQuantityTypeIdentifierRespiratoryRate"
    OXYGEN_SATURATION = "HKQuantityTypeIdentifierOxygenSaturation"
    BODY_TEMPERATURE = "HKQuantityTypeIdentifierBodyTemperature"
    BLOOD_PRESSURE_SYSTOLIC = "HKQuantityTypeIdentifierBloodPressureSystolic"
    BLOOD_PRESSURE_DIASTOLIC = "HKQuantityTypeIdentifierBloodPressureDiastolic"
    BODY_MASS = "HKQuantityTypeIdentifierBodyMass"
    LEAN_BODY_MASS = "HKQuantityTypeIdentifierLeanBodyMass"
    HEIGHT = "HKQuantityTypeIdentifierHeight"
    BODY_MASS_INDEX = "HKQuantityTypeIdentifierBodyMassIndex"
    BODY_FAT_PERCENTAGE = "HKQuantityTypeIdentifierBodyFatPercentage"
    DIETARY_ENERGY_CONSUMED = "HKQuantityTypeIdentifierDietaryEnergyConsumed"
    DIETARY_WATER = "HKQuantityTypeIdentifierDietaryWater"
    DIETARY_PROTEIN = "HKQuantityTypeIdentifierDietaryProtein"
    DIETARY_CARBOHYDRATES = "HKQuantityTypeIdentifierDietaryCarbohydrates"
    DIETARY_FAT_TOTAL = "HKQuantityTypeIdentifierDietaryFatTotal"

    @property
    def preferred_unit(self) -> Unit:
        return PREFERRED_UNITS[self]


PREFERRED_UNITS: Dict[QuantityType, Unit] = {
    QuantityType.STEP_COUNT: Unit.COUNT,
    QuantityType.DISTANCE_WALKING_RUNNING: Unit.METER,
    QuantityType.DISTANCE_CYCLING: Unit.METER,
    QuantityType.DISTANCE_SWIMMING: Unit.METER,
    QuantityType.DISTANCE_WHEELCHAIR: Unit.METER,
    QuantityType.ACTIVE_ENERGY_BURNED: Unit.LARGE_CALORIE,
    QuantityType.BASAL_ENERGY_BURNED: Unit.LARGE_CALORIE,
    QuantityType.FLIGHTS_CLIMBED: Unit.COUNT,
    QuantityType.SWIMMING_STROKE_COUNT: Unit.COUNT,
    QuantityType.APPLE_EXERCISE_TIME: Unit.MINUTE,
    QuantityType.APPLE_STAND_TIME: Unit.MINUTE,
    QuantityType.HEART_RATE: Unit.COUNT_PER_MINUTE,
    QuantityType.RESTING_HEART_RATE: Unit.COUNT_PER_MINUTE,
    QuantityType.WALKING_HEART_RATE_AVERAGE: Unit.COUNT_PER_MINUTE,
    QuantityType.HEART_RATE_VARIABILITY_SDNN: Unit.MILLISECOND,
    QuantityType.RESPIRATORY_RATE: Unit.COUNT_PER_MINUTE,
    QuantityType.OXYGEN_SATURATION: Unit.PERCENT,
    QuantityType.BODY_TEMPERATURE: Unit.DEGREE_CELSIUS,
    QuantityType.BLOOD_PRESSURE_SYSTOLIC: Unit.MILLIMETER_OF_MERCURY,
    QuantityType.BLOOD_PRESSURE_DIASTOLIC: Unit.MILLIMETER_OF_MERCURY,
    QuantityType.BODY_MASS: Unit.KILOGRAM,
    QuantityType.LEAN_BODY_MASS: Unit.KILOGRAM,
    QuantityType.HEIGHT: Unit.CENTIMETER,
    QuantityType.BODY_MASS_INDEX: Unit.COUNT,
    QuantityType.BODY_FAT_PERCENTAGE: Unit.PERCENT,
    QuantityType.DIETARY_ENERGY_CONSUMED: Unit.LARGE_CALORIE,
    QuantityType.DIETARY_WATER: Unit.MILLILITER,
    QuantityType.DIETARY_PROTEIN: Unit.GRAM,
    QuantityType.DIETARY_CARBOHYDRATES: Unit.GRAM,
    QuantityType.DIETARY_FAT_TOTAL: Unit.GRAM,
}


class CategoryType(str, Enum):
    SLEEP_ANALYSIS = "HKCategoryTypeIdentifierSleepAnalysis"
    APPLE_STAND_HOUR = "HKCategoryTypeIdentifierAppleStandHour"
    MINDFUL_SESSION = "HKCategoryTypeIdentifierMindfulSession"
    HIGH_HEART_RATE_EVENT = "HKCategoryTypeIdentifierHighHeartRateEvent"
    LOW_HEART_RATE_EVENT = "HKCategoryTypeIdentifierLowHeartRateEvent"
    IRREGULAR_HEART_RHYTHM_EVENT = "HKCategoryTypeIdentifierIrregularHeartRhythmEvent"
    TOOTHBRUSHING_EVENT = "HKCategoryTypeIdentifierToothbrushingEvent"
    SEXUAL_ACTIVITY = "HKCategoryTypeIdentifierSexualActivity"
    INTERMENSTRUAL_BLEEDING = "HKCategoryTypeIdentifierIntermenstrualBleeding"
    MENSTRUAL_FLOW = "HKCategoryTypeIdentifierMenstrualFlow"
    CERVICAL_MUCUS_QUALITY = "HKCategoryTypeIdentifierCervicalMucusQuality"
    OVULATION_TEST_RESULT = "HKCategoryTypeIdentifierOvulationTestResult"

    @property
    def values(self) -> Type[PlatformEnum]:
        return CATEGORY_VALUES.get(self, CategoryValue)


CATEGORY_VALUES: Dict[CategoryType, Type[PlatformEnum]] = {
    CategoryType.SLEEP_ANALYSIS: SleepAnalysis,
    CategoryType.APPLE_STAND_HOUR: AppleStandHour,
    CategoryType.MENSTRUAL_FLOW: MenstrualFlow,
    CategoryType.CERVICAL_MUCUS_QUALITY: CervicalMucusQuality,
    CategoryType.OVULATION_TEST_RESULT: OvulationTestResult,
}


class CorrelationType(str, Enum):
    BLOOD_PRESSURE = "HKCorrelationTypeIdentifierBloodPressure"
    FOOD = "HKCorrelationTypeIdentifierFood"


class DataType(str, Enum):
    """Identifiers of the kinds that have a single native type."""

    WORKOUT = "HKWorkoutTypeIdentifier"
    WORKOUT_EVENT = "HKWorkoutEventTypeIdentifier"
    ACTIVITY_SUMMARY = "HKActivitySummaryTypeIdentifier"
    ELECTROCARDIOGRAM = "HKDataTypeIdentifierElectrocardiogram"
    HEARTBEAT_SERIES = "HKDataTypeIdentifierHeartbeatSeries"
    CHARACTERISTICS = "HKCharacteristicTypeIdentifier"


_SINGLETON_KINDS: Dict[DataType, Kind] = {
    DataType.WORKOUT: Kind.WORKOUT,
    DataType.WORKOUT_EVENT: Kind.WORKOUT_EVENT,
    DataType.ACTIVITY_SUMMARY: Kind.ACTIVITY_SUMMARY,
    DataType.ELECTROCARDIOGRAM: Kind.ELECTROCARDIOGRAM,
    DataType.HEARTBEAT_SERIES: Kind.HEARTBEAT_SERIES,
    DataType.CHARACTERISTICS: Kind.CHARACTERISTICS,
}

_IDENTIFIER_KINDS: Dict[str, Kind] = {}
_IDENTIFIER_KINDS.update({t.value: Kind.QUANTITY for t in QuantityType})
_IDENTIFIER_KINDS.update({t.value: Kind.CATEGORY for t in CategoryType})
_IDENTIFIER_KINDS.update({t.value: Kind.CORRELATION for t in CorrelationType})
_IDENTIFIER_KINDS.update({t.value: k for t, k in _SINGLETON_KINDS.items()})


def resolve_identifier(identifier: Any) -> Kind:
    """Map a record identifier to its kind.

    Quantity identifiers resolve to ``Kind.QUANTITY``; statistics records share
    them and are resolved by passing their kind explicitly.
    """
    kind = _IDENTIFIER_KINDS.get(identifier) if isinstance(identifier, str) else None
    if kind is None:
        raise InvalidType(
            f"Type identifier: {identifier} could not be resolved", field="identifier"
        )
    return kind


def identifiers_for(kind: Kind) -> List[str]:
    kind = Kind.make(kind)
    if kind is Kind.STATISTICS:
        return [t.value for t in QuantityType]
    return [i for i, k in _IDENTIFIER_KINDS.items() if k is kind]


def quantity_type(identifier: Any) -> QuantityType:
    try:
        return QuantityType(identifier)
    except ValueError as exc:
        raise InvalidType(
            f"Quantity type identifier: {identifier} could not be formatted", field="identifier"
        ) from exc


def category_type(identifier: Any) -> CategoryType:
    try:
        return CategoryType(identifier)
    except ValueError as exc:
        raise InvalidType(
            f"Category type identifier: {identifier} could not be formatted", field="identifier"
        ) from exc


def correlation_type(identifier: Any) -> CorrelationType:
    try:
        return CorrelationType(identifier)
    except ValueError as exc:
        raise InvalidType(
            f"Correlation type identifier: {identifier} could not be formatted", field="identifier"
        ) from exc


def expect_identifier(identifier: Any, expected: DataType) -> DataType:
    if identifier != expected.value:
        raise InvalidType(
            f"Type identifier: {identifier} does not match {expected.value}", field="identifier"
        )
    return expected
