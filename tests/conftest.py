import datetime as dt

import pytest

from health_reporter.native import (
    ActivitySummarySample,
    CategorySample,
    CharacteristicsSample,
    CorrelationSample,
    ElectrocardiogramSample,
    Heartbeat,
    HeartbeatSeriesSample,
    NativeDevice,
    NativeSource,
    NativeSourceRevision,
    OperatingSystemVersion,
    QuantitySample,
    StatisticsSample,
    VoltageMeasurement,
    WorkoutEventSample,
    WorkoutSample,
)
from health_reporter.units import Quantity, Unit

UTC = dt.timezone.utc
START = dt.datetime(2020, 9, 25, 8, 30, 0, tzinfo=UTC)
END = dt.datetime(2020, 9, 25, 9, 15, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _settings_env(monkeypatch):
    monkeypatch.setenv("TIMEZONE", "UTC")
    monkeypatch.setenv("WORKOUT_EVENT_POLICY", "drop")


@pytest.fixture
def source_revision():
    return NativeSourceRevision(
        source=NativeSource(name="Health", bundle_identifier="com.apple.Health"),
        version="14.0",
        product_type="iPhone12,1",
        operating_system_version=OperatingSystemVersion(14, 0, 1),
    )


@pytest.fixture
def device():
    return NativeDevice(
        name="Apple Watch",
        manufacturer="Apple Inc.",
        model="Watch",
        hardware_version="Watch5,4",
        software_version="7.0",
    )


@pytest.fixture
def quantity_sample(source_revision, device):
    return QuantitySample(
        quantity_type="HKQuantityTypeIdentifierStepCount",
        quantity=Quantity(1234, Unit.COUNT),
        start_date=START,
        end_date=END,
        source_revision=source_revision,
        device=device,
        metadata={"HKWasUserEntered": "true"},
    )


@pytest.fixture
def category_sample(source_revision):
    return CategorySample(
        category_type="HKCategoryTypeIdentifierSleepAnalysis",
        value=1,
        start_date=START,
        end_date=END,
        source_revision=source_revision,
    )


@pytest.fixture
def correlation_sample(source_revision):
    systolic = QuantitySample(
        quantity_type="HKQuantityTypeIdentifierBloodPressureSystolic",
        quantity=Quantity(120, Unit.MILLIMETER_OF_MERCURY),
        start_date=START,
        end_date=START,
        source_revision=source_revision,
    )
    diastolic = QuantitySample(
        quantity_type="HKQuantityTypeIdentifierBloodPressureDiastolic",
        quantity=Quantity(80, Unit.MILLIMETER_OF_MERCURY),
        start_date=START,
        end_date=START,
        source_revision=source_revision,
    )
    return CorrelationSample(
        correlation_type="HKCorrelationTypeIdentifierBloodPressure",
        start_date=START,
        end_date=START,
        objects=(systolic, diastolic),
        source_revision=source_revision,
        metadata={"position": "seated"},
    )


@pytest.fixture
def statistics_sample():
    return StatisticsSample(
        quantity_type="HKQuantityTypeIdentifierHeartRate",
        start_date=START,
        end_date=END,
        sources=(NativeSource(name="Watch", bundle_identifier="com.apple.health.watch"),),
        average_quantity=Quantity(72, Unit.COUNT_PER_MINUTE),
        minimum_quantity=Quantity(1, Unit.COUNT_PER_SECOND),
        maximum_quantity=Quantity(150, Unit.COUNT_PER_MINUTE),
    )


@pytest.fixture
def activity_summary():
    return ActivitySummarySample(
        date=dt.date(2020, 9, 25),
        active_energy_burned=Quantity(420.5, Unit.LARGE_CALORIE),
        active_energy_burned_goal=Quantity(500, Unit.LARGE_CALORIE),
        apple_exercise_time=Quantity(35, Unit.MINUTE),
        apple_exercise_time_goal=Quantity(30, Unit.MINUTE),
        apple_stand_hours=Quantity(10, Unit.COUNT),
        apple_stand_hours_goal=Quantity(12, Unit.COUNT),
    )


def _event(code, minute, metadata=None):
    start = START + dt.timedelta(minutes=minute)
    return WorkoutEventSample(
        type=code,
        start_date=start,
        end_date=start + dt.timedelta(seconds=30),
        metadata=metadata,
    )


@pytest.fixture
def make_event():
    return _event


@pytest.fixture
def workout(source_revision, device):
    return WorkoutSample(
        activity_type=37,
        start_date=START,
        end_date=END,
        duration=2700.0,
        source_revision=source_revision,
        device=device,
        workout_events=(_event(1, 5), _event(2, 6), _event(3, 20)),
        total_energy_burned=Quantity(1255.2, Unit.KILOJOULE),
        total_distance=Quantity(7.5, Unit.KILOMETER),
        total_flights_climbed=Quantity(3, Unit.COUNT),
        metadata={"HKIndoorWorkout": "false"},
    )


@pytest.fixture
def electrocardiogram(source_revision, device):
    return ElectrocardiogramSample(
        start_date=START,
        end_date=START + dt.timedelta(seconds=30),
        number_of_voltage_measurements=3,
        classification=1,
        symptoms_status=1,
        sampling_frequency=Quantity(512, Unit.HERTZ),
        average_heart_rate=Quantity(64, Unit.COUNT_PER_MINUTE),
        voltage_measurements=(
            VoltageMeasurement(0.0, Quantity(12.5, Unit.MICROVOLT)),
            VoltageMeasurement(0.001953125, Quantity(-0.0041, Unit.MILLIVOLT)),
            VoltageMeasurement(0.00390625, Quantity(3.0, Unit.MICROVOLT)),
        ),
        source_revision=source_revision,
        device=device,
    )


@pytest.fixture
def characteristics():
    return CharacteristicsSample(
        biological_sex=1,
        blood_type=7,
        skin_type=3,
        wheelchair_use=1,
        date_of_birth=dt.date(1990, 4, 12),
    )


@pytest.fixture
def heartbeat_series(source_revision):
    return HeartbeatSeriesSample(
        start_date=START,
        end_date=START + dt.timedelta(minutes=1),
        beats=(
            Heartbeat(0.0),
            Heartbeat(0.82),
            Heartbeat(1.65),
            Heartbeat(4.1, preceded_by_gap=True),
        ),
        source_revision=source_revision,
    )
