import dataclasses
import datetime as dt

import pytest

from health_reporter import harmonize
from health_reporter.errors import InvalidType, InvalidValue
from health_reporter.harmonizers import harmonize_quantity, harmonize_workout
from health_reporter.units import Quantity, Unit


def test_quantity_record_shape(quantity_sample):
    record = harmonize(quantity_sample).to_dict()
    assert record["identifier"] == "HKQuantityTypeIdentifierStepCount"
    assert record["startDate"] == "2020-09-25T08:30:00Z"
    assert record["endDate"] == "2020-09-25T09:15:00Z"
    assert record["device"]["name"] == "Apple Watch"
    assert record["sourceRevision"]["source"]["bundleIdentifier"] == "com.apple.Health"
    assert record["harmonized"] == {
        "value": 1234.0,
        "unit": "count",
        "metadata": {"HKWasUserEntered": "true"},
    }


def test_quantity_uses_preferred_unit_unless_given(quantity_sample):
    sample = dataclasses.replace(
        quantity_sample,
        quantity_type="HKQuantityTypeIdentifierBodyTemperature",
        quantity=Quantity(98.6, Unit.DEGREE_FAHRENHEIT),
    )
    assert harmonize_quantity(sample).unit == "degC"
    assert harmonize_quantity(sample).value == pytest.approx(37.0)
    assert harmonize_quantity(sample, Unit.DEGREE_FAHRENHEIT).value == pytest.approx(98.6)


def test_quantity_in_wrong_dimension_fails(quantity_sample):
    sample = dataclasses.replace(quantity_sample, quantity=Quantity(3, Unit.METER))
    with pytest.raises(InvalidValue):
        harmonize(sample)


def test_absent_metadata_is_left_out(category_sample):
    record = harmonize(category_sample).to_dict()
    assert "metadata" not in record["harmonized"]
    assert "device" not in record
    assert record["harmonized"] == {"value": 1, "description": "asleepUnspecified"}


def test_unknown_category_value(category_sample):
    with pytest.raises(InvalidType):
        harmonize(dataclasses.replace(category_sample, value=42))


def test_unknown_quantity_identifier(quantity_sample):
    with pytest.raises(InvalidType):
        harmonize(dataclasses.replace(quantity_sample, quantity_type="HKUnknownType"))


def test_missing_source_revision(quantity_sample):
    with pytest.raises(InvalidValue) as exc:
        harmonize(dataclasses.replace(quantity_sample, source_revision=None))
    assert exc.value.field == "sourceRevision"


def test_correlation_nests_quantity_records(correlation_sample):
    record = harmonize(correlation_sample).to_dict()
    nested = record["harmonized"]["quantitySamples"]
    assert [q["identifier"] for q in nested] == [
        "HKQuantityTypeIdentifierBloodPressureSystolic",
        "HKQuantityTypeIdentifierBloodPressureDiastolic",
    ]
    assert nested[0]["harmonized"]["unit"] == "mmHg"
    assert record["harmonized"]["categorySamples"] == []
    assert record["harmonized"]["metadata"] == {"position": "seated"}


def test_correlation_fails_on_any_nested_sample(correlation_sample):
    broken = dataclasses.replace(correlation_sample.objects[0], quantity=None)
    sample = dataclasses.replace(correlation_sample, objects=(broken, correlation_sample.objects[1]))
    with pytest.raises(InvalidValue):
        harmonize(sample)


def test_statistics_pairs(statistics_sample):
    record = harmonize(statistics_sample).to_dict()
    assert record["sources"] == [{"name": "Watch", "bundleIdentifier": "com.apple.health.watch"}]
    h = record["harmonized"]
    assert h["average"] == 72.0 and h["averageUnit"] == "count/min"
    assert h["min"] == pytest.approx(60.0) and h["minUnit"] == "count/min"
    assert "summary" not in h and "summaryUnit" not in h
    assert "recent" not in h and "recentUnit" not in h


def test_activity_summary_uses_date_key(activity_summary):
    record = harmonize(activity_summary).to_dict()
    assert record["identifier"] == "HKActivitySummaryTypeIdentifier"
    assert record["date"] == "2020-09-25T00:00:00Z"
    assert "startDate" not in record
    assert record["harmonized"]["activeEnergyBurned"] == 420.5
    assert record["harmonized"]["appleExerciseTimeUnit"] == "min"
    assert record["harmonized"]["appleStandHoursGoalUnit"] == "count"


def test_activity_summary_requires_every_ring(activity_summary):
    with pytest.raises(InvalidValue) as exc:
        harmonize(dataclasses.replace(activity_summary, apple_stand_hours_goal=None))
    assert exc.value.field == "appleStandHoursGoal"


def test_workout_record(workout):
    record = harmonize(workout).to_dict()
    assert record["identifier"] == "HKWorkoutTypeIdentifier"
    assert record["workoutName"] == "running"
    assert record["duration"] == 2700.0
    h = record["harmonized"]
    assert h["value"] == 37
    assert h["totalEnergyBurned"] == pytest.approx(300.0)
    assert h["totalEnergyBurnedUnit"] == "kcal"
    assert h["totalDistance"] == pytest.approx(7500.0)
    assert h["totalDistanceUnit"] == "m"
    assert h["totalFlightsClimbed"] == 3.0
    assert "totalSwimmingStrokeCount" not in h
    assert "totalSwimmingStrokeCountUnit" not in h
    assert [e["type"] for e in record["workoutEvents"]] == ["pause", "resume", "lap"]
    assert record["workoutEvents"][0]["duration"] == 30.0
    assert record["workoutEvents"][0]["harmonized"] == {"value": 1}


def test_workout_without_total_energy_burned(workout):
    sample = dataclasses.replace(workout, total_energy_burned=None)
    with pytest.raises(InvalidValue) as exc:
        harmonize(sample)
    assert exc.value.field == "totalEnergyBurned"
    assert "totalEnergyBurned" in str(exc.value)


def test_workout_distance_in_time_unit_fails(workout):
    with pytest.raises(InvalidValue) as exc:
        harmonize_workout(dataclasses.replace(workout, total_distance=Quantity(5, Unit.MINUTE)))
    assert exc.value.field == "totalDistance"


def test_unknown_workout_activity(workout):
    with pytest.raises(InvalidType):
        harmonize(dataclasses.replace(workout, activity_type=9999))


def test_workout_drops_unharmonizable_event(workout, make_event):
    events = (make_event(1, 5), make_event(99, 6), make_event(2, 7))
    record = harmonize(dataclasses.replace(workout, workout_events=events))
    assert len(record.workout_events) == 2
    assert [e.harmonized.value for e in record.workout_events] == [1, 2]


def test_strict_policy_fails_the_workout(workout, make_event, monkeypatch):
    monkeypatch.setenv("WORKOUT_EVENT_POLICY", "strict")
    events = (make_event(1, 5), make_event(99, 6), make_event(2, 7))
    with pytest.raises(InvalidType):
        harmonize(dataclasses.replace(workout, workout_events=events))


def test_workout_event_on_its_own(make_event):
    record = harmonize(make_event(7, 10, {"HKLapLength": Quantity(50, Unit.METER)}))
    assert record.to_dict() == {
        "identifier": "HKWorkoutEventTypeIdentifier",
        "type": "segment",
        "startDate": "2020-09-25T08:40:00Z",
        "endDate": "2020-09-25T08:40:30Z",
        "duration": 30.0,
        "harmonized": {"value": 7, "metadata": {"HKLapLength": "50 m"}},
    }


def test_electrocardiogram_record(electrocardiogram):
    record = harmonize(electrocardiogram).to_dict()
    assert record["numberOfMeasurements"] == 3
    h = record["harmonized"]
    assert h["samplingFrequency"] == 512.0 and h["samplingFrequencyUnit"] == "Hz"
    assert h["averageHeartRate"] == 64.0 and h["averageHeartRateUnit"] == "count/min"
    assert h["classification"] == 1
    assert h["symptomsStatus"] == 1
    assert h["count"] == 3
    assert h["voltageMeasurements"][1]["value"] == pytest.approx(-4.1)
    assert h["voltageMeasurements"][1]["unit"] == "mcV"


def test_electrocardiogram_needs_sampling_frequency(electrocardiogram):
    with pytest.raises(InvalidValue) as exc:
        harmonize(dataclasses.replace(electrocardiogram, sampling_frequency=None))
    assert exc.value.field == "samplingFrequency"


def test_characteristics_keep_raw_codes(characteristics):
    assert harmonize(characteristics).to_dict() == {
        "identifier": "HKCharacteristicTypeIdentifier",
        "harmonized": {
            "biologicalSex": 1,
            "birthday": "1990-04-12",
            "bloodType": 7,
            "skinType": 3,
            "wheelchairUse": 1,
        },
    }


def test_heartbeat_series(heartbeat_series):
    h = harmonize(heartbeat_series).to_dict()["harmonized"]
    assert h == {"count": 4, "ibiArray": [0.0, 0.82, 1.65, 4.1], "indexArray": [3]}


def test_unsupported_native_object():
    with pytest.raises(InvalidType):
        harmonize(object())


def test_naive_timestamps_are_rejected(quantity_sample):
    naive = dataclasses.replace(quantity_sample, start_date=dt.datetime(2020, 9, 25, 8, 30))
    with pytest.raises(InvalidValue) as exc:
        harmonize(naive)
    assert exc.value.field == "startDate"


def test_nested_workout_events_carry_no_identifier(workout):
    record = harmonize(workout).to_dict()
    assert all("identifier" not in e for e in record["workoutEvents"])
