import datetime as dt

import pytest

from health_reporter.errors import InvalidType, InvalidValue
from health_reporter.native import NativeDevice, OperatingSystemVersion
from health_reporter.payloads import (
    Device,
    OperatingSystem,
    Source,
    SourceRevision,
    normalize_metadata,
)
from health_reporter.units import Quantity, Unit


def test_device_round_trip(device):
    portable = Device.from_native(device)
    assert portable.to_native() == device
    assert portable.to_dict() == {
        "name": "Apple Watch",
        "manufacturer": "Apple Inc.",
        "model": "Watch",
        "hardwareVersion": "Watch5,4",
        "softwareVersion": "7.0",
    }


def test_absent_device_stays_absent():
    assert Device.from_native(None) is None
    assert Device.from_native(NativeDevice()).to_dict() == {}


def test_source_revision_round_trip(source_revision):
    portable = SourceRevision.from_native(source_revision)
    assert portable.to_native() == source_revision
    assert portable.to_dict() == {
        "source": {"name": "Health", "bundleIdentifier": "com.apple.Health"},
        "version": "14.0",
        "productType": "iPhone12,1",
        "systemVersion": "14.0.1",
        "operatingSystem": {"majorVersion": 14, "minorVersion": 0, "patchVersion": 1},
    }


def test_source_revision_requires_system_version():
    revision = SourceRevision(source=Source(name="App", bundle_identifier="com.example.app"))
    with pytest.raises(InvalidType) as exc:
        revision.to_native()
    assert exc.value.field == "systemVersion"


def test_operating_system_falls_back_to_system_version():
    revision = SourceRevision(
        source=Source(name="App", bundle_identifier="com.example.app"),
        system_version="13.7",
    )
    assert revision.to_native().operating_system_version == OperatingSystemVersion(13, 7, 0)


def test_source_revision_from_flat_dictionary():
    revision = SourceRevision.make(
        {
            "name": "Health",
            "bundleIdentifier": "com.apple.Health",
            "systemVersion": "14.0.1",
            "productType": "iPhone12,1",
            "majorVersion": "14",
            "minorVersion": "0",
            "patchVersion": 1,
        }
    )
    assert revision.source.bundle_identifier == "com.apple.Health"
    assert revision.version is None
    assert revision.operating_system == OperatingSystem(major_version=14, minor_version=0, patch_version=1)


@pytest.mark.parametrize(
    "dictionary",
    [
        {"name": "Health", "bundleIdentifier": "com.apple.Health"},
        {"name": "Health", "systemVersion": "14.0", "majorVersion": "14", "minorVersion": "0", "patchVersion": "0"},
        {"name": "Health", "bundleIdentifier": "x", "systemVersion": "14.0", "majorVersion": "fourteen"},
    ],
)
def test_source_revision_make_rejects_bad_dictionary(dictionary):
    with pytest.raises(InvalidValue):
        SourceRevision.make(dictionary)


def test_operating_system_version_is_non_negative():
    with pytest.raises(InvalidValue):
        OperatingSystemVersion(14, -1, 0)
    with pytest.raises(InvalidValue):
        OperatingSystem.parse("fourteen")


def test_metadata_values_become_strings():
    when = dt.datetime(2020, 9, 25, 8, 0, tzinfo=dt.timezone.utc)
    assert normalize_metadata(
        {
            "foo": 42,
            "ratio": 0.5,
            "indoor": True,
            "name": "morning run",
            "when": when,
            "weather": Quantity(21.5, Unit.DEGREE_CELSIUS),
            "laps": [1, 2],
            "skipped": None,
        }
    ) == {
        "foo": "42",
        "ratio": "0.5",
        "indoor": "true",
        "name": "morning run",
        "when": "2020-09-25T08:00:00Z",
        "weather": "21.5 degC",
        "laps": "[1, 2]",
    }


def test_absent_metadata_is_not_an_empty_mapping():
    assert normalize_metadata(None) is None
    assert normalize_metadata({}) == {}
