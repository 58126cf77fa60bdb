"""Shared value objects embedded in every record, plus the metadata normalizer."""

from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .errors import InvalidType, InvalidValue
from .native import NativeDevice, NativeSource, NativeSourceRevision, OperatingSystemVersion
from .units import Quantity
from .utils import format_date, format_timestamp


class PortableModel(BaseModel):
    """Immutable model written with camelCase keys; ``None`` fields are left out."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


def _integer(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


class Device(PortableModel):
    name: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    hardware_version: Optional[str] = None
    firmware_version: Optional[str] = None
    software_version: Optional[str] = None
    local_identifier: Optional[str] = None
    udi_device_identifier: Optional[str] = None

    @classmethod
    def from_native(cls, device: Optional[NativeDevice]) -> Optional["Device"]:
        if device is None:
            return None
        return cls(
            name=device.name,
            manufacturer=device.manufacturer,
            model=device.model,
            hardware_version=device.hardware_version,
            firmware_version=device.firmware_version,
            software_version=device.software_version,
            local_identifier=device.local_identifier,
            udi_device_identifier=device.udi_device_identifier,
        )

    def to_native(self) -> NativeDevice:
        return NativeDevice(
            name=self.name,
            manufacturer=self.manufacturer,
            model=self.model,
            hardware_version=self.hardware_version,
            firmware_version=self.firmware_version,
            software_version=self.software_version,
            local_identifier=self.local_identifier,
            udi_device_identifier=self.udi_device_identifier,
        )


class Source(PortableModel):
    name: str
    bundle_identifier: str

    @classmethod
    def from_native(cls, source: NativeSource) -> "Source":
        return cls(name=source.name, bundle_identifier=source.bundle_identifier)

    @classmethod
    def make(cls, dictionary: Mapping[str, Any]) -> "Source":
        name = dictionary.get("name")
        bundle_identifier = dictionary.get("bundleIdentifier")
        if not isinstance(name, str) or not isinstance(bundle_identifier, str):
            raise InvalidValue(f"Invalid dictionary: {dict(dictionary)}", field="source")
        return cls(name=name, bundle_identifier=bundle_identifier)

    def to_native(self) -> NativeSource:
        return NativeSource(name=self.name, bundle_identifier=self.bundle_identifier)


class OperatingSystem(PortableModel):
    major_version: int = Field(ge=0)
    minor_version: int = Field(default=0, ge=0)
    patch_version: int = Field(default=0, ge=0)

    @classmethod
    def from_native(cls, version: OperatingSystemVersion) -> "OperatingSystem":
        return cls(
            major_version=version.major_version,
            minor_version=version.minor_version,
            patch_version=version.patch_version,
        )

    @classmethod
    def make(cls, dictionary: Mapping[str, Any]) -> "OperatingSystem":
        major = _integer(dictionary.get("majorVersion"))
        minor = _integer(dictionary.get("minorVersion"))
        patch = _integer(dictionary.get("patchVersion"))
        if major is None or minor is None or patch is None:
            raise InvalidValue(f"Invalid dictionary: {dict(dictionary)}", field="operatingSystem")
        return cls(major_version=major, minor_version=minor, patch_version=patch)

    @classmethod
    def parse(cls, system_version: str) -> "OperatingSystem":
        """Build from a dotted version string such as ``"14.0.1"``."""
        parts = system_version.split(".")
        numbers = [_integer(p) for p in parts]
        if not 1 <= len(parts) <= 3 or any(n is None for n in numbers):
            raise InvalidValue(
                f"systemVersion: {system_version!r} is not a dotted version", field="systemVersion"
            )
        numbers += [0] * (3 - len(numbers))
        return cls(major_version=numbers[0], minor_version=numbers[1], patch_version=numbers[2])

    def to_native(self) -> OperatingSystemVersion:
        return OperatingSystemVersion(
            major_version=self.major_version,
            minor_version=self.minor_version,
            patch_version=self.patch_version,
        )


class SourceRevision(PortableModel):
    source: Source
    version: Optional[str] = None
    product_type: Optional[str] = None
    system_version: Optional[str] = None
    operating_system: Optional[OperatingSystem] = None

    @classmethod
    def from_native(cls, revision: NativeSourceRevision) -> "SourceRevision":
        return cls(
            source=Source.from_native(revision.source),
            version=revision.version,
            product_type=revision.product_type,
            system_version=revision.system_version,
            operating_system=OperatingSystem.from_native(revision.operating_system_version),
        )

    @classmethod
    def make(cls, dictionary: Mapping[str, Any]) -> "SourceRevision":
        """Build from the flat dictionary shape the platform bridge sends."""
        system_version = dictionary.get("systemVersion")
        if not isinstance(system_version, str):
            raise InvalidValue(f"Invalid dictionary: {dict(dictionary)}", field="systemVersion")
        return cls(
            source=Source.make(dictionary),
            version=dictionary.get("version") if isinstance(dictionary.get("version"), str) else None,
            product_type=(
                dictionary.get("productType")
                if isinstance(dictionary.get("productType"), str)
                else None
            ),
            system_version=system_version,
            operating_system=OperatingSystem.make(dictionary),
        )

    def to_native(self) -> NativeSourceRevision:
        if self.system_version is None:
            raise InvalidType(
                "SourceRevision: systemVersion is required to rebuild the native revision",
                field="systemVersion",
            )
        operating_system = self.operating_system or OperatingSystem.parse(self.system_version)
        return NativeSourceRevision(
            source=self.source.to_native(),
            version=self.version,
            product_type=self.product_type,
            operating_system_version=operating_system.to_native(),
        )


def render_metadata_value(value: Any) -> str:
    """Canonical string form of one metadata value.

    Only strings survive a round trip unchanged; every other type comes back
    as its rendering.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, dt.datetime):
        return format_timestamp(value)
    if isinstance(value, dt.date):
        return format_date(value)
    if isinstance(value, Quantity):
        return str(value)
    if isinstance(value, Mapping):
        return json.dumps({str(k): v for k, v in value.items()}, sort_keys=True, default=render_metadata_value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return json.dumps(list(value), default=render_metadata_value)
    return str(value)


def normalize_metadata(metadata: Optional[Mapping[str, Any]]) -> Optional[Dict[str, str]]:
    if metadata is None:
        return None
    return {
        str(key): render_metadata_value(value)
        for key, value in metadata.items()
        if value is not None
    }
