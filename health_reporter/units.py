"""Physical units and the quantity codec.

Every quantity field of a harmonized payload is written as a plain number plus
the unit string it was expressed in. The calling harmonizer always picks the
unit; nothing here infers one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union

from .errors import InvalidUnit, InvalidValue


class Dimension(str, Enum):
    ENERGY = "energy"
    LENGTH = "length"
    MASS = "mass"
    TIME = "time"
    COUNT = "count"
    FREQUENCY = "frequency"
    TEMPERATURE = "temperature"
    PRESSURE = "pressure"
    PERCENT = "percent"
    VOLTAGE = "voltage"
    VOLUME = "volume"


class Unit(Enum):
    """Supported units.

    ``base = value * factor + offset`` where the base unit of each dimension is
    J, m, g, s, count, count/s, K, Pa, %, V and L.
    """

    # energy
    JOULE = ("J", Dimension.ENERGY, 1.0)
    KILOJOULE = ("kJ", Dimension.ENERGY, 1000.0)
    SMALL_CALORIE = ("cal", Dimension.ENERGY, 4.184)
    LARGE_CALORIE = ("kcal", Dimension.ENERGY, 4184.0)
    # length
    METER = ("m", Dimension.LENGTH, 1.0)
    CENTIMETER = ("cm", Dimension.LENGTH, 0.01)
    MILLIMETER = ("mm", Dimension.LENGTH, 0.001)
    KILOMETER = ("km", Dimension.LENGTH, 1000.0)
    INCH = ("in", Dimension.LENGTH, 0.0254)
    FOOT = ("ft", Dimension.LENGTH, 0.3048)
    YARD = ("yd", Dimension.LENGTH, 0.9144)
    MILE = ("mi", Dimension.LENGTH, 1609.344)
    # mass
    GRAM = ("g", Dimension.MASS, 1.0)
    MILLIGRAM = ("mg", Dimension.MASS, 0.001)
    KILOGRAM = ("kg", Dimension.MASS, 1000.0)
    OUNCE = ("oz", Dimension.MASS, 28.349523125)
    POUND = ("lb", Dimension.MASS, 453.59237)
    # time
    SECOND = ("s", Dimension.TIME, 1.0)
    MILLISECOND = ("ms", Dimension.TIME, 0.001)
    MINUTE = ("min", Dimension.TIME, 60.0)
    HOUR = ("hr", Dimension.TIME, 3600.0)
    DAY = ("d", Dimension.TIME, 86400.0)
    # scalar
    COUNT = ("count", Dimension.COUNT, 1.0)
    PERCENT = ("%", Dimension.PERCENT, 1.0)
    # frequency
    COUNT_PER_SECOND = ("count/s", Dimension.FREQUENCY, 1.0)
    COUNT_PER_MINUTE = ("count/min", Dimension.FREQUENCY, 1.0 / 60.0)
    HERTZ = ("Hz", Dimension.FREQUENCY, 1.0)
    # temperature
    KELVIN = ("K", Dimension.TEMPERATURE, 1.0)
    DEGREE_CELSIUS = ("degC", Dimension.TEMPERATURE, 1.0, 273.15)
    DEGREE_FAHRENHEIT = ("degF", Dimension.TEMPERATURE, 5.0 / 9.0, 273.15 - 32.0 * 5.0 / 9.0)
    # pressure
    PASCAL = ("Pa", Dimension.PRESSURE, 1.0)
    KILOPASCAL = ("kPa", Dimension.PRESSURE, 1000.0)
    MILLIMETER_OF_MERCURY = ("mmHg", Dimension.PRESSURE, 133.322387415)
    # voltage
    VOLT = ("V", Dimension.VOLTAGE, 1.0)
    MILLIVOLT = ("mV", Dimension.VOLTAGE, 0.001)
    MICROVOLT = ("mcV", Dimension.VOLTAGE, 0.000001)
    # volume
    LITER = ("L", Dimension.VOLUME, 1.0)
    MILLILITER = ("mL", Dimension.VOLUME, 0.001)
    FLUID_OUNCE_US = ("fl_oz_us", Dimension.VOLUME, 0.0295735295625)

    def __init__(self, symbol: str, dimension: Dimension, factor: float, offset: float = 0.0) -> None:
        self.symbol = symbol
        self.dimension = dimension
        self.factor = factor
        self.offset = offset

    @property
    def unit_string(self) -> str:
        return self.symbol

    def to_base(self, value: float) -> float:
        return value * self.factor + self.offset

    def from_base(self, value: float) -> float:
        return (value - self.offset) / self.factor

    @classmethod
    def from_string(cls, unit_string: Any, field: str = "unit") -> "Unit":
        unit = _BY_SYMBOL.get(unit_string) if isinstance(unit_string, str) else None
        if unit is None:
            raise InvalidUnit(f"{field}: unit {unit_string!r} is not supported", field=field)
        return unit


_BY_SYMBOL = {u.symbol: u for u in Unit}
_BY_SYMBOL["Cal"] = Unit.LARGE_CALORIE


@dataclass(frozen=True, eq=False)
class Quantity:
    """A native physical amount: a number tied to the unit it was measured in."""

    value: float
    unit: Unit

    def __post_init__(self) -> None:
        if isinstance(self.unit, str):
            object.__setattr__(self, "unit", Unit.from_string(self.unit))
        object.__setattr__(self, "value", float(self.value))

    def is_compatible(self, unit: Unit) -> bool:
        return self.unit.dimension is unit.dimension

    def double_value(self, unit: Unit) -> float:
        if not self.is_compatible(unit):
            raise InvalidValue(
                f"{self.value} {self.unit.symbol} cannot be expressed in {unit.symbol}"
            )
        if unit is self.unit:
            return self.value
        return unit.from_base(self.unit.to_base(self.value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        if not self.is_compatible(other.unit):
            return False
        return math.isclose(
            self.unit.to_base(self.value),
            other.unit.to_base(other.value),
            rel_tol=1e-9,
            abs_tol=1e-12,
        )

    def __str__(self) -> str:
        return f"{self.value:g} {self.unit.symbol}"


def encode(quantity: Optional[Quantity], unit: Unit, field: str = "quantity") -> Tuple[float, str]:
    if quantity is None:
        raise InvalidValue(f"Invalid {field} value: missing", field=field)
    try:
        return quantity.double_value(unit), unit.unit_string
    except InvalidValue as exc:
        raise InvalidValue(f"Invalid {field} value: {exc.message}", field=field) from exc


def decode(value: Any, unit_string: Any, field: str = "quantity") -> Quantity:
    unit = Unit.from_string(unit_string, field=f"{field}Unit")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidValue(f"Invalid {field} value: {value!r} is not a number", field=field)
    return Quantity(value, unit)


def encode_optional(
    quantity: Optional[Quantity], unit: Unit, field: str = "quantity"
) -> Union[Tuple[float, str], Tuple[None, None]]:
    if quantity is None:
        return None, None
    return encode(quantity, unit, field)


def decode_optional(value: Any, unit_string: Any, field: str = "quantity") -> Optional[Quantity]:
    if value is None or unit_string is None:
        return None
    return decode(value, unit_string, field)
