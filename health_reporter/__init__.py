__all__ = [
    "__version__",
    "Kind",
    "HealthKitError",
    "InvalidValue",
    "InvalidType",
    "InvalidIdentifier",
    "InvalidUnit",
    "harmonize",
    "dehydrate",
    "load_record",
    "round_trip",
]

__version__ = "0.1.0"

from .envelope import dehydrate, harmonize, load_record, round_trip
from .errors import HealthKitError, InvalidIdentifier, InvalidType, InvalidUnit, InvalidValue
from .identifiers import Kind
