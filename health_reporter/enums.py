"""Platform enumerations, keyed by the platform's raw integer codes."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from .errors import InvalidType


def _camel(name: str) -> str:
    head, *rest = name.lower().split("_")
    return head + "".join(part.capitalize() for part in rest)


class PlatformEnum(IntEnum):
    @property
    def label(self) -> str:
        return _camel(self.name)

    @classmethod
    def resolve(cls, code: Any, field: str = "value") -> "PlatformEnum":
        if isinstance(code, bool):
            raise InvalidType(f"{cls.__name__}: {code!r} is not a valid code", field=field)
        try:
            return cls(code)
        except (ValueError, TypeError) as exc:
            raise InvalidType(
                f"{cls.__name__}: {code!r} could not be formatted", field=field
            ) from exc


class WorkoutActivityType(PlatformEnum):
    AMERICAN_FOOTBALL = 1
    ARCHERY = 2
    AUSTRALIAN_FOOTBALL = 3
    BADMINTON = 4
    BASEBALL = 5
    BASKETBALL = 6
    BOWLING = 7
    BOXING = 8
    CLIMBING = 9
    CRICKET = 10
    CROSS_TRAINING = 11
    CURLING = 12
    CYCLING = 13
    DANCE = 14
    DANCE_INSPIRED_TRAINING = 15
    ELLIPTICAL = 16
    EQUESTRIAN_SPORTS = 17
    FENCING = 18
    FISHING = 19
    FUNCTIONAL_STRENGTH_TRAINING = 20
    GOLF = 21
    GYMNASTICS = 22
    HANDBALL = 23
    HIKING = 24
    HOCKEY = 25
    HUNTING = 26
    LACROSSE = 27
    MARTIAL_ARTS = 28
    MIND_AND_BODY = 29
    MIXED_METABOLIC_CARDIO_TRAINING = 30
    PADDLE_SPORTS = 31
    PLAY = 32
    PREPARATION_AND_RECOVERY = 33
    RACQUETBALL = 34
    ROWING = 35
    RUGBY = 36
    RUNNING = 37
    SAILING = 38
    SKATING_SPORTS = 39
    SNOW_SPORTS = 40
    SOCCER = 41
    SOFTBALL = 42
    SQUASH = 43
    STAIR_CLIMBING = 44
    SURFING_SPORTS = 45
    SWIMMING = 46
    TABLE_TENNIS = 47
    TENNIS = 48
    TRACK_AND_FIELD = 49
    TRADITIONAL_STRENGTH_TRAINING = 50
    VOLLEYBALL = 51
    WALKING = 52
    WATER_FITNESS = 53
    WATER_POLO = 54
    WATER_SPORTS = 55
    WRESTLING = 56
    YOGA = 57
    BARRE = 58
    CORE_TRAINING = 59
    CROSS_COUNTRY_SKIING = 60
    DOWNHILL_SKIING = 61
    FLEXIBILITY = 62
    HIGH_INTENSITY_INTERVAL_TRAINING = 63
    JUMP_ROPE = 64
    KICKBOXING = 65
    PILATES = 66
    SNOWBOARDING = 67
    STAIRS = 68
    STEP_TRAINING = 69
    WHEELCHAIR_WALK_PACE = 70
    WHEELCHAIR_RUN_PACE = 71
    TAI_CHI = 72
    MIXED_CARDIO = 73
    HAND_CYCLING = 74
    DISC_SPORTS = 75
    FITNESS_GAMING = 76
    OTHER = 3000


class WorkoutEventType(PlatformEnum):
    PAUSE = 1
    RESUME = 2
    LAP = 3
    MARKER = 4
    MOTION_PAUSED = 5
    MOTION_RESUMED = 6
    SEGMENT = 7
    PAUSE_OR_RESUME_REQUEST = 8


# category values

class CategoryValue(PlatformEnum):
    NOT_APPLICABLE = 0


class SleepAnalysis(PlatformEnum):
    IN_BED = 0
    ASLEEP_UNSPECIFIED = 1
    AWAKE = 2
    ASLEEP_CORE = 3
    ASLEEP_DEEP = 4
    ASLEEP_REM = 5


class AppleStandHour(PlatformEnum):
    STOOD = 0
    IDLE = 1


class MenstrualFlow(PlatformEnum):
    UNSPECIFIED = 1
    LIGHT = 2
    MEDIUM = 3
    HEAVY = 4
    NONE = 5


class CervicalMucusQuality(PlatformEnum):
    DRY = 1
    STICKY = 2
    CREAMY = 3
    WATERY = 4
    EGG_WHITE = 5


class OvulationTestResult(PlatformEnum):
    NEGATIVE = 1
    LUTEINIZING_HORMONE_SURGE = 2
    INDETERMINATE = 3
    ESTROGEN_SURGE = 4


# electrocardiogram

class ElectrocardiogramClassification(PlatformEnum):
    NOT_SET = 0
    SINUS_RHYTHM = 1
    ATRIAL_FIBRILLATION = 2
    INCONCLUSIVE_LOW_HEART_RATE = 3
    INCONCLUSIVE_HIGH_HEART_RATE = 4
    INCONCLUSIVE_POOR_READING = 5
    INCONCLUSIVE_OTHER = 6
    UNRECOGNIZED = 100


class ElectrocardiogramSymptomsStatus(PlatformEnum):
    NOT_SET = 0
    NONE = 1
    PRESENT = 2


# characteristics

class BiologicalSex(PlatformEnum):
    NOT_SET = 0
    FEMALE = 1
    MALE = 2
    OTHER = 3


class BloodType(PlatformEnum):
    NOT_SET = 0
    A_POSITIVE = 1
    A_NEGATIVE = 2
    B_POSITIVE = 3
    B_NEGATIVE = 4
    AB_POSITIVE = 5
    AB_NEGATIVE = 6
    O_POSITIVE = 7
    O_NEGATIVE = 8


class FitzpatrickSkinType(PlatformEnum):
    NOT_SET = 0
    TYPE_I = 1
    TYPE_II = 2
    TYPE_III = 3
    TYPE_IV = 4
    TYPE_V = 5
    TYPE_VI = 6


class WheelchairUse(PlatformEnum):
    NOT_SET = 0
    NO = 1
    YES = 2
