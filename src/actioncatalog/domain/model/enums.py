"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Confidence(StrEnum):
    """Trust ladder for a record: ``authoritative > high > medium > low``."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    AUTHORITATIVE = "authoritative"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_RANK[self]

    def at_least(self, other: Confidence) -> bool:
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: object) -> Confidence | None:
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None


_CONFIDENCE_RANK: dict[Confidence, int] = {
    Confidence.LOW: 0,
    Confidence.MEDIUM: 1,
    Confidence.HIGH: 2,
    Confidence.AUTHORITATIVE: 3,
}


class ParameterType(StrEnum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    VARIABLE = "variable"
    DICTIONARY = "dictionary"
    ARRAY = "array"
    DATE = "date"
    DURATION = "duration"
    LOCATION = "location"
    CONTACT = "contact"
    FILE = "file"
    URL = "url"
    APP = "app"
    SHORTCUT = "shortcut"
    ANY = "any"

    @classmethod
    def coerce(cls, value: object) -> ParameterType:
        """Map a loosely typed value onto the enum; unknown values become ``ANY``."""

        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.ANY
        return cls.ANY

    @classmethod
    def of_value(cls, value: object) -> ParameterType:
        """Infer the parameter type from a sample value."""

        match value:
            case bool():
                return cls.BOOLEAN
            case int() | float():
                return cls.NUMBER
            case str():
                return cls.STRING
            case list() | tuple():
                return cls.ARRAY
            case dict():
                return cls.DICTIONARY
            case _:
                return cls.ANY


class SchedulerState(StrEnum):
    IDLE = "idle"
    CHECKING = "checking"
    UPDATING = "updating"
    REPORTING = "reporting"
    ERROR = "error"


class DiscoveryPhase(StrEnum):
    """The four sequential steps of an update run, in execution order."""

    INSTALLED_ITEMS = "installed-items"
    KNOWN_LOCATIONS = "known-locations"
    EXTERNAL_RESOURCES = "external-resources"
    INTEGRATION = "integration"
