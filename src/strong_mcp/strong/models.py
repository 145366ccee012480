"""Strong backend response models.

These mirror the HAL-style JSON the Strong backend returns (``_links`` /
``_embedded`` envelopes). Only the fields the export consumes are declared;
everything else is ignored on validation.
"""

from enum import Enum
from functools import reduce
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Wire(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CellKind(str, Enum):
    """Known ``cellType`` tags. Anything else decodes to ``UNRECOGNIZED``."""

    OTHER_WEIGHT = "OTHER_WEIGHT"
    DUMBBELL_WEIGHT = "DUMBBELL_WEIGHT"
    BARBELL_WEIGHT = "BARBELL_WEIGHT"
    WEIGHTED_BODYWEIGHT = "WEIGHTED_BODYWEIGHT"
    ASSISTED_BODYWEIGHT = "ASSISTED_BODYWEIGHT"
    REPS = "REPS"
    RPE = "RPE"
    REST_TIMER = "REST_TIMER"
    NOTE = "NOTE"
    DURATION = "DURATION"
    DISTANCE = "DISTANCE"
    UNRECOGNIZED = "UNRECOGNIZED"

    @classmethod
    def decode(cls, tag: str) -> "CellKind":
        try:
            return cls(tag)
        except ValueError:
            return cls.UNRECOGNIZED


class Link(_Wire):
    href: str


class Name(_Wire):
    """Localized name. Display text is ``en``, then ``custom``, then "Unknown"."""
    en: str | None = None
    custom: str | None = None

    def __str__(self) -> str:
        if self.en is not None:
            return self.en
        if self.custom is not None:
            return self.custom
        return "Unknown"


class Cell(_Wire):
    id: str
    cell_type: CellKind = Field(alias="cellType")
    value: str | None = None

    @field_validator("cell_type", mode="before")
    @classmethod
    def _decode_kind(cls, v):
        if isinstance(v, CellKind):
            return v
        if not isinstance(v, str):
            raise ValueError("cellType must be a string")
        return CellKind.decode(v)

    @field_validator("value", mode="before")
    @classmethod
    def _stringify_value(cls, v):
        # Some exports carry bare JSON numbers instead of strings.
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class CellSet(_Wire):
    id: str
    cells: list[Cell]
    is_completed: bool | None = Field(default=None, alias="isCompleted")


class CellSetGroupLinks(_Wire):
    measurement: Link | None = None


class CellSetGroup(_Wire):
    id: str
    links: CellSetGroupLinks = Field(default_factory=CellSetGroupLinks, alias="_links")
    cell_sets: list[CellSet] = Field(alias="cellSets")


class LogEmbedded(_Wire):
    cell_set_group: list[CellSetGroup] = Field(alias="cellSetGroup")


class Log(_Wire):
    """One logged workout as stored by the backend."""
    id: str
    name: Name | None = None
    timezone_id: str | None = Field(default=None, alias="timezoneId")
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    log_type: str | None = Field(default=None, alias="logType")
    embedded: LogEmbedded = Field(alias="_embedded")


class UserEmbedded(_Wire):
    log: list[Log] | None = None


class UserResponse(_Wire):
    id: str
    username: str | None = None
    embedded: UserEmbedded = Field(default_factory=UserEmbedded, alias="_embedded")


class CellTypeConfig(_Wire):
    cell_type: str = Field(alias="cellType")
    mandatory: bool | None = None
    is_exponent: bool | None = Field(default=None, alias="isExponent")


class MeasurementLinks(_Wire):
    self_link: Link | None = Field(default=None, alias="self")
    tag: list[Link] | None = None


class Measurement(_Wire):
    """A catalog entry: one exercise definition."""
    id: str
    name: Name
    links: MeasurementLinks | None = Field(default=None, alias="_links")
    measurement_type: str | None = Field(default=None, alias="measurementType")
    is_global: bool | None = Field(default=None, alias="isGlobal")
    cell_type_configs: list[CellTypeConfig] = Field(default_factory=list, alias="cellTypeConfigs")


class PageLinks(_Wire):
    self_link: Link | None = Field(default=None, alias="self")
    next: Link | None = None


class EmbeddedMeasurements(_Wire):
    measurements: list[Measurement] = Field(alias="measurement")


class MeasurementsResponse(_Wire):
    """One page of the measurement catalog."""
    total: int = Field(ge=0)
    links: PageLinks = Field(default_factory=PageLinks, alias="_links")
    embedded: EmbeddedMeasurements = Field(alias="_embedded")

    def merge(self, other: "MeasurementsResponse") -> "MeasurementsResponse":
        """Append ``other``'s entries after ours.

        ``total`` and ``links`` are kept from ``self``, so the merge is not
        commutative and ``total`` is not the size of the union.
        """
        return MeasurementsResponse(
            total=self.total,
            links=self.links,
            embedded=EmbeddedMeasurements(
                measurements=[*self.embedded.measurements, *other.embedded.measurements],
            ),
        )


def merge_pages(pages: Sequence[MeasurementsResponse]) -> MeasurementsResponse:
    """Merge catalog pages left to right with ``MeasurementsResponse.merge``."""
    if not pages:
        raise ValueError("At least one catalog page is required")
    return reduce(lambda merged, page: merged.merge(page), pages[1:], pages[0])


class LoginResponse(_Wire):
    access_token: str | None = Field(default=None, alias="accessToken")
    refresh_token: str | None = Field(default=None, alias="refreshToken")
    user_id: str | None = Field(default=None, alias="userId")
