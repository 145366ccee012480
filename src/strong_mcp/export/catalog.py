"""Measurement catalog lookup."""

import logging
from types import MappingProxyType
from typing import Iterator, Sequence

from strong_mcp.strong.models import (
    CellSetGroupLinks, EmbeddedMeasurements, Measurement, MeasurementsResponse, merge_pages,
)

logger = logging.getLogger(__name__)


def measurement_key(links: CellSetGroupLinks) -> str | None:
    """Catalog id referenced by a cell set group, or None if it has no usable link.

    The id is the last ``/``-separated segment of the ``measurement`` href.
    """
    if links.measurement is None:
        return None
    key = links.measurement.href.rsplit("/", 1)[-1]
    return key or None


class MeasurementCatalog:
    """Read-only ``id -> Measurement`` lookup over a merged catalog response."""

    def __init__(self, response: MeasurementsResponse):
        self.response = response
        lookup: dict[str, Measurement] = {}
        for measurement in response.embedded.measurements:
            if measurement.id in lookup:
                logger.debug("Duplicate measurement id %s, keeping the later entry", measurement.id)
            lookup[measurement.id] = measurement
        self._lookup = MappingProxyType(lookup)

    @classmethod
    def build(cls, pages: Sequence[MeasurementsResponse]) -> "MeasurementCatalog":
        return cls(merge_pages(pages))

    @classmethod
    def empty(cls) -> "MeasurementCatalog":
        return cls(MeasurementsResponse(total=0, embedded=EmbeddedMeasurements(measurements=[])))

    @property
    def total(self) -> int:
        """Declared total of the first page (not the number of entries)."""
        return self.response.total

    @property
    def measurements(self) -> list[Measurement]:
        return list(self._lookup.values())

    def __len__(self) -> int:
        return len(self._lookup)

    def __contains__(self, key: object) -> bool:
        return key in self._lookup

    def __iter__(self) -> Iterator[str]:
        return iter(self._lookup)

    def get(self, key: str | None) -> Measurement | None:
        if key is None:
            return None
        return self._lookup.get(key)

    def name_for(self, key: str | None) -> str | None:
        measurement = self.get(key)
        return str(measurement.name) if measurement else None
