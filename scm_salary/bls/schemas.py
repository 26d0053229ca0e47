"""Schema definitions for the BLS timeseries API envelope.

Every nesting level is optional so that a partial response validates and the
normalizer can check for presence explicitly instead of probing dicts.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

REQUEST_SUCCEEDED = "REQUEST_SUCCEEDED"


class BlsDataPoint(BaseModel):
    """A single observation; BLS reports values as strings."""

    model_config = ConfigDict(extra="allow")

    year: str | int | None = None
    period: str | None = None
    value: Any = None


class BlsSeries(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    series_id: str = Field(alias="seriesID")
    data: list[BlsDataPoint] | None = None

    @property
    def latest(self) -> BlsDataPoint | None:
        """BLS lists observations newest first."""

        return self.data[0] if self.data else None


class BlsResults(BaseModel):
    model_config = ConfigDict(extra="allow")

    # Entries stay untyped here and are validated one at a time.
    series: list[Any] | None = None


class BlsResponse(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    status: str | None = None
    message: list[Any] = Field(default_factory=list)
    results: BlsResults | None = Field(default=None, alias="Results")

    @property
    def succeeded(self) -> bool:
        return self.status == REQUEST_SUCCEEDED


class BlsRequest(BaseModel):
    """Request body for ``POST /publicAPI/v2/timeseries/data/``."""

    seriesid: list[str]
    startyear: str
    endyear: str
    registrationkey: str
