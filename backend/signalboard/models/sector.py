from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SectorSummary(BaseModel):
    """Day change for one sector. Joined to signal records by the sector name only."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    sector: str
    day_change: Optional[float] = None
