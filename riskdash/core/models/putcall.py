"""Put/call ratio observations persisted from daily scrapes."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class PutCallObservation(BaseModel):
    """One SPX put/call ratio reading."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    ratio: float


class DailyPutCallStats(BaseModel):
    """SPX + SPXW row of the CBOE daily market statistics page."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: dt.date
    ratio: float
    call_volume: int = Field(alias="callVolume")
    put_volume: int = Field(alias="putVolume")
    total_volume: int = Field(alias="totalVolume")

    def to_record(self) -> dict[str, object]:
        return {
            "date": self.date.isoformat(),
            "ratio": self.ratio,
            "callVolume": self.call_volume,
            "putVolume": self.put_volume,
            "totalVolume": self.total_volume,
        }
