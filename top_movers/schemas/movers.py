from typing import Optional

from pydantic import BaseModel, Field


class MoverSchema(BaseModel):
    ticker: str
    price: float
    change: float
    changePercent: float
    volume: Optional[float] = None


class TopMoversSchema(BaseModel):
    gainers: list[MoverSchema] = Field(default_factory=list)
    losers: list[MoverSchema] = Field(default_factory=list)
    mostActive: list[MoverSchema] = Field(default_factory=list)
