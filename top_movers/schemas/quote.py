from typing import Optional

from pydantic import BaseModel, Field


class YahooQuoteSchema(BaseModel):
    symbol: str
    name: str
    price: Optional[float] = None
    previousClose: Optional[float] = None
    change: Optional[float] = None
    changePercent: Optional[float] = None


class YahooGainersSchema(BaseModel):
    quotes: list[YahooQuoteSchema] = Field(default_factory=list)
