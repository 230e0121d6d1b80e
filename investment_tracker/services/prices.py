"""Static current-price table.

There is no market-data feed: current prices come from configuration and from
the ``current_price`` column of the stock catalogue.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from decimal import Decimal

from investment_tracker.models import Stock


class StaticPriceTable(Mapping[str, Decimal]):
    """Read-only symbol -> price mapping with case-insensitive symbols."""

    def __init__(self, prices: Mapping[str, Decimal | float | str] | None = None):
        self._prices: dict[str, Decimal] = {}
        for symbol, price in (prices or {}).items():
            if price is None:
                continue
            self._prices[symbol.strip().upper()] = Decimal(str(price))

    def __getitem__(self, symbol: str) -> Decimal:
        return self._prices[symbol.strip().upper()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._prices)

    def __len__(self) -> int:
        return len(self._prices)

    def get_current_price(self, symbol: str) -> Decimal | None:
        return self.get(symbol)


def build_price_table(
    configured: Mapping[str, Decimal] | None,
    stocks: Iterable[Stock] = (),
) -> StaticPriceTable:
    """Merge catalogue prices with configured prices; configured prices win."""

    merged: dict[str, Decimal] = {}
    for stock in stocks:
        if stock.current_price is not None:
            merged[stock.symbol.upper()] = Decimal(str(stock.current_price))
    for symbol, price in (configured or {}).items():
        merged[symbol.strip().upper()] = Decimal(str(price))
    return StaticPriceTable(merged)


__all__ = ["StaticPriceTable", "build_price_table"]
