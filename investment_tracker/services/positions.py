"""Position aggregation over a transaction log.

Positions are never stored. They are rebuilt from the full transaction history
on every read using the weighted-average cost method: a sale removes cost in
proportion to the fraction of the holding sold, priced at the average cost held
*before* the sale.

Transactions are folded in the order the caller supplies them. Nothing here
sorts by date, so a caller that wants chronological results must sort first.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, getcontext
from typing import Optional, Union

getcontext().prec = 28

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

PriceLookup = Union[Mapping[str, Decimal], Callable[[str], Optional[Decimal]]]


@dataclass(frozen=True)
class TransactionInput:
    """Normalized transaction input for position building."""

    id: str
    symbol: str
    type: str
    shares: Decimal
    price: Decimal
    date: date
    fees: Decimal = ZERO
    total: Decimal | None = None

    @property
    def cost(self) -> Decimal:
        """Cash paid for a buy: the stored total, else shares x price + fees."""

        if self.total is not None:
            return self.total
        return self.shares * self.price + self.fees


@dataclass
class Holding:
    """Running totals for one symbol while transactions are folded in."""

    symbol: str
    total_shares: Decimal = ZERO
    total_cost: Decimal = ZERO
    transaction_count: int = 0


@dataclass(frozen=True)
class Position:
    symbol: str
    total_shares: Decimal
    total_cost: Decimal
    avg_cost: Decimal
    current_price: Decimal
    current_value: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal
    transaction_count: int


@dataclass(frozen=True)
class OversoldPosition:
    """A symbol whose sells exceeded its buys; it is left out of the positions."""

    symbol: str
    total_shares: Decimal


@dataclass(frozen=True)
class PositionReport:
    positions: list[Position]
    oversold: list[OversoldPosition]


class PositionLedger:
    """Per-symbol running share count and cost basis."""

    def __init__(self) -> None:
        self._holdings: dict[str, Holding] = {}

    def apply(self, tx: TransactionInput) -> None:
        kind = tx.type.upper()
        if kind not in ("BUY", "SELL"):
            logger.debug("Ignoring %s transaction %s for %s", kind, tx.id, tx.symbol)
            return

        symbol = tx.symbol.strip().upper()
        holding = self._holdings.get(symbol)
        if holding is None:
            holding = Holding(symbol=symbol)
            self._holdings[symbol] = holding
        holding.transaction_count += 1

        if kind == "BUY":
            holding.total_shares += tx.shares
            holding.total_cost += tx.cost
            return

        shares_before = holding.total_shares
        holding.total_shares -= tx.shares
        if shares_before > 0:
            holding.total_cost -= tx.shares * (holding.total_cost / shares_before)
        if holding.total_shares <= 0:
            # A full or over-sell leaves no basis behind, including rounding residue.
            holding.total_cost = ZERO

    def apply_all(self, transactions: Iterable[TransactionInput]) -> None:
        for tx in transactions:
            self.apply(tx)

    def holdings(self) -> list[Holding]:
        """Holdings in order of the symbol's first appearance."""

        return list(self._holdings.values())

    def open_holdings(self) -> list[Holding]:
        return [h for h in self._holdings.values() if h.total_shares > 0]

    @property
    def cost_basis(self) -> Decimal:
        """Total cost basis across all symbols currently held."""

        return sum((h.total_cost for h in self.open_holdings()), ZERO)


def lookup_price(prices: PriceLookup, symbol: str) -> Decimal | None:
    if isinstance(prices, Mapping):
        price = prices.get(symbol)
    else:
        price = prices(symbol)
    if price is None:
        return None
    return Decimal(str(price))


def _to_position(holding: Holding, prices: PriceLookup) -> Position:
    avg_cost = holding.total_cost / holding.total_shares
    current_price = lookup_price(prices, holding.symbol)
    if current_price is None:
        current_price = avg_cost
    current_value = holding.total_shares * current_price
    gain_loss = current_value - holding.total_cost
    gain_loss_percent = gain_loss / holding.total_cost * HUNDRED if holding.total_cost else ZERO
    return Position(
        symbol=holding.symbol,
        total_shares=holding.total_shares,
        total_cost=holding.total_cost,
        avg_cost=avg_cost,
        current_price=current_price,
        current_value=current_value,
        gain_loss=gain_loss,
        gain_loss_percent=gain_loss_percent,
        transaction_count=holding.transaction_count,
    )


def build_position_report(transactions: Iterable[TransactionInput], prices: PriceLookup) -> PositionReport:
    """Fold ``transactions`` into positions and list any over-sold symbols.

    Over-sold symbols (negative net shares) never become positions; each one is
    logged as a warning and reported in :attr:`PositionReport.oversold`.
    """

    ledger = PositionLedger()
    ledger.apply_all(transactions)

    positions: list[Position] = []
    oversold: list[OversoldPosition] = []
    for holding in ledger.holdings():
        if holding.total_shares > 0:
            positions.append(_to_position(holding, prices))
        elif holding.total_shares < 0:
            logger.warning(
                "Sells exceed buys for %s (net shares %s); position omitted", holding.symbol, holding.total_shares
            )
            oversold.append(OversoldPosition(symbol=holding.symbol, total_shares=holding.total_shares))
    return PositionReport(positions=positions, oversold=oversold)


def aggregate(transactions: Iterable[TransactionInput], prices: PriceLookup) -> list[Position]:
    """Return current positions with cost basis and unrealized gain/loss.

    Symbols sold down to zero are dropped, as are over-sold symbols; use
    :func:`build_position_report` to receive the latter.
    """

    return build_position_report(transactions, prices).positions


__all__ = [
    "Holding",
    "OversoldPosition",
    "Position",
    "PositionLedger",
    "PositionReport",
    "PriceLookup",
    "TransactionInput",
    "aggregate",
    "build_position_report",
    "lookup_price",
]
