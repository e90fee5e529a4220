"""Dividend-driven projection engine. Every figure derives from a ProposalRecord."""

from dataclasses import dataclass, field

from config import SHARE_PRICE
from models.proposal import ProposalRecord


@dataclass(frozen=True)
class YearProjection:
    year: int
    dividend: float = 0.0        # per-share rate
    return_amount: float = 0.0   # shares issued x dividend
    value: float = 0.0           # cumulative value at year end
    growth: float = 0.0          # percent of previous cumulative value


@dataclass(frozen=True)
class ProjectionFigures:
    """Everything derived from the proposal inputs. Recomputed per document."""
    share_price: float = SHARE_PRICE
    shares_issued: float = 0.0
    target_value: float = 0.0
    total_profit: float = 0.0
    annualized_return: float = 0.0   # fraction, 0.198 == 19.8%
    projected_value: float = 0.0     # year 3 cumulative value
    effective_return: float = 0.0    # percent implied by the dividend path
    years: list[YearProjection] = field(default_factory=list)  # year 0..3

    def year(self, n: int) -> YearProjection:
        return self.years[n]


def calc_target_value(investment_amount: float, target_return: float) -> float:
    """Principal grown by the requested target return percentage."""
    return investment_amount * (1 + target_return / 100)


def calc_annualized_return(start_value: float, end_value: float, years: int) -> float:
    """Compound annual growth rate as a fraction."""
    if start_value <= 0 or end_value <= 0 or years <= 0:
        return 0.0
    return (end_value / start_value) ** (1 / years) - 1


def build_year_projections(investment_amount: float, shares_issued: float,
                           dividends) -> list[YearProjection]:
    """Year 0..N rows. Each year's value compounds on the previous cumulative value."""
    rows = [YearProjection(year=0, value=investment_amount)]
    for n, dividend in enumerate(dividends, start=1):
        prev_value = rows[-1].value
        ret = shares_issued * dividend
        growth = ret / prev_value * 100 if prev_value > 0 else 0.0
        rows.append(YearProjection(
            year=n,
            dividend=dividend,
            return_amount=ret,
            value=prev_value + ret,
            growth=growth,
        ))
    return rows


def compute_projections(record: ProposalRecord, share_price: float = SHARE_PRICE) -> ProjectionFigures:
    """Derive the projection figures used throughout the proposal document."""
    amount = record.investment_amount
    shares = amount / share_price
    years = build_year_projections(amount, shares, record.dividends)

    target = calc_target_value(amount, record.target_return)
    projected = years[-1].value
    effective = (projected - amount) / amount * 100 if amount > 0 else 0.0

    return ProjectionFigures(
        share_price=share_price,
        shares_issued=shares,
        target_value=target,
        total_profit=target - amount,
        annualized_return=calc_annualized_return(amount, target, record.time_horizon),
        projected_value=projected,
        effective_return=effective,
        years=years,
    )


def to_full_dict(figures: ProjectionFigures) -> dict:
    """Convert to a JSON-friendly dict for the calculations endpoint."""
    return {
        "sharePrice": figures.share_price,
        "sharesIssued": figures.shares_issued,
        "targetValue": figures.target_value,
        "totalProfit": figures.total_profit,
        "annualizedReturn": figures.annualized_return * 100,
        "projectedValue": figures.projected_value,
        "calculatedTargetReturn": figures.effective_return,
        "years": [
            {
                "year": y.year,
                "dividend": y.dividend,
                "return": y.return_amount,
                "value": y.value,
                "growth": y.growth,
            }
            for y in figures.years
        ],
    }
