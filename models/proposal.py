import math
from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class ProposalRecord:
    """Client and investment parameters, exactly what the user types in."""
    client_name: str = ""
    client_address: str = ""        # may contain embedded line breaks
    proposal_date: str = ""
    investment_amount: float = 0.0
    target_return: float = 0.0      # percent, e.g. 72 for 72%
    time_horizon: int = 3           # years
    year1_dividend: float = 0.0     # per-share dividend rate
    year2_dividend: float = 0.0
    year3_dividend: float = 0.0

    @property
    def dividends(self) -> tuple[float, float, float]:
        return (self.year1_dividend, self.year2_dividend, self.year3_dividend)


# Request field name -> record attribute
FIELD_NAMES = {
    "clientName": "client_name",
    "clientAddress": "client_address",
    "proposalDate": "proposal_date",
    "investmentAmount": "investment_amount",
    "targetReturn": "target_return",
    "timeHorizon": "time_horizon",
    "year1Dividend": "year1_dividend",
    "year2Dividend": "year2_dividend",
    "year3Dividend": "year3_dividend",
}


def _f(val, default=0.0):
    """Parse float from request data."""
    try:
        return float(val) if val not in (None, "") else default
    except (ValueError, TypeError):
        return default


def _i(val, default=0):
    """Parse int from request data (accepts "3" and 3.0)."""
    try:
        return int(float(val)) if val not in (None, "") else default
    except (ValueError, TypeError, OverflowError):
        return default


def parse_proposal(data) -> ProposalRecord:
    """Parse request data (JSON dict or form) into a ProposalRecord."""
    return ProposalRecord(
        client_name=str(data.get("clientName", "") or "").strip(),
        client_address=str(data.get("clientAddress", "") or "").strip(),
        proposal_date=str(data.get("proposalDate", "") or "").strip(),
        investment_amount=_f(data.get("investmentAmount")),
        target_return=_f(data.get("targetReturn")),
        time_horizon=_i(data.get("timeHorizon"), 3),
        year1_dividend=_f(data.get("year1Dividend")),
        year2_dividend=_f(data.get("year2Dividend")),
        year3_dividend=_f(data.get("year3Dividend")),
    )


def validate_proposal(record: ProposalRecord) -> list[str]:
    """Return a list of human-readable problems; empty when the record is valid."""
    errors = []
    if not record.client_name:
        errors.append("Client name is required")
    if not record.client_address:
        errors.append("Client address is required")
    if not record.proposal_date:
        errors.append("Proposal date is required")
    numbers = {
        "Investment amount": record.investment_amount,
        "Target return": record.target_return,
        **{f"Year {n} dividend": d for n, d in enumerate(record.dividends, start=1)},
    }
    for label, value in numbers.items():
        if not math.isfinite(value):
            errors.append(f"{label} must be a finite number")
    if record.investment_amount < 1000:
        errors.append("Investment amount must be at least R 1,000")
    if not 1 <= record.target_return <= 200:
        errors.append("Target return must be between 1% and 200%")
    if not 1 <= record.time_horizon <= 10:
        errors.append("Time horizon must be between 1 and 10 years")
    for n, div in enumerate(record.dividends, start=1):
        if div < 0:
            errors.append(f"Year {n} dividend cannot be negative")
    return errors


def to_dict(record: ProposalRecord) -> dict:
    """Convert to the camelCase shape used by the HTTP layer."""
    values = asdict(record)
    return {key: values[attr] for key, attr in FIELD_NAMES.items()}
