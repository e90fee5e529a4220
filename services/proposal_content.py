"""Narrative template for the proposal: numbered sections as plain data.

The assembler walks this list with one generic section routine, so adding or
re-ordering content never touches page-break logic.
"""

from dataclasses import dataclass, field

from config import CURRENCY_SYMBOL
from models.projections import ProjectionFigures
from models.proposal import ProposalRecord

STRUCTURE_COL_WIDTHS = [180, 315]
CASH_FLOW_COL_WIDTHS = [50, 80, 90, 100, 65, 110]


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class BulletList:
    items: list[str]
    numbered: bool = False


@dataclass(frozen=True)
class Table:
    rows: list[list[str]]
    col_widths: list[float]
    row_height: float = 20


@dataclass(frozen=True)
class Section:
    heading: str
    blocks: list = field(default_factory=list)


def _cur(val):
    if val is None:
        return "N/A"
    return f"{CURRENCY_SYMBOL} {val:,.2f}"


def _pct(val):
    return f"{val:.2f}%" if val is not None else "N/A"


def _rate(val):
    return f"{val:.3f}"


def _shares(val):
    return f"{val:,.0f}"


def _years(n):
    return f"{n} year" if n == 1 else f"{n} years"


MARKET_SECTORS = [
    "Technology & FinTech (Digital payments, SaaS platforms, AI solutions)",
    "Consumer Goods & Retail (E-commerce platforms, premium brands)",
    "Healthcare & Biotechnology (Telemedicine, pharmaceutical manufacturing)",
    "Renewable Energy (Solar power, battery storage solutions)",
    "Financial Services (Alternative lending, insurance technology)",
]


def structure_rows(record: ProposalRecord, figures: ProjectionFigures) -> list[list[str]]:
    return [
        ["Component", "Details"],
        ["Investment Amount", _cur(record.investment_amount)],
        ["Target Value", f"{_cur(figures.target_value)} ({_pct(record.target_return)})"],
        ["Time Horizon", _years(record.time_horizon)],
        ["Shares Issued", _shares(figures.shares_issued)],
        ["Share Price", _cur(figures.share_price)],
        ["Annualized Return", _pct(figures.annualized_return * 100)],
    ]


def cash_flow_rows(figures: ProjectionFigures) -> list[list[str]]:
    rows = [["Year", "Shares", "Dividend/Share", "Return", "Growth", "Value"]]
    shares = _shares(figures.shares_issued)
    for y in figures.years:
        if y.year == 0:
            rows.append(["0", shares, "-", "-", "-", _cur(y.value)])
        else:
            rows.append([
                str(y.year), shares, _rate(y.dividend),
                _cur(y.return_amount), _pct(y.growth), _cur(y.value),
            ])
    return rows


def build_sections(record: ProposalRecord, figures: ProjectionFigures) -> list[Section]:
    """Numbered body sections, interpolated with this proposal's figures."""
    amount = _cur(record.investment_amount)
    target = _cur(figures.target_value)
    horizon = _years(record.time_horizon)
    annualized = _pct(figures.annualized_return * 100)
    dividend_income = sum(y.return_amount for y in figures.years)

    return [
        Section("1. Executive Summary", [
            Paragraph(
                f"This proposal outlines a strategic private equity investment designed to grow an "
                f"initial capital of {amount} by {record.target_return:g}% ({target} total) over a "
                f"{record.time_horizon}-year horizon, equivalent to an annualized return of {annualized}. "
                f"By leveraging high-growth opportunities, we aim to maximize returns while mitigating "
                f"risks through diversification and expert management."
            ),
            Paragraph(
                "Our investment approach focuses on identifying undervalued companies with strong growth "
                "potential, experienced management teams, and scalable business models. Through active "
                "portfolio management and strategic guidance, we work closely with investee companies to "
                "unlock value and drive sustainable growth."
            ),
        ]),
        Section("2. Key Highlights", [
            BulletList([
                f"Target portfolio value of {target} at the end of the "
                f"{record.time_horizon}-year investment horizon.",
                f"{_shares(figures.shares_issued)} shares issued at {_cur(figures.share_price)} per share, "
                f"participating fully in all declared dividends.",
                f"Projected dividend income of {_cur(dividend_income)} over the first three years, lifting "
                f"the cumulative value of the holding to {_cur(figures.projected_value)}.",
                "Diversified exposure to high-growth sectors in South Africa and the wider region.",
                "Quarterly reporting and direct access to the investment team throughout the holding period.",
            ]),
        ]),
        Section("3. Investment Opportunity & Market Outlook", [
            Paragraph(
                "Private equity has historically outperformed public markets, delivering average annual "
                "returns of 12-15% over the long term. The current market environment presents exceptional "
                "opportunities in key growth sectors:"
            ),
            BulletList(MARKET_SECTORS),
            Paragraph(
                "South Africa's emerging market status, combined with a growing middle class and increasing "
                "digitalization, creates significant opportunities for private equity investments. We focus "
                "on businesses that can benefit from these macro trends while providing essential services "
                "or products to the domestic and regional markets."
            ),
        ]),
        Section("4. Proposed Investment Structure", [
            Table(structure_rows(record, figures), STRUCTURE_COL_WIDTHS),
        ]),
        Section("5. Projected Returns & Cash Flow", [
            Table(cash_flow_rows(figures), CASH_FLOW_COL_WIDTHS),
            Paragraph(
                f"Projected returns assume dividends of {_rate(record.year1_dividend)}, "
                f"{_rate(record.year2_dividend)} and {_rate(record.year3_dividend)} per share in years one "
                f"to three, each year's growth measured against the previous year's cumulative value. On this "
                f"dividend path the holding grows to {_cur(figures.projected_value)}, a cumulative return of "
                f"{_pct(figures.effective_return)}, compared with the target value of {target}."
            ),
        ]),
        Section("6. Risk Mitigation Strategy", [
            Paragraph(
                "Our investment approach incorporates comprehensive risk management through portfolio "
                "diversification, thorough due diligence, and active monitoring of investee companies. We "
                "mitigate risks through strategic sector allocation and maintain strong governance oversight."
            ),
            BulletList([
                "Diversification across sectors, stages and geographies to limit single-company exposure.",
                "Independent financial, legal and operational due diligence before every investment.",
                "Board representation and governance rights in investee companies.",
                "Monthly performance monitoring against agreed milestones and budgets.",
                "Defined exit planning from the outset of every investment.",
            ]),
        ]),
        Section("7. Why Invest With Us", [
            BulletList([
                "An experienced team with a track record across multiple private equity cycles.",
                "Licensed and regulated financial services provider with transparent fee structures.",
                "Alignment of interests through co-investment by the management team.",
                "Access to proprietary deal flow not available on public markets.",
                "Hands-on value creation support for every portfolio company.",
            ]),
        ]),
        Section("8. Next Steps", [
            BulletList([
                "Review this proposal and raise any questions with your relationship manager.",
                "Sign the client confirmation below to indicate acceptance of the proposal.",
                "Complete the investor onboarding and FICA verification documents.",
                f"Transfer the investment amount of {amount} to the designated account.",
                "Receive your share certificate and first quarterly investment report.",
            ], numbered=True),
        ]),
        Section("9. Conclusion", [
            Paragraph(
                f"This private equity strategy offers a compelling opportunity to grow {amount} into "
                f"{target} in {horizon}. With disciplined risk management, sector expertise, and proven "
                f"investment methodologies, we are confident in delivering superior risk-adjusted returns "
                f"that exceed traditional investment alternatives."
            ),
            Paragraph(
                "We look forward to partnering with you on this investment journey and are committed to "
                "transparent communication, regular reporting, and delivering on our investment objectives. "
                "Our team stands ready to address any questions and provide additional information as needed."
            ),
        ]),
    ]


DISCLAIMER = (
    "*Disclaimer: This proposal is for illustrative purposes only. Past performance is not indicative "
    "of future results. Private equity investments involve risk, including potential loss of capital. "
    "Investors should conduct independent due diligence and seek professional advice before making "
    "investment decisions. All projections are estimates based on current market conditions and "
    "assumptions.*"
)
