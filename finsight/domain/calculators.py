"""Pure functions for the EMI, SIP and SWP calculators.

This module contains the functional core for the financial calculators:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Every calculator answers degenerate input (any non-positive amount, rate or
term) with an all-zero result instead of raising, and so does input large
enough to overflow a float. Public results are rounded half up to whole
currency units before they are returned; the ``*_breakdown`` variants keep
full precision for callers that derive further ratios.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class EMIResult:
    """Immutable loan repayment result."""

    monthly_payment: float
    total_payment: float
    total_interest: float
    monthly_rate: float


@dataclass(frozen=True)
class SIPResult:
    """Immutable SIP maturity result."""

    maturity_amount: float
    total_invested: float
    total_returns: float


@dataclass(frozen=True)
class SWPResult:
    """Immutable SWP depletion result."""

    remaining_amount: float
    total_withdrawn: float
    months_sustained: int
    sustained_full_term: bool


ZERO_EMI = EMIResult(monthly_payment=0, total_payment=0, total_interest=0, monthly_rate=0)
ZERO_SIP = SIPResult(maturity_amount=0, total_invested=0, total_returns=0)
ZERO_SWP = SWPResult(remaining_amount=0, total_withdrawn=0, months_sustained=0, sustained_full_term=False)


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit, with .5 going up.

    Args:
        value: Value to round.

    Returns:
        Rounded integer (2.5 -> 3, -2.5 -> -2).
    """
    return math.floor(value + 0.5)


def _all_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert an annual percentage rate to a monthly fraction."""
    return annual_rate_percent / 100 / 12


def emi_breakdown(principal: float, annual_rate_percent: float, tenure_years: float) -> EMIResult:
    """Calculate loan repayment figures without rounding.

    Fractional years give a fractional month count, which the closed-form
    formula accepts as an approximation.

    Args:
        principal: Loan amount.
        annual_rate_percent: Annual interest rate in percent (e.g. 9.5).
        tenure_years: Loan term in years.

    Returns:
        EMIResult with unrounded values, or all zeros for degenerate input.
    """
    if principal <= 0 or annual_rate_percent <= 0 or tenure_years <= 0:
        return ZERO_EMI

    r = monthly_rate(annual_rate_percent)
    n = tenure_years * 12
    try:
        growth = (1 + r) ** n
    except OverflowError:
        return ZERO_EMI

    payment = principal * r * growth / (growth - 1)
    total = payment * n
    if not _all_finite(payment, total):
        return ZERO_EMI

    return EMIResult(
        monthly_payment=payment,
        total_payment=total,
        total_interest=total - principal,
        monthly_rate=r,
    )


def compute_emi(principal: float, annual_rate_percent: float, tenure_years: float) -> EMIResult:
    """Calculate the equated monthly instalment for a loan.

    Args:
        principal: Loan amount.
        annual_rate_percent: Annual interest rate in percent.
        tenure_years: Loan term in years.

    Returns:
        EMIResult with monetary fields rounded to whole units. monthly_rate is
        left unrounded.
    """
    exact = emi_breakdown(principal, annual_rate_percent, tenure_years)
    return EMIResult(
        monthly_payment=round_half_up(exact.monthly_payment),
        total_payment=round_half_up(exact.total_payment),
        total_interest=round_half_up(exact.total_interest),
        monthly_rate=exact.monthly_rate,
    )


def sip_breakdown(monthly_contribution: float, annual_return_percent: float, years: float) -> SIPResult:
    """Calculate SIP maturity without rounding.

    Contributions are made at the start of each month, so the maturity is the
    future value of an annuity-due.

    Args:
        monthly_contribution: Amount invested every month.
        annual_return_percent: Expected annual return in percent.
        years: Investment horizon in years.

    Returns:
        SIPResult with unrounded values, or all zeros for degenerate input.
    """
    if monthly_contribution <= 0 or annual_return_percent <= 0 or years <= 0:
        return ZERO_SIP

    r = monthly_rate(annual_return_percent)
    n = years * 12

    try:
        maturity = monthly_contribution * (((1 + r) ** n - 1) / r) * (1 + r)
    except OverflowError:
        return ZERO_SIP
    invested = monthly_contribution * n
    if not _all_finite(maturity, invested):
        return ZERO_SIP

    return SIPResult(
        maturity_amount=maturity,
        total_invested=invested,
        total_returns=maturity - invested,
    )


def compute_sip(monthly_contribution: float, annual_return_percent: float, years: float) -> SIPResult:
    """Calculate SIP maturity rounded to whole units.

    Args:
        monthly_contribution: Amount invested every month.
        annual_return_percent: Expected annual return in percent.
        years: Investment horizon in years.

    Returns:
        SIPResult with all fields rounded half up.
    """
    exact = sip_breakdown(monthly_contribution, annual_return_percent, years)
    return SIPResult(
        maturity_amount=round_half_up(exact.maturity_amount),
        total_invested=round_half_up(exact.total_invested),
        total_returns=round_half_up(exact.total_returns),
    )


def compute_swp(
    initial_corpus: float,
    monthly_withdrawal: float,
    annual_return_percent: float,
    years: float,
) -> SWPResult:
    """Simulate a systematic withdrawal plan month by month.

    Each month the corpus grows first, then the withdrawal is taken. When the
    grown corpus is smaller than the withdrawal the simulation stops; the short
    balance is not withdrawn.

    The term is converted to a whole number of months with round_half_up,
    because partial months cannot be simulated. A term shorter than half a
    month is treated as degenerate input.

    Args:
        initial_corpus: Starting balance.
        monthly_withdrawal: Fixed amount withdrawn each month.
        annual_return_percent: Expected annual return in percent.
        years: Withdrawal period in years.

    Returns:
        SWPResult with remaining_amount and total_withdrawn rounded half up.
    """
    if initial_corpus <= 0 or monthly_withdrawal <= 0 or annual_return_percent <= 0 or years <= 0:
        return ZERO_SWP

    r = monthly_rate(annual_return_percent)
    if not math.isfinite(years * 12):
        return ZERO_SWP
    n = round_half_up(years * 12)
    if n < 1:
        return ZERO_SWP

    corpus = initial_corpus
    withdrawn = 0.0
    months = 0

    for month in range(1, n + 1):
        corpus *= 1 + r
        if corpus < monthly_withdrawal or math.isinf(corpus):
            break
        corpus -= monthly_withdrawal
        withdrawn += monthly_withdrawal
        months = month

    if not _all_finite(corpus, withdrawn):
        return ZERO_SWP

    return SWPResult(
        remaining_amount=round_half_up(corpus),
        total_withdrawn=round_half_up(withdrawn),
        months_sustained=months,
        sustained_full_term=months >= n,
    )


def interest_to_principal_ratio(total_interest: float, principal: float) -> float:
    """Ratio of interest paid to the amount borrowed (unclamped).

    Returns:
        total_interest / principal, or 0.0 when principal is not positive.
    """
    if principal <= 0:
        return 0.0
    return total_interest / principal


def wealth_multiplier(maturity_amount: float, total_invested: float) -> float:
    """How many times the invested amount the maturity value is.

    Returns:
        maturity_amount / total_invested, or 0.0 when nothing was invested.
    """
    if total_invested <= 0:
        return 0.0
    return maturity_amount / total_invested


def split_months(months: int) -> tuple[int, int]:
    """Split a month count into whole years and leftover months.

    Args:
        months: Number of months (e.g. 27).

    Returns:
        Tuple of (years, months), e.g. (2, 3).
    """
    return divmod(months, 12)
