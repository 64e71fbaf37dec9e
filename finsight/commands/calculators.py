"""EMI, SIP and SWP calculator commands."""

import logging

from rich.console import Console
from rich.table import Table

from finsight.commands.formatting import currency_symbol, format_money
from finsight.domain.calculators import (
    compute_emi,
    compute_sip,
    compute_swp,
    interest_to_principal_ratio,
    split_months,
    wealth_multiplier,
)
from finsight.domain.parsing import parse_decimal

console = Console()
logger = logging.getLogger(__name__)


def _result_table(title: str) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")
    return table


def emi_command(principal: str, rate: str, years: str) -> None:
    """Show the monthly instalment for a loan."""
    p, r, n = parse_decimal(principal), parse_decimal(rate), parse_decimal(years)
    logger.debug("EMI inputs: principal=%s rate=%s years=%s", p, r, n)

    result = compute_emi(p, r, n)
    symbol = currency_symbol()

    table = _result_table("Loan EMI")
    table.add_row("Monthly EMI", f"[bold]{format_money(result.monthly_payment, symbol)}[/bold]")
    table.add_row("Principal", format_money(p, symbol))
    table.add_row("Total interest", f"[red]{format_money(result.total_interest, symbol)}[/red]")
    table.add_row("Total payment", format_money(result.total_payment, symbol))
    console.print(table)

    if result.monthly_payment > 0:
        ratio = interest_to_principal_ratio(result.total_interest, p)
        console.print(f"Interest vs principal ratio: [bold]{ratio:.2f}:1[/bold]")
        console.print(f"[dim]Monthly rate: {result.monthly_rate * 100:.4f}%[/dim]")


def sip_command(monthly: str, rate: str, years: str) -> None:
    """Show the maturity value of a monthly investment."""
    amount, r, n = parse_decimal(monthly), parse_decimal(rate), parse_decimal(years)
    logger.debug("SIP inputs: monthly=%s rate=%s years=%s", amount, r, n)

    result = compute_sip(amount, r, n)
    symbol = currency_symbol()

    table = _result_table("SIP Maturity")
    table.add_row("Maturity amount", f"[bold]{format_money(result.maturity_amount, symbol)}[/bold]")
    table.add_row("Total invested", format_money(result.total_invested, symbol))
    table.add_row("Estimated returns", f"[green]{format_money(result.total_returns, symbol)}[/green]")
    console.print(table)

    if result.total_invested > 0:
        multiplier = wealth_multiplier(result.maturity_amount, result.total_invested)
        console.print(f"Wealth multiplier: [bold]{multiplier:.1f}x[/bold]")
        console.print(f"[dim]Your money will grow {multiplier - 1:.1f} times[/dim]")


def swp_command(corpus: str, withdrawal: str, rate: str, years: str) -> None:
    """Show how long a corpus lasts under fixed monthly withdrawals."""
    c, w = parse_decimal(corpus), parse_decimal(withdrawal)
    r, n = parse_decimal(rate), parse_decimal(years)
    logger.debug("SWP inputs: corpus=%s withdrawal=%s rate=%s years=%s", c, w, r, n)

    result = compute_swp(c, w, r, n)
    symbol = currency_symbol()
    duration_years, duration_months = split_months(result.months_sustained)
    duration_style = "green" if result.sustained_full_term else "red"

    table = _result_table("SWP Withdrawal Plan")
    table.add_row("Total withdrawn", format_money(result.total_withdrawn, symbol))
    table.add_row("Remaining corpus", f"[bold]{format_money(result.remaining_amount, symbol)}[/bold]")
    table.add_row(
        "Duration",
        f"[{duration_style}]{duration_years} years {duration_months} months[/{duration_style}]",
    )
    console.print(table)

    if result.sustained_full_term:
        console.print("[green]✓ Sustainable plan[/green]", style="bold")
        console.print(
            f"[dim]Your corpus will last the full {years.strip()} years with "
            f"{format_money(result.remaining_amount, symbol)} remaining[/dim]"
        )
    else:
        console.print("[red]⚠ Plan not sustainable[/red]", style="bold")
        console.print(
            f"[dim]Your corpus will be depleted in {duration_years} years. Consider reducing monthly withdrawal.[/dim]"
        )
