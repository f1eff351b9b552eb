"""
Expense statistics.
"""
from datetime import date

from rentdesk.models import Expense
from rentdesk.services.ledger import compute_expense_stats


def expense(amount, recurrence, on):
    return Expense(
        title="x",
        amount=amount,
        entry_date=on,
        category="Other",
        scope="Global",
        recurrence=recurrence,
    )


def test_yearly_total_combines_recurrences():
    expenses = [
        expense(100, "Monthly", date(2024, 1, 1)),
        expense(1000, "Yearly", date(2023, 5, 1)),
        expense(500, "One-time", date(2025, 3, 1)),
        expense(300, "One-time", date(2024, 3, 1)),
    ]

    stats = compute_expense_stats(expenses, 2025)

    assert stats.year == 2025
    assert stats.monthly_recurring == 100
    assert stats.yearly_recurring == 1000
    assert stats.one_time_this_year == 500
    assert stats.total_yearly == 100 * 12 + 1000 + 500


def test_empty_book():
    stats = compute_expense_stats([], 2025)

    assert stats.total_yearly == 0
