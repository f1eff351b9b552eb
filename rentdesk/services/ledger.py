"""
Expense statistics.
"""
from typing import Iterable

from rentdesk.models.ledger import Expense
from rentdesk.schemas.ledger import ExpenseStats


def compute_expense_stats(expenses: Iterable[Expense], year: int) -> ExpenseStats:
    """
    Yearly cost of the expense book.

    Monthly recurring expenses count twelve times, yearly ones once, and
    one-time expenses only when they fall in the given year.
    """
    monthly = 0.0
    yearly = 0.0
    one_time = 0.0

    for expense in expenses:
        if expense.recurrence == "Monthly":
            monthly += expense.amount
        elif expense.recurrence == "Yearly":
            yearly += expense.amount
        elif expense.recurrence == "One-time" and expense.entry_date.year == year:
            one_time += expense.amount

    return ExpenseStats(
        year=year,
        total_yearly=monthly * 12 + yearly + one_time,
        monthly_recurring=monthly,
        yearly_recurring=yearly,
        one_time_this_year=one_time,
    )
