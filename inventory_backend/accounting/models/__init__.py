# accounting/models/__init__.py

from .expense import FinanceExpense

__all__ = ["FinanceExpense"]
