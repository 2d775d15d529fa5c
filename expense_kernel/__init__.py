"""
Expense Kernel

Users, expense categories and expense records with an approval workflow:
- Field validators that accumulate typed violations
- Immutable, self-validating entities
- A pending -> approved | rejected state machine
- Async application services over abstract repositories
"""

__version__ = "0.1.0"
