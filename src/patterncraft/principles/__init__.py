"""
Principle Vignettes

Single responsibility, open/closed, Liskov substitution, interface
segregation and dependency inversion, plus the error-handling contracts.
"""

from . import birds, discounts, error_handling, orders, users, workers

__all__ = ["birds", "discounts", "error_handling", "orders", "users", "workers"]
