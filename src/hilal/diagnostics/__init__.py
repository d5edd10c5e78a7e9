"""Diagnostics package.

- month_lengths: month-length statistics of the baseline and adjusted views (numpy, optional matplotlib plot)
"""

__all__ = ["month_lengths"]
