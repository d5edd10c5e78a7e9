"""Baseline (tabulated) month-start tables."""
