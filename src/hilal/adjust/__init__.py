"""Local month-start adjustments layered over a baseline table."""
