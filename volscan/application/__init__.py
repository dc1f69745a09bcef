"""Application layer: calculators and services."""
