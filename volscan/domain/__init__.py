"""Domain layer: immutable types, errors, protocols and reference tables."""
