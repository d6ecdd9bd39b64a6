"""Output layer: turns ServiceResult into terminal text."""
