"""Core domain models, errors and matching rules."""
