"""Service layer orchestrating stores and adapters."""
