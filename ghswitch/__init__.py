"""GitHub account switcher - manage multiple GitHub identities per repository."""

__version__ = "0.3.0"
