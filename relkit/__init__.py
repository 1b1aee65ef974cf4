"""Release-branch reconciliation toolkit."""

__version__ = "0.3.0"
