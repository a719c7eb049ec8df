"""Backend for the comparison report viewer."""

__version__ = "1.0.0"
