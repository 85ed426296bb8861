"""REST service for managing football player records."""

__version__ = "0.1.0"
