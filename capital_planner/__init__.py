"""Investment projection engine: capital growth, delay cost and what-if scenarios."""

__version__ = "0.1.0"
