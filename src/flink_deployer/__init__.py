"""Zero-downtime Flink job deployer."""

__version__ = "0.1.0"

__all__ = ["__version__"]
