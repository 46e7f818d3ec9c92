"""Synthetic load generator for partitioned, replicated Kafka topics."""

__version__ = "0.1.0"
