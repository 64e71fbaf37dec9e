"""finsight - personal finance tracking and calculators."""

__version__ = "0.1.0"
