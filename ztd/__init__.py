"""Class decorators that derive constructors, display strings, exception types,
conversions and records from a class's fields."""

__version__ = "0.1.0"