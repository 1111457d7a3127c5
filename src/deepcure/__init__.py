"""DeepCure: AI medical guidance assistant."""

__version__ = '0.1.0'
