"""Immutable dataset records."""
from .dataset import Dataset, Region, Summary, Timeline

__all__ = ["Dataset", "Region", "Summary", "Timeline"]
