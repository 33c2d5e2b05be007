"""ModelSift - variant grouping and catalog search for model libraries."""

__version__ = "0.1.0"
