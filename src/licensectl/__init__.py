"""licensectl — license manifest aggregation CLI."""

__version__ = "0.1.0"
