"""City Weather - a terminal weather lookup for a short list of US cities."""

__version__ = "0.1.0"
