"""Building blocks for delimited-text processing: splitting, selecting, filtering, typing, summarising and sorting rows."""

__version__ = "0.1.0"