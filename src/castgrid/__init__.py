"""castgrid: a daily movie-connection grid puzzle."""

__version__ = "0.1.0"
