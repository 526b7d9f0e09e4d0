"""Mixed-radix FFTs, autocorrelation pitch detection and audio buffering helpers in pure Python."""

__version__ = "0.1.0"