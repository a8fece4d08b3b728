"""devcover - stamp a development cover over application icons during builds."""

__version__ = "0.1.0"
