"""litguard — conflict guard for literate-programming builds."""

__version__ = "0.1.0"
