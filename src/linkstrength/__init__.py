"""linkstrength — hyperlink graph and link-prediction strength CLI."""

__version__ = "0.1.0"
