"""Pull-request gateway for hosted Git forges."""

__version__ = "0.1.0"
