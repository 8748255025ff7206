"""PensionFlow: basic and individual-account pension projection."""

__version__ = "1.2.0"
