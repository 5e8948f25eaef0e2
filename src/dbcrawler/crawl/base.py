"""Exceptions raised while setting up or running a crawl."""


class CrawlError(Exception):
    """Exception raised when a crawl cannot proceed."""

    pass


class ConfigurationError(CrawlError):
    """Raised when a required collaborator is missing at construction."""

    pass
