"""acpublisher - publish Android packages to App Center."""

__version__ = "1.0.0"
