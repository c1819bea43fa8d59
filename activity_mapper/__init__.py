"""Activity mapper core: spreadsheet rows -> geocoded individuals -> activity markers."""

__version__ = "0.1.0"
