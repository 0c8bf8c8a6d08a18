"""Selection, filtering and bulk-action engine for Wi-Fi survey point tables."""

__version__ = "0.1.0"
