"""Round payload helpers."""

from .codec import export_rounds, import_rounds, parse_rounds  # noqa: F401
