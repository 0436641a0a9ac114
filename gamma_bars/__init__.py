"""Interactive gamma correction bars."""

__all__ = [
    "bands",
    "controller",
    "lookup",
    "marker",
    "models",
    "renderer",
]
