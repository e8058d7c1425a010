"""imagepub — nightly and release container image publisher."""

__version__ = "1.0.0"
