"""Link shortener service: short keys, redirects and click accounting."""

__version__ = "1.0.0"
