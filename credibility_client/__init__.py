"""Client for submitting information to a credibility scorer and browsing its knowledge base."""

__version__ = "0.1.0"
