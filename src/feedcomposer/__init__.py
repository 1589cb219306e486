"""feedcomposer - unified activity feed for a review/complaint platform."""

__version__ = "0.1.0"
