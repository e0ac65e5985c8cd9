"""Effects layer: sound cues and win sparkles."""

from .feedback import Cue, FeedbackController, Spark, make_sparkles


__all__ = [
    "Cue",
    "FeedbackController",
    "Spark",
    "make_sparkles",
]
