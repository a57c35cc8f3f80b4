"""Output sinks."""

from postloom.infra.sinks.cards import ImageSink, social_card_route
from postloom.infra.sinks.json import JsonIndexSink

__all__ = ["ImageSink", "JsonIndexSink", "social_card_route"]
