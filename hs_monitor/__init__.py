"""Live Hearthstone log monitor."""
from .hero_classes import class_of
from .log_parser import HearthstoneLogParser, ParserCallbacks, ZoneChangeEvent, classify
from .roster import Player, RosterTracker

__version__ = "0.1.0"
