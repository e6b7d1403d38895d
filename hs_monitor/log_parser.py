"""Turn Hearthstone client log lines into match events.

`classify` recognises the handful of Zone and Power log lines the monitor
cares about. `HearthstoneLogParser` feeds every classified line through a
`RosterTracker` and reports board actions, match starts and match results to
the callbacks it was built with.
"""
import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from .hero_classes import class_of
from .roster import Player, RosterTracker

# ---------- Patterns ----------
ZONE_CHANGE = re.compile(
    r"^\[Zone\] ZoneChangeList\.ProcessChanges\(\) - id=\d+ local=.+ "
    r"\[name=(?P<name>.+) id=(?P<id>\d+) zone=.+ zonePos=\d+ cardId=(?P<card_id>.+) player=(?P<player>\d)\] "
    r"zone from ?(?P<from_team>FRIENDLY|OPPOSING)? ?(?P<from_zone>.*)? -> "
    r"?(?P<to_team>FRIENDLY|OPPOSING)? ?(?P<to_zone>.*)?$"
)
GAME_OVER = re.compile(
    r"\[Power\] GameState\.DebugPrintPower\(\) - TAG_CHANGE "
    r"Entity=(?P<name>.+) tag=PLAYSTATE value=(?P<status>LOST|WON|TIED)$"
)
GAME_START = re.compile(
    r"^\[Power\] GameState\.DebugPrintPower\(\) - TAG_CHANGE "
    r"Entity=(?P<name>.+) tag=TEAM_ID value=(?P<team>\d+)$"
)
HERO_REVEAL = re.compile(
    r"TRANSITIONING card \[name=(?P<hero>.+) id=.+ zone=.+ zonePos=.+ cardId=.+ player=(?P<player>\d)\] "
    r"to (?P<side>OPPOSING|FRIENDLY) PLAY \(Hero\)"
)


# ---------- Classified lines ----------
@dataclass(frozen=True)
class ZoneChangeEvent:
    name: str
    id: int
    card_id: str
    player: int
    from_team: Optional[str] = None
    from_zone: Optional[str] = None
    to_team: Optional[str] = None
    to_zone: Optional[str] = None

    def to_dict(self):
        return {
            "name": self.name,
            "id": self.id,
            "cardId": self.card_id,
            "player": self.player,
            "fromTeam": self.from_team,
            "fromZone": self.from_zone,
            "toTeam": self.to_team,
            "toZone": self.to_zone,
        }


@dataclass(frozen=True)
class GameOver:
    name: str
    status: str


@dataclass(frozen=True)
class GameStart:
    name: str
    team: int


@dataclass(frozen=True)
class HeroReveal:
    hero: str
    player: int
    side: str


def _optional(value):
    return value or None


def parse_zone_change(line):
    m = ZONE_CHANGE.search(line)
    if not m:
        return None
    return ZoneChangeEvent(
        name=m.group("name"),
        id=int(m.group("id")),
        card_id=m.group("card_id"),
        player=int(m.group("player")),
        from_team=_optional(m.group("from_team")),
        from_zone=_optional(m.group("from_zone")),
        to_team=_optional(m.group("to_team")),
        to_zone=_optional(m.group("to_zone")),
    )


def parse_game_over(line):
    m = GAME_OVER.search(line)
    if not m:
        return None
    return GameOver(name=m.group("name"), status=m.group("status"))


def parse_game_start(line):
    m = GAME_START.search(line)
    if not m:
        return None
    return GameStart(name=m.group("name"), team=int(m.group("team")))


def parse_hero_reveal(line):
    m = HERO_REVEAL.search(line)
    if not m:
        return None
    return HeroReveal(hero=m.group("hero"), player=int(m.group("player")), side=m.group("side"))


# Tried in order, the first parser that recognises a line wins
LINE_PARSERS = (
    parse_zone_change,
    parse_game_over,
    parse_game_start,
    parse_hero_reveal,
)


def classify(line):
    """
    Classify a single log line.

    Args:
        line: Raw log line (may include newline)

    Returns:
        ZoneChangeEvent, GameOver, GameStart or HeroReveal, None if the line
        is not one the monitor tracks
    """
    line = line.rstrip("\r\n")
    if not line:
        return None
    for parser in LINE_PARSERS:
        result = parser(line)
        if result is not None:
            return result
    return None


# ---------- Event dispatch ----------
def _ignore(*args):
    pass


@dataclass
class ParserCallbacks:
    """Handlers for the events a parser reports."""
    on_action: Callable[[ZoneChangeEvent], None] = _ignore
    on_match_start: Callable[[list], None] = _ignore
    on_match_over: Callable[[list], None] = _ignore


@dataclass
class ParserStats:
    lines: int = 0
    matched: int = 0
    unmatched: int = 0
    actions: int = 0
    matches_started: int = 0
    matches_over: int = 0

    def to_dict(self):
        return {
            "lines": self.lines,
            "matched": self.matched,
            "unmatched": self.unmatched,
            "actions": self.actions,
            "matchesStarted": self.matches_started,
            "matchesOver": self.matches_over,
        }


class HearthstoneLogParser:
    """Processes batches of log lines in arrival order."""

    def __init__(self, callbacks=None, roster=None):
        self.callbacks = callbacks or ParserCallbacks()
        self.roster = roster if roster is not None else RosterTracker()
        self.stats = ParserStats()

    def process_lines(self, lines):
        for line in lines:
            self.process_line(line)

    def process_line(self, line):
        self.stats.lines += 1
        result = classify(line)
        if result is None:
            self.stats.unmatched += 1
            logging.debug(f"Ignored log line: {line.rstrip()[:120]}")
            return None

        self.stats.matched += 1
        if isinstance(result, ZoneChangeEvent):
            self._handle_zone_change(result)
        elif isinstance(result, GameOver):
            self._handle_game_over(result)
        elif isinstance(result, GameStart):
            self._handle_game_start(result)
        elif isinstance(result, HeroReveal):
            self._handle_hero_reveal(result)
        return result

    def _handle_zone_change(self, event):
        self.stats.actions += 1
        self.callbacks.on_action(event)

    def _handle_hero_reveal(self, reveal):
        fact = Player(
            hero=reveal.hero,
            player_class=class_of(reveal.hero),
            team=reveal.player,
            side=reveal.side,
        )
        logging.debug(f"Hero revealed: {fact.to_dict()}")
        self.roster.record_hero(fact)

    def _handle_game_start(self, start):
        self.roster.merge(Player(name=start.name, team=start.team), "team")
        if self.roster.announce_start():
            players = self.roster.snapshot()
            logging.info(f"Match started: {[p.to_dict() for p in players]}")
            self.stats.matches_started += 1
            self.callbacks.on_match_start(players)

    def _handle_game_over(self, over):
        self.roster.merge(Player(name=over.name, status=over.status), "name")
        if self.roster.is_finished():
            players = self.roster.snapshot()
            logging.info(f"Match over: {[p.to_dict() for p in players]}")
            self.stats.matches_over += 1
            self.callbacks.on_match_over(players)
            self.roster.reset()
