import copy
import logging
from dataclasses import dataclass, fields
from typing import Optional

MAX_PLAYERS = 2

# Player attribute -> key used in emitted dicts
_FIELD_KEYS = {
    "team": "team",
    "name": "name",
    "hero": "hero",
    "player_class": "class",
    "side": "side",
    "status": "status",
}


@dataclass
class Player:
    """Partial player record, filled in as facts arrive from the log."""
    team: Optional[int] = None
    name: Optional[str] = None
    hero: Optional[str] = None
    player_class: Optional[str] = None
    side: Optional[str] = None
    status: Optional[str] = None

    def get(self, key):
        return getattr(self, key)

    def update_from(self, fact):
        """Overwrite this record's fields with every field set on `fact`."""
        for f in fields(fact):
            value = getattr(fact, f.name)
            if value is not None:
                setattr(self, f.name, value)

    def to_dict(self):
        return {
            _FIELD_KEYS[f.name]: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


class RosterTracker:
    """Accumulates facts about the two players of the current match.

    Facts are merged either on `team` or on `name`. Team-keyed facts come from
    hero reveals and TEAM_ID tags, name-keyed facts from PLAYSTATE tags.
    """

    def __init__(self):
        self.players = []
        self.is_player_set = False
        self._start_announced = False

    def __len__(self):
        return len(self.players)

    def is_full(self):
        return len(self.players) == MAX_PLAYERS

    def is_finished(self):
        """True when both players carry a final status."""
        return self.is_full() and all(p.status for p in self.players)

    def snapshot(self):
        return [copy.deepcopy(p) for p in self.players]

    def record_hero(self, fact):
        """Merge a hero reveal. Name-keyed facts merge from now on."""
        self.is_player_set = True
        self.merge(fact, "team")

    def announce_start(self):
        """Return True the first time the roster is full during a match."""
        if self.is_full() and not self._start_announced:
            self._start_announced = True
            return True
        return False

    def reset(self):
        self.players = []
        self.is_player_set = False
        self._start_announced = False

    def merge(self, fact, key):
        if key == "team":
            if not any(p.team == fact.team for p in self.players):
                self._append(fact)
                return
        elif not self.is_player_set:
            # tracker attached in the middle of a match
            if self._append(fact):
                return

        # every tied record gets the fact, not only the first one
        for player in self.players:
            if player.get(key) == fact.get(key):
                player.update_from(fact)

    def _append(self, fact):
        if self.is_full():
            logging.warning(f"Roster full, not adding player record {fact.to_dict()}")
            return False
        self.players.append(copy.deepcopy(fact))
        return True
