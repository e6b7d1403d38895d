"""Shared log lines for the monitor tests."""
import pytest

from hs_monitor.log_parser import HearthstoneLogParser, ParserCallbacks


def hero_line(hero, player, side, card_id="HERO_01", entity_id=1):
    return (
        f"TRANSITIONING card [name={hero} id={entity_id} zone=PLAY zonePos=0 "
        f"cardId={card_id} player={player}] to {side} PLAY (Hero)"
    )


def team_line(name, team):
    return f"[Power] GameState.DebugPrintPower() - TAG_CHANGE Entity={name} tag=TEAM_ID value={team}"


def playstate_line(name, status):
    return f"[Power] GameState.DebugPrintPower() - TAG_CHANGE Entity={name} tag=PLAYSTATE value={status}"


MATCH_START_LINES = [
    "TRANSITIONING card [name=Rexxar id=1 zone=PLAY zonePos=0 cardId=HERO_05 player=1] to FRIENDLY PLAY (Hero)",
    "[Power] GameState.DebugPrintPower() - TAG_CHANGE Entity=Player1 tag=TEAM_ID value=1",
    "TRANSITIONING card [name=Thrall id=2 zone=PLAY zonePos=0 cardId=HERO_02 player=2] to OPPOSING PLAY (Hero)",
    "[Power] GameState.DebugPrintPower() - TAG_CHANGE Entity=Player2 tag=TEAM_ID value=2",
]

ZONE_LINE = (
    "[Zone] ZoneChangeList.ProcessChanges() - id=2 local=False [name=Arcane Shot id=12 zone=HAND "
    "zonePos=1 cardId=DS1_185 player=1] zone from FRIENDLY DECK -> FRIENDLY HAND"
)


class Recorder:
    """Collects everything a parser reports."""

    def __init__(self):
        self.actions = []
        self.starts = []
        self.overs = []

    def callbacks(self):
        return ParserCallbacks(
            on_action=self.actions.append,
            on_match_start=self.starts.append,
            on_match_over=self.overs.append,
        )


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def parser(recorder):
    return HearthstoneLogParser(callbacks=recorder.callbacks())
