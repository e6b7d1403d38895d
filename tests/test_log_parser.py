"""Tests for log line classification."""
import pytest

from conftest import ZONE_LINE, hero_line, playstate_line, team_line
from hs_monitor.log_parser import (
    GameOver,
    GameStart,
    HeroReveal,
    ZoneChangeEvent,
    classify,
)


def test_zone_change_with_both_sides():
    result = classify(ZONE_LINE)
    assert result == ZoneChangeEvent(
        name="Arcane Shot",
        id=12,
        card_id="DS1_185",
        player=1,
        from_team="FRIENDLY",
        from_zone="DECK",
        to_team="FRIENDLY",
        to_zone="HAND",
    )


def test_zone_change_from_nowhere():
    """An empty source zone becomes None, not an empty string."""
    line = (
        "[Zone] ZoneChangeList.ProcessChanges() - id=1 local=False [name=Rexxar id=4 zone=PLAY "
        "zonePos=0 cardId=HERO_05 player=1] zone from  -> FRIENDLY PLAY (Hero)"
    )
    result = classify(line)
    assert isinstance(result, ZoneChangeEvent)
    assert result.from_team is None
    assert result.from_zone is None
    assert result.to_team == "FRIENDLY"
    assert result.to_zone == "PLAY (Hero)"


def test_zone_change_to_nowhere():
    line = (
        "[Zone] ZoneChangeList.ProcessChanges() - id=7 local=True [name=Arcane Shot id=12 zone=PLAY "
        "zonePos=0 cardId=DS1_185 player=1] zone from FRIENDLY HAND ->"
    )
    result = classify(line)
    assert result.from_team == "FRIENDLY"
    assert result.from_zone == "HAND"
    assert result.to_team is None
    assert result.to_zone is None


def test_zone_change_to_dict_uses_camel_case():
    data = classify(ZONE_LINE).to_dict()
    assert data == {
        "name": "Arcane Shot",
        "id": 12,
        "cardId": "DS1_185",
        "player": 1,
        "fromTeam": "FRIENDLY",
        "fromZone": "DECK",
        "toTeam": "FRIENDLY",
        "toZone": "HAND",
    }


def test_hero_reveal():
    result = classify(hero_line("Thrall", 2, "OPPOSING", card_id="HERO_02"))
    assert result == HeroReveal(hero="Thrall", player=2, side="OPPOSING")


def test_hero_reveal_with_log_prefix():
    line = "[Zone] ZoneChangeList.ProcessChanges() - " + hero_line("Gul'dan", 1, "FRIENDLY")
    assert classify(line) == HeroReveal(hero="Gul'dan", player=1, side="FRIENDLY")


def test_game_start():
    assert classify(team_line("Player1", 1)) == GameStart(name="Player1", team=1)


def test_game_start_keeps_spaces_in_entity_name():
    assert classify(team_line("Some Player", 2)) == GameStart(name="Some Player", team=2)


@pytest.mark.parametrize("status", ["WON", "LOST", "TIED"])
def test_game_over(status):
    assert classify(playstate_line("Player1", status)) == GameOver(name="Player1", status=status)


def test_trailing_newline_is_ignored():
    assert classify(team_line("Player1", 1) + "\r\n") == GameStart(name="Player1", team=1)


@pytest.mark.parametrize("line", [
    "",
    "\n",
    "random noise",
    "[Power] GameState.DebugPrintPower() - TAG_CHANGE Entity=Player1 tag=RESOURCES value=2",
    "[Power] GameState.DebugPrintPower() - TAG_CHANGE Entity=Player1 tag=PLAYSTATE value=PLAYING",
    "[Power] GameState.DebugPrintPower() - TAG_CHANGE Entity=Player1 tag=TEAM_ID value=one",
    "TRANSITIONING card [name=Fireball id=9 zone=HAND zonePos=1 cardId=CS2_029 player=1] to FRIENDLY HAND",
])
def test_unrecognised_lines(line):
    assert classify(line) is None


def test_zone_change_wins_over_hero_reveal():
    """A zone line that embeds a hero reveal is still a zone change."""
    line = (
        "[Zone] ZoneChangeList.ProcessChanges() - id=1 local=" + hero_line("Rexxar", 1, "FRIENDLY")
        + " [name=Rexxar id=4 zone=PLAY zonePos=0 cardId=HERO_05 player=1] zone from  -> FRIENDLY PLAY (Hero)"
    )
    result = classify(line)
    assert isinstance(result, ZoneChangeEvent)
    assert result.id == 4


def test_game_over_wins_over_hero_reveal():
    line = hero_line("Rexxar", 1, "FRIENDLY") + " " + playstate_line("Player1", "WON")
    assert classify(line) == GameOver(name="Player1", status="WON")
