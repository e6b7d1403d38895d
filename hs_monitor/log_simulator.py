import logging
import threading
import time

from colorama import Fore, Style

from .config import (
    SIMULATED_LOG_FILE,
    SIMULATION_CHUNK_SIZE,
    SIMULATION_SPEED,
    TEST_LOGS_DIR,
    ensure_directories,
)

SAMPLE_MATCH = """\
[Power] GameState.DebugPrintPower() - CREATE_GAME
[Zone] ZoneChangeList.ProcessChanges() - id=1 local=False [name=Rexxar id=4 zone=PLAY zonePos=0 cardId=HERO_05 player=1] zone from  -> FRIENDLY PLAY (Hero)
TRANSITIONING card [name=Rexxar id=4 zone=PLAY zonePos=0 cardId=HERO_05 player=1] to FRIENDLY PLAY (Hero)
[Power] GameState.DebugPrintPower() - TAG_CHANGE Entity=Player1 tag=TEAM_ID value=1
TRANSITIONING card [name=Thrall id=36 zone=PLAY zonePos=0 cardId=HERO_02 player=2] to OPPOSING PLAY (Hero)
[Power] GameState.DebugPrintPower() - TAG_CHANGE Entity=Player2 tag=TEAM_ID value=2
[Zone] ZoneChangeList.ProcessChanges() - id=2 local=False [name=Arcane Shot id=12 zone=HAND zonePos=1 cardId=DS1_185 player=1] zone from FRIENDLY DECK -> FRIENDLY HAND
[Zone] ZoneChangeList.ProcessChanges() - id=3 local=False [name=River Crocolisk id=15 zone=HAND zonePos=2 cardId=CS2_120 player=1] zone from FRIENDLY DECK -> FRIENDLY HAND
[Power] GameState.DebugPrintPower() - TAG_CHANGE Entity=Player1 tag=RESOURCES value=2
[Zone] ZoneChangeList.ProcessChanges() - id=4 local=True [name=River Crocolisk id=15 zone=PLAY zonePos=1 cardId=CS2_120 player=1] zone from FRIENDLY HAND -> FRIENDLY PLAY
[Zone] ZoneChangeList.ProcessChanges() - id=5 local=False [name=Flametongue Totem id=40 zone=PLAY zonePos=1 cardId=EX1_565 player=2] zone from OPPOSING HAND -> OPPOSING PLAY
[Zone] ZoneChangeList.ProcessChanges() - id=6 local=False [name=River Crocolisk id=15 zone=GRAVEYARD zonePos=0 cardId=CS2_120 player=1] zone from FRIENDLY PLAY -> FRIENDLY GRAVEYARD
[Zone] ZoneChangeList.ProcessChanges() - id=7 local=True [name=Arcane Shot id=12 zone=PLAY zonePos=0 cardId=DS1_185 player=1] zone from FRIENDLY HAND ->
[Power] GameState.DebugPrintPower() - TAG_CHANGE Entity=Player2 tag=PLAYSTATE value=LOST
[Power] GameState.DebugPrintPower() - TAG_CHANGE Entity=Player1 tag=PLAYSTATE value=WON
[Power] GameState.DebugPrintPower() - TAG_CHANGE Entity=GameEntity tag=STATE value=COMPLETE
"""


class SimulationManager:
    """Replays a Hearthstone log into the simulated live file on a separate thread."""

    def __init__(self, quiet=False, output_file=None, speed=SIMULATION_SPEED, chunk_size=SIMULATION_CHUNK_SIZE):
        self.thread = None
        self.stop_flag = threading.Event()
        self.current_progress = 0.0
        self.total_lines = 0
        self.current_line = 0
        self.is_running = False
        self.simulation_complete = False
        self.source_file = None
        self.output_file = output_file or SIMULATED_LOG_FILE
        self.speed = speed
        self.chunk_size = chunk_size
        self.quiet = quiet

    def get_progress(self):
        """Get current simulation progress as percentage."""
        return self.current_progress

    def is_complete(self):
        """Check if simulation is complete."""
        return self.simulation_complete

    def start(self, source_file=None):
        """Start the simulation in a separate thread."""
        if source_file is None:
            test_files = get_test_log_files()
            if not test_files:
                self._print_colored(f"No test log files found in {TEST_LOGS_DIR}", Fore.RED)
                self._print_colored("Creating sample test data...", Fore.YELLOW)
                test_files = [self.create_sample_test_data()]
            source_file = test_files[0]

        self.source_file = source_file
        self._print_colored(f"Using test file: {self.source_file.name}", Fore.CYAN)
        self.stop_flag.clear()

        # Start from an empty file so the monitor sees the whole match
        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        self.output_file.write_text("", encoding="utf-8")

        self.thread = threading.Thread(
            target=self._simulate_live_log,
            args=(self.source_file, self.output_file),
            daemon=True
        )
        self.thread.start()
        return True

    def stop(self):
        """Stop the simulation."""
        if self.thread and self.thread.is_alive():
            self.stop_flag.set()
            self.thread.join(timeout=5)
        self.is_running = False

    def _print_colored(self, text, color=Fore.WHITE):
        if not self.quiet:
            print(f"{color}{text}{Style.RESET_ALL}")

    def _simulate_live_log(self, source_file, output_file):
        """
        Simulate a live log by appending lines from the source file in
        chunks with a time delay.
        """
        self.is_running = True
        self.simulation_complete = False

        try:
            with open(source_file, 'r', encoding='utf-8') as f:
                lines = f.read().splitlines()

            self.total_lines = len(lines)
            self._print_colored(f"Replaying {self.total_lines} log lines.", Fore.MAGENTA)
            logging.info(f"Starting simulation from {source_file.name}")

            with open(output_file, 'a', encoding='utf-8') as out:
                self.current_line = 0
                while self.current_line < self.total_lines and not self.stop_flag.is_set():
                    chunk = lines[self.current_line:self.current_line + self.chunk_size]
                    out.write("\n".join(chunk) + "\n")
                    out.flush()
                    self.current_line += len(chunk)
                    self.current_progress = (self.current_line / self.total_lines) * 100
                    time.sleep(self.speed)

        except OSError as e:
            logging.error(f"Simulation error: {e}")
        finally:
            self.is_running = False
            self.simulation_complete = True
            logging.info("Simulation completed.")

    def create_sample_test_data(self):
        """Create a sample match log for demonstration."""
        ensure_directories()
        sample_file = TEST_LOGS_DIR / "sample_match.log"
        sample_file.write_text(SAMPLE_MATCH, encoding="utf-8")
        self._print_colored(f"Created sample test file: {sample_file}", Fore.GREEN)
        return sample_file


def get_test_log_files():
    """Return the test logs available for simulation."""
    if not TEST_LOGS_DIR.exists():
        return []
    log_files = [f for f in TEST_LOGS_DIR.iterdir() if f.is_file() and f.suffix in (".log", ".txt")]
    return sorted(log_files)
