import logging
import os
import signal
import threading
import time
from collections import deque
from pathlib import Path

from colorama import init, Fore, Style

from .config import (
    ACTION_HISTORY,
    FILE_CHECK_INTERVAL,
    LOG_FORMAT,
    LOG_LEVEL,
    TERMINAL_REFRESH_INTERVAL,
    WEB_SERVER_HOST,
    WEB_SERVER_PORT,
    ensure_directories,
)
from .log_parser import HearthstoneLogParser, ParserCallbacks

init(autoreset=True)

# Global shutdown control
shutdown_event = threading.Event()
signal_received = False


def print_colored(text, color=Fore.WHITE, style=Style.NORMAL, end="\n"):
    """Print colored text."""
    print(f"{style}{color}{text}{Style.RESET_ALL}", end=end)


def print_status_header(mode="Production"):
    """Print a status header with current mode."""
    status_color = Fore.GREEN if mode == "Production" else Fore.YELLOW
    print_colored(f"\n{'='*60}", Fore.BLUE)
    print_colored(f"HEARTHSTONE LIVE MONITOR - {mode.upper()} MODE", status_color, Style.BRIGHT)
    print_colored(f"{'='*60}", Fore.BLUE)


# ---------- Log Tailing ----------
def _file_size(path):
    """Returns the file size in bytes."""
    return os.stat(path).st_size if os.path.exists(path) else 0


def _read_new(path, pos):
    """Read new bytes from file starting at position."""
    try:
        with open(path, "rb") as f:
            f.seek(pos)
            data = f.read()
            return data, f.tell()
    except OSError as e:
        logging.warning(f"Read error: {e}")
        return b"", pos


class LogTailer:
    """Follows a growing log file and hands out complete lines in file order.

    A line without its trailing newline stays buffered until the rest of it
    is written.
    """

    def __init__(self, path, start_at_end=True):
        self.path = Path(path)
        self.buffer = b""
        self.position = None if start_at_end else 0
        if start_at_end and self.path.exists():
            self.position = _file_size(self.path)
            logging.info(f"Tailing {self.path} from byte {self.position}")

    def poll(self):
        """Return the lines appended since the last poll."""
        if not self.path.exists():
            return []
        if self.position is None:
            logging.info(f"Log file appeared: {self.path}")
            self.position = 0

        size = _file_size(self.path)
        if size < self.position:
            logging.warning(f"{self.path.name} shrank from {self.position} to {size} bytes, following from the new end")
            self.position = size
            self.buffer = b""
            return []
        if size == self.position:
            return []

        chunk, self.position = _read_new(self.path, self.position)
        if not chunk:
            return []
        self.buffer += chunk
        *complete, self.buffer = self.buffer.split(b"\n")
        return [raw.decode("utf-8", errors="replace").rstrip("\r") for raw in complete]


# ---------- Live Board ----------
class LiveBoard:
    """In-memory view of the current match, shared with the web server."""

    def __init__(self, action_history=ACTION_HISTORY):
        self._lock = threading.Lock()
        self.status = "idle"
        self.players = []
        self.last_result = None
        self.recent_actions = deque(maxlen=action_history)
        self.matches_completed = 0
        self.stats = {}
        self.last_updated = int(time.time())
        self.version = 0

    def callbacks(self):
        return ParserCallbacks(
            on_action=self.record_action,
            on_match_start=self.record_match_start,
            on_match_over=self.record_match_over,
        )

    def _touch(self):
        self.last_updated = int(time.time())
        self.version += 1

    def record_action(self, event):
        with self._lock:
            self.recent_actions.append(event.to_dict())
            self._touch()

    def record_match_start(self, players):
        with self._lock:
            self.status = "live"
            self.players = [p.to_dict() for p in players]
            self.recent_actions.clear()
            self._touch()

    def record_match_over(self, players):
        with self._lock:
            self.status = "idle"
            self.last_result = [p.to_dict() for p in players]
            self.players = []
            self.matches_completed += 1
            self._touch()

    def update_stats(self, stats):
        with self._lock:
            self.stats = stats.to_dict()

    def to_dict(self):
        with self._lock:
            return {
                "status": self.status,
                "players": list(self.players),
                "lastResult": self.last_result,
                "recentActions": list(self.recent_actions),
                "matchesCompleted": self.matches_completed,
                "stats": dict(self.stats),
                "lastUpdated": self.last_updated,
            }


def _print_terminal_snapshot(board, test_mode=False):
    """Print the current match to the terminal."""
    data = board.to_dict()
    mode = "TEST" if test_mode else "LIVE"
    print_colored(f"\n[{mode}] Status: {data['status'].upper()}  Matches completed: {data['matchesCompleted']}", Fore.CYAN, Style.BRIGHT)
    for player in data["players"]:
        side_color = Fore.GREEN if player.get("side") == "FRIENDLY" else Fore.RED
        print_colored(
            f"  Team {player.get('team', '?')}: {player.get('name', 'Unknown')} - "
            f"{player.get('hero', '?')} ({player.get('class', '?')})",
            side_color,
        )
    if data["lastResult"]:
        result = ", ".join(f"{p.get('name', 'Unknown')} {p.get('status', '?')}" for p in data["lastResult"])
        print_colored(f"  Last result: {result}", Fore.MAGENTA)
    if data["recentActions"]:
        action = data["recentActions"][-1]
        print_colored(
            f"  Last action: {action['name']} {action['fromZone'] or '-'} -> {action['toZone'] or '-'}",
            Fore.WHITE,
            Style.DIM,
        )
    stats = data["stats"]
    if stats:
        print_colored(f"  Lines: {stats['lines']} (matched {stats['matched']}, ignored {stats['unmatched']})", Fore.WHITE, Style.DIM)


# ---------- Shutdown Handling ----------
def signal_handler(signum, frame):
    """Signal handler for graceful shutdown."""
    global signal_received
    if signal_received:
        print_colored(f"\nForce exit requested (signal {signum} received again)", Fore.RED)
        os._exit(1)
    signal_received = True
    print_colored(f"\nReceived signal {signum}. Shutting down...", Fore.YELLOW)
    shutdown_event.set()


def setup_signal_handlers():
    """Setup signal handlers for graceful shutdown."""
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)
    if hasattr(signal, 'SIGHUP'):
        signal.signal(signal.SIGHUP, signal_handler)


def interruptible_sleep(duration, check_interval=0.1):
    """Sleep that can be interrupted by shutdown signals."""
    end_time = time.time() + duration
    while time.time() < end_time:
        if shutdown_event.is_set():
            return True
        remaining = end_time - time.time()
        sleep_time = min(check_interval, remaining)
        if sleep_time > 0:
            time.sleep(sleep_time)
    return shutdown_event.is_set()


# ---------- Main Loop ----------
def monitor_loop(tailer, parser, board, test_mode=False, max_polls=None):
    """Poll the log and feed each batch of lines to the parser until shutdown."""
    last_term = 0
    last_version = -1
    polls = 0
    print_colored(f"\nStarting live monitoring of {tailer.path}... (Press Ctrl+C to stop)", Fore.CYAN, Style.BRIGHT)
    while not shutdown_event.is_set():
        lines = tailer.poll()
        if lines:
            parser.process_lines(lines)
            board.update_stats(parser.stats)
            logging.debug(f"LIVE: Processed {len(lines)} lines")

        now = time.time()
        if now - last_term >= TERMINAL_REFRESH_INTERVAL and board.version != last_version:
            _print_terminal_snapshot(board, test_mode)
            last_version = board.version
            last_term = now

        polls += 1
        if max_polls is not None and polls >= max_polls:
            break
        if interruptible_sleep(FILE_CHECK_INTERVAL):
            break
    print_colored("Exiting main monitoring loop...", Fore.YELLOW)


def main(log_file, test_mode=False, start_at_end=True, web=True, log_level=LOG_LEVEL):
    """Run the live monitor against `log_file`."""
    logging.basicConfig(level=getattr(logging, log_level), format=LOG_FORMAT)
    setup_signal_handlers()
    ensure_directories()

    mode = "Test" if test_mode else "Production"
    print_status_header(mode)

    board = LiveBoard()
    parser = HearthstoneLogParser(callbacks=board.callbacks())

    if web:
        from . import webserver
        if webserver.start_server(board, WEB_SERVER_HOST, WEB_SERVER_PORT):
            print_colored(f"Web server started on http://{WEB_SERVER_HOST}:{WEB_SERVER_PORT}", Fore.GREEN)
        else:
            print_colored("Failed to start web server", Fore.RED)

    tailer = LogTailer(log_file, start_at_end=start_at_end)
    if not tailer.path.exists():
        print_colored(f"Waiting for log file: {tailer.path}", Fore.YELLOW)

    try:
        monitor_loop(tailer, parser, board, test_mode=test_mode)
    except KeyboardInterrupt:
        print_colored("\nStopped by user (Ctrl+C).", Fore.YELLOW)
    return board
