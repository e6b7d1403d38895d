# hs_monitor/config.py

import os
import platform
import shutil
import logging
from pathlib import Path

# ---------- Directory Configuration ----------
APP_DIR = Path(__file__).parent
ROOT_DIR = Path.cwd()  # Working files live next to where the monitor is launched

# Log directories
LOGS_DIR = ROOT_DIR / "logs"
TEST_LOGS_DIR = LOGS_DIR / "test"

# Simulated client log written in test mode
SIMULATED_LOG_FILE = ROOT_DIR / "simulated_live.log"

# log.config shipped with the package, copied over the client's one on startup
BUNDLED_LOG_CONFIG = APP_DIR / "log.config"

# ---------- Timing Configuration ----------
FILE_CHECK_INTERVAL = 0.1  # How often to check the log file for growth
TERMINAL_REFRESH_INTERVAL = 1.0  # How often to reprint the terminal snapshot
SIMULATION_SPEED = 0.05  # Seconds between simulation writes
SIMULATION_CHUNK_SIZE = 2  # How many log lines to write at once

# ---------- Board Configuration ----------
ACTION_HISTORY = 50  # Zone changes kept for the web overlay

# ---------- Server Configuration ----------
WEB_SERVER_PORT = 5000
WEB_SERVER_HOST = "0.0.0.0"

# ---------- Logging Configuration ----------
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


# ---------- Client Paths ----------
def get_log_paths():
    """Return (log_config_path, log_file_path) for the current platform."""
    if platform.system() == "Windows":
        program_files = "Program Files"
        if platform.machine().endswith("64"):
            program_files += " (x86)"
        local_app_data = os.environ.get("LOCALAPPDATA", str(Path.home() / "AppData" / "Local"))
        config_file = Path(local_app_data) / "Blizzard" / "Hearthstone" / "log.config"
        log_file = Path("C:/") / program_files / "Hearthstone" / "Hearthstone_Data" / "output_log.txt"
    else:
        home = Path(os.environ.get("HOME", str(Path.home())))
        config_file = home / "Library" / "Preferences" / "Blizzard" / "Hearthstone" / "log.config"
        log_file = home / "Library" / "Logs" / "Unity" / "Player.log"
    return config_file, log_file


def install_log_config(target):
    """Overwrite the client's log.config with the bundled one.

    Returns True when the copy succeeded. Failures are logged, the monitor can
    still run against whatever verbosity the client already has.
    """
    target = Path(target)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(BUNDLED_LOG_CONFIG, target)
        logging.info(f"Installed log.config at {target}")
        return True
    except OSError as e:
        logging.error(f"Could not install log.config at {target}: {e}")
        return False


# ---------- Create Required Directories ----------
def ensure_directories():
    """Create all required directories if they don't exist."""
    directories = [
        LOGS_DIR,
        TEST_LOGS_DIR,
        SIMULATED_LOG_FILE.parent,
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)


# ---------- Validation ----------
def validate_config(log_file=None):
    """Validate that all required directories and files are accessible."""
    ensure_directories()

    issues = []

    if not BUNDLED_LOG_CONFIG.exists():
        issues.append(f"Bundled log.config not found: {BUNDLED_LOG_CONFIG}")

    if log_file is not None and not Path(log_file).exists():
        issues.append(f"Hearthstone log not found yet: {log_file}")

    return issues
