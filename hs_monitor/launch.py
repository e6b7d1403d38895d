import argparse
import sys

from colorama import init, Fore, Style

from . import config, live_monitor
from .log_simulator import SimulationManager

init(autoreset=True)


def print_colored(text, color=Fore.WHITE, style=Style.NORMAL):
    """Print colored text."""
    print(f"{style}{color}{text}{Style.RESET_ALL}")


def print_banner():
    """Print a colorful banner for the application."""
    banner = [
        "╔══════════════════════════════════════════════════════════════╗",
        "║                 HEARTHSTONE LIVE MONITOR                     ║",
        "║                     Match Collector                          ║",
        "╚══════════════════════════════════════════════════════════════╝"
    ]

    print_colored("\n", Fore.CYAN)
    for line in banner:
        print_colored(line, Fore.CYAN, Style.BRIGHT)
    print_colored("", Fore.CYAN)


def print_menu():
    """Print the main menu with colors."""
    print_colored("┌──────────────────────────────────────────────────────────────┐", Fore.BLUE)
    print_colored("│                        MAIN MENU                             │", Fore.BLUE, Style.BRIGHT)
    print_colored("├──────────────────────────────────────────────────────────────┤", Fore.BLUE)
    print_colored("│  1. Live Monitor (Production Mode)                           │", Fore.GREEN)
    print_colored("│     Follow the Hearthstone client log                        │", Fore.WHITE, Style.DIM)
    print_colored("│                                                              │", Fore.WHITE)
    print_colored("│  2. Test Mode (Simulation)                                   │", Fore.YELLOW)
    print_colored("│     Replay a sample match into a simulated log               │", Fore.WHITE, Style.DIM)
    print_colored("│                                                              │", Fore.WHITE)
    print_colored("│  3. Exit                                                     │", Fore.RED)
    print_colored("└──────────────────────────────────────────────────────────────┘", Fore.BLUE)


def get_user_choice():
    """Get and validate user input."""
    while True:
        try:
            choice = input(f"{Fore.CYAN}Enter your choice (1-3): {Style.RESET_ALL}").strip()
            if choice in ['1', '2', '3']:
                return choice
            print_colored("Invalid choice. Please enter a number from 1 to 3.", Fore.RED)
        except (KeyboardInterrupt, EOFError):
            print_colored("\nExiting...", Fore.YELLOW)
            sys.exit(0)


def run_live_mode(log_file=None, install_config=True, web=True, log_level=config.LOG_LEVEL):
    """Follow the real client log."""
    config_file, default_log = config.get_log_paths()
    log_file = log_file or default_log

    if install_config:
        config.install_log_config(config_file)

    for issue in config.validate_config(log_file):
        print_colored(f"Warning: {issue}", Fore.YELLOW)

    print_colored("Starting Live Monitor (Production Mode)...", Fore.GREEN, Style.BRIGHT)
    print_colored(f"Monitoring Hearthstone log: {log_file}", Fore.WHITE)
    live_monitor.main(log_file, test_mode=False, start_at_end=True, web=web, log_level=log_level)


def run_test_mode(web=True, log_level=config.LOG_LEVEL):
    """Run the monitor against a simulated match."""
    simulation_manager = SimulationManager(quiet=True)
    try:
        if not simulation_manager.start():
            print_colored("Failed to start simulation.", Fore.RED)
            return
        print_colored("Starting Live Monitor (Test Mode)...", Fore.YELLOW, Style.BRIGHT)
        live_monitor.main(simulation_manager.output_file, test_mode=True, start_at_end=False, web=web, log_level=log_level)
    except KeyboardInterrupt:
        print_colored("\nTest mode stopped by user.", Fore.YELLOW)
    finally:
        simulation_manager.stop()


def build_arg_parser():
    parser = argparse.ArgumentParser(description="Turn the Hearthstone client log into live match events.")
    parser.add_argument("--mode", choices=["live", "test"], help="Skip the menu and start in this mode")
    parser.add_argument("--log-file", help="Path of the Hearthstone log to follow (live mode)")
    parser.add_argument("--no-web", action="store_true", help="Do not start the web server")
    parser.add_argument("--no-log-config", action="store_true", help="Leave the client's log.config untouched")
    parser.add_argument("--debug", action="store_true", help="Log every ignored line")
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_arg_parser().parse_args(argv)
    log_level = "DEBUG" if args.debug else config.LOG_LEVEL
    web = not args.no_web

    if args.mode == "live":
        run_live_mode(args.log_file, install_config=not args.no_log_config, web=web, log_level=log_level)
        return
    if args.mode == "test":
        run_test_mode(web=web, log_level=log_level)
        return

    print_banner()
    print_menu()
    choice = get_user_choice()

    if choice == '1':
        run_live_mode(args.log_file, install_config=not args.no_log_config, web=web, log_level=log_level)
    elif choice == '2':
        run_test_mode(web=web, log_level=log_level)
    else:
        print_colored("Thank you for using Hearthstone Live Monitor!", Fore.GREEN, Style.BRIGHT)
        print_colored("Goodbye!", Fore.CYAN)


if __name__ == "__main__":
    main()
