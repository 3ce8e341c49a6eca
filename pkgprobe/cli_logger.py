import datetime
import os
import sys
import traceback
from colorama import Fore, Style, init

# Initialize Colorama
init(autoreset=True)

LOG_DIR = os.environ.get(
    "PKGPROBE_LOG_DIR",
    os.path.join(os.path.expanduser("~"), ".pkgprobe", "logs"),
)


class Logger:
    # Console output goes to stderr; stdout carries metadata lines for the build.
    def __init__(self, stream=None):
        self.log_file = os.path.join(
            LOG_DIR,
            f"pkgprobe_{datetime.datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        )
        self.stream = stream
        self.show_debug = bool(os.environ.get("PKGPROBE_DEBUG"))

    def _get_timestamp(self):
        return datetime.datetime.now().strftime("%H:%M:%S")

    def _log(self, level, message, color, prefix="", echo=True):
        timestamp = self._get_timestamp()
        if echo:
            stream = self.stream or sys.stderr
            print(f"{color}{Style.BRIGHT}[{timestamp}]{Style.RESET_ALL} {color}{prefix}{message}{Style.RESET_ALL}",
                  file=stream)

        if not self.log_file:
            return
        # A failed write turns file logging off for the rest of the run.
        try:
            os.makedirs(os.path.dirname(self.log_file), exist_ok=True)
            with open(self.log_file, "a") as f:
                f.write(f"[{timestamp}] [{level}] {message}\n")
        except OSError:
            self.log_file = None

    def info(self, message):
        self._log("INFO", message, Fore.CYAN)

    def success(self, message):
        self._log("SUCCESS", message, Fore.GREEN, prefix="✓ ")

    def warning(self, message):
        self._log("WARNING", message, Fore.YELLOW, prefix="⚠ ")

    def error(self, message):
        self._log("ERROR", message, Fore.RED, prefix="✖ ")

    def debug(self, message):
        self._log("DEBUG", message, Fore.WHITE + Style.DIM, echo=self.show_debug)

    # -------- Exception logging --------
    def exception(self, exc_type, exc_value, exc_traceback):
        self.error(f"An unhandled exception occurred: {exc_value}")
        formatted_lines = traceback.format_exception(exc_type, exc_value, exc_traceback)
        for line in formatted_lines:
            for sub_line in line.splitlines():
                if sub_line.strip():
                    self._log("TRACEBACK", f">> {sub_line}", Fore.RED, echo=self.show_debug)


# ---------------- Helper ----------------
logger = Logger()

def get_latest_log_file():
    """Return the path to the latest log file."""
    if not os.path.isdir(LOG_DIR):
        return None
    log_files = [os.path.join(LOG_DIR, f) for f in os.listdir(LOG_DIR) if f.endswith(".log")]
    if not log_files:
        return None
    return max(log_files, key=os.path.getctime)
