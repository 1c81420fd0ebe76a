"""Console output helpers for the gateway."""

import html
from datetime import datetime

from prompt_toolkit import print_formatted_text as _print_pt_original
from prompt_toolkit.formatted_text import HTML, to_plain_text

from . import constants


# Console log file handle (for -l option)
_console_log_file = None


def set_console_log_file(file_handle):
    """Set the console log file handle for print_pt output."""
    global _console_log_file
    _console_log_file = file_handle


def print_pt(*args, **kwargs):
    """Wrapper for print_formatted_text that also logs to file if enabled."""
    _print_pt_original(*args, **kwargs)

    if _console_log_file and args:
        text = to_plain_text(args[0])
        ts = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        try:
            _console_log_file.write(f"[{ts}] {text}\n")
            _console_log_file.flush()
        except OSError:
            # Losing a log line must not take the gateway down
            pass


def _sanitize_for_html(text):
    """Remove control characters and escape HTML entities."""
    text_str = str(text)
    filtered = "".join(
        (
            c
            if (c >= " " and c != "\x7f") or c in "\n\r\t"
            else f"\\x{ord(c):02x}"
        )
        for c in text_str
    )
    return html.escape(filtered, quote=False)


def print_info(text):
    """Print info message."""
    safe_text = _sanitize_for_html(text)
    print_pt(HTML(f"<green>[INFO]</green> {safe_text}"))


def print_error(text):
    """Print error message."""
    safe_text = _sanitize_for_html(text)
    print_pt(HTML(f"<red>[ERROR]</red> {safe_text}"))


def print_warning(text):
    """Print warning message."""
    safe_text = _sanitize_for_html(text)
    print_pt(HTML(f"<orange>[WARNING]</orange> {safe_text}"))


def print_debug(text, level=2):
    """Print debug message if the process debug level allows it.

    Args:
        text: The message to print
        level: Debug level (default=2)
               2 = Outbound envelopes, decoded observations
               4 = Raw inbound form fields
               6 = Config parsing
    """
    if constants.DEBUG_LEVEL < level:
        return

    safe_text = _sanitize_for_html(text)
    ts = datetime.now().strftime("%H:%M:%S.%f")[:-3]  # milliseconds
    print_pt(HTML(f"<gray>[DEBUG {ts}]</gray> {safe_text}"))
