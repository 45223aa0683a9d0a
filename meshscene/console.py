"""An in-engine log console with simple commands and stat toggles."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

MAX_MESSAGE_LENGTH = 1023
MAX_INPUT_LENGTH = 255

HELP_LINES = (
    "Available commands:",
    " - clear: Clears the console",
    " - help: Shows available commands",
    " - stat fps: Toggle FPS display",
    " - stat memory: Toggle Memory display",
    " - stat none: Hide all stat overlays",
)


class LogLevel(Enum):
    DISPLAY = "display"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class LogEntry:
    level: LogLevel
    message: str


@dataclass
class StatOverlay:
    """Which statistics overlays are shown."""

    show_fps: bool = False
    show_memory: bool = False
    show_render: bool = False

    def toggle_stat(self, command: str) -> None:
        if command == "stat fps":
            self.show_fps = True
            self.show_render = True
        elif command == "stat memory":
            self.show_memory = True
            self.show_render = True
        elif command == "stat none":
            self.show_fps = False
            self.show_memory = False
            self.show_render = False


def _passes_filter(text: str, text_filter: str) -> bool:
    """Comma-separated, case-insensitive terms; a leading '-' excludes."""
    terms = [term.strip() for term in text_filter.split(",")]
    terms = [term for term in terms if term]
    if not terms:
        return True
    lowered = text.lower()
    includes = 0
    for term in terms:
        if term.startswith("-"):
            if term[1:].lower() in lowered:
                return False
        else:
            if term.lower() in lowered:
                return True
            includes += 1
    return includes == 0


@dataclass
class Console:
    """Holds log entries, command history and display settings."""

    items: list[LogEntry] = field(default_factory=list)
    history: list[str] = field(default_factory=list)
    history_pos: int = -1
    scroll_to_bottom: bool = False
    show_display: bool = True
    show_warning: bool = True
    show_error: bool = True
    was_open: bool = True
    overlay: StatOverlay = field(default_factory=StatOverlay)

    def clear(self) -> None:
        self.items.clear()

    def add_log(self, level: LogLevel, message: str) -> None:
        """Append a message, cut to the console's line length."""
        self.items.append(LogEntry(level, message[:MAX_MESSAGE_LENGTH]))
        self.scroll_to_bottom = True

    def execute_command(self, command: str) -> None:
        self.add_log(LogLevel.DISPLAY, f"Executing command: {command}")
        if command == "clear":
            self.clear()
        elif command == "help":
            for line in HELP_LINES:
                self.add_log(LogLevel.DISPLAY, line)
        elif command.startswith("stat "):
            self.overlay.toggle_stat(command)
        else:
            self.add_log(LogLevel.ERROR, f"Unknown command: {command}")

    def submit(self, line: str) -> None:
        """Handle a line entered in the input box; empty lines do nothing."""
        line = line[:MAX_INPUT_LENGTH]
        if not line:
            return
        self.add_log(LogLevel.DISPLAY, f">> {line}")
        self.execute_command(line)
        self.history.append(line)
        self.history_pos = -1
        self.scroll_to_bottom = True

    def toggle(self) -> None:
        self.was_open = not self.was_open

    def visible_entries(self, text_filter: str = "") -> list[LogEntry]:
        """Entries that pass the text filter and the per-level switches."""
        shown = {
            LogLevel.DISPLAY: self.show_display,
            LogLevel.WARNING: self.show_warning,
            LogLevel.ERROR: self.show_error,
        }
        return [
            entry
            for entry in self.items
            if shown[entry.level] and _passes_filter(entry.message, text_filter)
        ]