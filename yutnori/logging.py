import logging
import re

from rich.logging import RichHandler
from rich.markup import escape

COLOR = {
    "capture": "bold red",
    "goal": "bold green",
    "stack": "bold blue",
    "win": "bold yellow",
    "warning": "bold red",
    "team": "yellow",
}


class GameLogFormatter(logging.Formatter):
    """Rich markup for game log lines; team names get highlighted."""

    def __init__(self, team_names=()) -> None:
        super().__init__()
        names = sorted(team_names, key=len, reverse=True)
        self._team_pattern = re.compile("|".join(map(re.escape, names))) if names else None

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        styled = self._highlight_teams(message)
        if message.startswith("⚔️"):
            styled = f"[{COLOR['capture']}]{styled}[/]"
        elif message.startswith("🏁"):
            styled = f"[{COLOR['goal']}]{styled}[/]"
        elif message.startswith("👐"):
            styled = f"[{COLOR['stack']}]{styled}[/]"
        elif message.startswith("🏆"):
            styled = f"[{COLOR['win']}]{styled}[/]"
        if record.levelno >= logging.WARNING:
            styled = f"[{COLOR['warning']}]{styled}[/]"
        return styled

    def _highlight_teams(self, message: str) -> str:
        if self._team_pattern is None:
            return escape(message)
        parts = []
        last = 0
        for match in self._team_pattern.finditer(message):
            parts.append(escape(message[last : match.start()]))
            parts.append(f"[{COLOR['team']}]{escape(match.group(0))}[/]")
            last = match.end()
        parts.append(escape(message[last:]))
        return "".join(parts)


def configure_logging(level: int = logging.INFO, team_names=()) -> None:
    logger = logging.getLogger()
    logger.setLevel(level)
    handler = RichHandler(markup=True, show_path=False, show_time=False)
    handler.setFormatter(GameLogFormatter(team_names))
    logger.handlers.clear()
    logger.addHandler(handler)
