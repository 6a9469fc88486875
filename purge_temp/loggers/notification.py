"""Console notification rendered with rich."""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional, Tuple

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from purge_temp.config.settings import StageSettings
from purge_temp.shared.interfaces import DesktopNotification, NotificationStatus
from purge_temp.utils.paths import PathResolver

notification_logger = logging.getLogger(__name__)

# emoji, border style
STATUS_STYLES: Dict[NotificationStatus, Tuple[str, str]] = {
    NotificationStatus.GENERAL: ("🗑️", "blue"),
    NotificationStatus.OK: ("✅", "green"),
    NotificationStatus.SKIP: ("⏭️", "yellow"),
    NotificationStatus.ERROR: ("❌", "red"),
}


class ConsoleNotification(DesktopNotification):
    """Shows purge outcomes as a panel on stderr when ``show_purge_message`` is set."""

    def __init__(
        self,
        settings: StageSettings,
        resolver: PathResolver,
        console: Optional[Console] = None,
    ):
        self.settings = settings
        self.resolver = resolver
        self.console = console or Console(stderr=True)

    def logo_banner(self) -> Optional[str]:
        """Contents of ``purge_message_logo_file`` when it names a readable text file."""
        if not self.settings.purge_message_logo_file:
            return None
        path = self.resolver.resolve(self.settings.purge_message_logo_file)
        if not path or not os.path.isfile(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as handle:
                return handle.read().rstrip()
        except (OSError, UnicodeDecodeError) as exc:
            notification_logger.debug(f"Logo file {path} not shown: {exc}")
            return None

    def render(self, title: str, message: str, status: NotificationStatus) -> Panel:
        emoji, style = STATUS_STYLES.get(status, STATUS_STYLES[NotificationStatus.GENERAL])
        body = Text(message)
        banner = self.logo_banner()
        content = Group(Text(banner, style=style), body) if banner else body
        return Panel(content, title=f"{emoji} {title}", border_style=style, expand=False)

    def show_notification(self, title: str, message: str, status: NotificationStatus) -> None:
        if not self.settings.show_purge_message:
            return
        self.console.print(self.render(title, message, status))
