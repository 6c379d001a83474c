import logging

from laundrify.application.interfaces import AlertSink

logger = logging.getLogger(__name__)

ALERT_SOUND_URL = "https://assets.mixkit.co/active_storage/sfx/2358/2358-preview.mp3"


class LoggingAlertSink(AlertSink):
    """Alert sink for headless sessions: the sound and the notice become log lines."""

    def __init__(self, sound_url: str = ALERT_SOUND_URL):
        self._sound_url = sound_url

    async def play_sound(self) -> None:
        logger.info(f"Playing alert sound {self._sound_url}")

    async def show_notice(self, title: str, message: str) -> None:
        logger.warning(f"{title} {message}")
