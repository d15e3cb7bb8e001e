import base64
import hashlib
import hmac
import logging

import requests

from ..config import get_settings

logger = logging.getLogger(__name__)

REPLY_PATH = "/v2/bot/message/reply"


def validate_signature(body: bytes, signature: str | None, channel_secret: str) -> bool:
    """Check the X-Line-Signature header against the raw request body."""
    if not signature:
        return False
    digest = hmac.new(channel_secret.encode("utf-8"), body, hashlib.sha256).digest()
    expected = base64.b64encode(digest).decode()
    return hmac.compare_digest(expected, signature)


class LineMessenger:
    """Sends reply messages through the LINE Messaging API."""

    def __init__(self, access_token: str | None, api_base: str, timeout: float = 10):
        self.access_token = access_token
        self.api_base = api_base
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "LineMessenger":
        settings = get_settings()
        return cls(
            access_token=settings.line_channel_access_token,
            api_base=settings.line_api_base,
            timeout=settings.line_reply_timeout,
        )

    def reply(self, reply_token: str, text: str) -> bool:
        """Send a text reply. Returns False when replies are not configured.

        Raises ``requests.RequestException`` on transport or HTTP errors.
        """
        if not self.access_token:
            logger.info("LINE_CHANNEL_ACCESS_TOKEN not set, skipping reply")
            return False

        resp = requests.post(
            self.api_base + REPLY_PATH,
            headers={"Authorization": f"Bearer {self.access_token}"},
            json={"replyToken": reply_token, "messages": [{"type": "text", "text": text}]},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return True


def get_messenger() -> LineMessenger:
    return LineMessenger.from_settings()
