import asyncio
import aiohttp
import logging
from scootsupport.core.config import settings
from scootsupport.core.exceptions import UpstreamException

logger = logging.getLogger("sms_service")

class SMSService:
    """Thin client for the Twilio Messages REST API"""

    def __init__(self):
        self.base_url = "https://api.twilio.com/2010-04-01/Accounts"

    def _messages_url(self) -> str:
        return f"{self.base_url}/{settings.twilio_account_sid}/Messages.json"

    async def send_sms(self, to: str, body: str) -> str:
        """Send one SMS and return the provider message sid."""
        if not settings.twilio_account_sid or not settings.twilio_auth_token:
            raise UpstreamException("Twilio credentials not configured")

        payload = {
            "To": to,
            "From": settings.twilio_from_number,
            "Body": body
        }
        auth = aiohttp.BasicAuth(settings.twilio_account_sid, settings.twilio_auth_token)

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self._messages_url(),
                    data=payload,
                    auth=auth,
                    timeout=aiohttp.ClientTimeout(total=settings.sms_timeout_seconds)
                ) as response:
                    if response.status >= 400:
                        error = await response.text()
                        logger.error(f"Twilio error: {error}")
                        raise UpstreamException("Failed to send SMS", details=error)
                    result = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Twilio request failed: {e}")
            raise UpstreamException("Failed to send SMS", details=str(e)) from e

        sid = result.get("sid", "")
        logger.info(f"SMS sent successfully: {sid}")
        return sid

sms_service = SMSService()
