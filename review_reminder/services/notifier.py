"""
Webhook Notifier Module

Delivers a reminder payload to the provider's incoming webhook.
"""

from typing import Optional

import httpx

from review_reminder.config import Settings, get_settings
from review_reminder.logging_config import get_logger
from review_reminder.models import NotificationPayload

logger = get_logger(__name__)


class WebhookDeliveryError(Exception):
    """Raised when the webhook rejects a notification."""
    def __init__(self, message: str, status_code: int = None, response_body: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class WebhookNotifier:
    """
    Posts notification payloads to a webhook URL.
    
    Usage:
        notifier = WebhookNotifier()
        await notifier.send(payload)
    """
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.settings = settings or get_settings()
        self._transport = transport
    
    async def send(self, payload: NotificationPayload) -> None:
        """
        POST the payload as a JSON body.
        
        Raises:
            WebhookDeliveryError: If the webhook answers with an error status
            httpx.HTTPError: If the request itself fails
        """
        async with httpx.AsyncClient(
            timeout=self.settings.http_timeout,
            transport=self._transport
        ) as client:
            response = await client.post(
                self.settings.webhook_url,
                json=payload.to_body()
            )
        
        if response.status_code >= 400:
            error_body = response.text
            logger.error(
                "Notification rejected",
                status_code=response.status_code,
                error=error_body[:500]
            )
            raise WebhookDeliveryError(
                f"Webhook error: {response.status_code}",
                status_code=response.status_code,
                response_body=error_body
            )
        
        logger.info("Notification sent successfully", status_code=response.status_code)
