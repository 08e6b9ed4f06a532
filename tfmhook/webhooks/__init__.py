"""HTTP boundary for webhook deliveries."""

from tfmhook.webhooks.handlers import describe_delivery
from tfmhook.webhooks.models import DeliveryInfo
from tfmhook.webhooks.server import WebhookServer

__all__ = ["describe_delivery", "DeliveryInfo", "WebhookServer"]
