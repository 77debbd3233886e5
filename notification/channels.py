#!/usr/bin/env python3
"""
Messaging Channels

Outbound delivery for the queue workers. A channel takes a formatted text
and a destination (Telegram chat or channel id) and returns the id of the
sent message, or None when delivery failed. Workers turn None into a
processing error so the queue retries the job.

Usage:
    from notification.channels import build_channel

    channel = build_channel(config.telegram)
    message_id = channel.send('-1002985721031', text)
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging
import uuid

import requests

from core.config_loader import TelegramConfig

logger = logging.getLogger(__name__)

TELEGRAM_API_BASE = "https://api.telegram.org"


class MessagingChannel(ABC):
    """Abstract base class for outbound messaging."""

    @property
    @abstractmethod
    def channel_type(self) -> str:
        """Return the channel type identifier."""
        pass

    @abstractmethod
    def send(self, destination: str, text: str) -> Optional[str]:
        """
        Deliver a message.

        Args:
            destination: Chat or channel identifier
            text: Formatted message body (HTML)

        Returns:
            Message id if delivered, None otherwise
        """
        pass


class TelegramChannel(MessagingChannel):
    """Telegram Bot API channel."""

    def __init__(self, bot_token: str, timeout: int = 30):
        self.bot_token = bot_token
        self.timeout = timeout

    @property
    def channel_type(self) -> str:
        return 'telegram'

    def send(self, destination: str, text: str) -> Optional[str]:
        if not destination:
            logger.error("Telegram destination missing")
            return None

        api_url = f"{TELEGRAM_API_BASE}/bot{self.bot_token}/sendMessage"
        payload = {
            'chat_id': destination,
            'text': text,
            'parse_mode': 'HTML',
            'disable_web_page_preview': True
        }

        try:
            response = requests.post(api_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Failed to send Telegram message to {destination}: {e}")
            return None

        if response.status_code != 200:
            logger.error(f"Telegram API error: {response.status_code} - {response.text}")
            return None

        body = response.json()
        if not body.get('ok'):
            logger.error(f"Telegram API rejected message: {body.get('description')}")
            return None

        message_id = str(body['result']['message_id'])
        logger.info(f"Telegram message {message_id} sent to {destination}")
        return message_id


class LogChannel(MessagingChannel):
    """Dry-run channel: logs the message instead of delivering it."""

    @property
    def channel_type(self) -> str:
        return 'log'

    def send(self, destination: str, text: str) -> Optional[str]:
        message_id = f"dry-run-{uuid.uuid4().hex[:12]}"
        logger.info(f"[DRY RUN] Would send to {destination}: {text}")
        return message_id


def build_channel(config: TelegramConfig) -> MessagingChannel:
    """Pick the delivery channel for the configured environment."""
    if config.dry_run:
        logger.info("Messaging in dry-run mode")
        return LogChannel()
    if not config.bot_token:
        logger.warning("TELEGRAM_BOT_TOKEN not set; messages will only be logged")
        return LogChannel()
    return TelegramChannel(config.bot_token, timeout=config.request_timeout_seconds)
