"""
Mail Service

SMTP sending and IMAP inbox listing for RFP correspondence. The stdlib
transports block, so each call runs in a worker thread.
"""

import asyncio
import email
import imaplib
import logging
import re
import smtplib
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from email.message import EmailMessage
from email.policy import default as default_policy
from email.utils import make_msgid
from typing import Optional

from api.middleware.error_handler import MailTransportError

logger = logging.getLogger("procurement.services.mail")

HEADER_FIELDS = "BODY.PEEK[HEADER.FIELDS (SUBJECT FROM)]"
SEQ_PATTERN = re.compile(rb"^(\d+)\s")


@dataclass(frozen=True)
class MailConfig:
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_pass: Optional[str] = None
    imap_host: Optional[str] = None
    imap_port: int = 993
    imap_user: Optional[str] = None
    imap_pass: Optional[str] = None

    @classmethod
    def from_settings(cls, settings) -> "MailConfig":
        return cls(
            smtp_host=settings.email_host,
            smtp_port=settings.email_port,
            smtp_user=settings.email_user,
            smtp_pass=settings.email_pass,
            imap_host=settings.imap_host,
            imap_port=settings.imap_port,
            imap_user=settings.imap_user,
            imap_pass=settings.imap_pass,
        )


def build_message(
    sender: Optional[str],
    to: str,
    subject: str,
    text: Optional[str] = None,
    html: Optional[str] = None
) -> EmailMessage:
    """Build a plain-text message with an optional HTML alternative."""
    msg = EmailMessage()
    if sender:
        msg["From"] = sender
    msg["To"] = to
    msg["Subject"] = subject or ""
    msg["Message-ID"] = make_msgid()
    msg.set_content(text or "")
    if html:
        msg.add_alternative(html, subtype="html")
    return msg


def parse_fetch_response(data: list) -> list[dict]:
    """
    Turn an IMAP FETCH response into envelope dicts, newest first.

    Each message arrives as (meta, header_bytes) where meta carries the
    sequence number and INTERNALDATE.
    """
    messages = []
    for part in data:
        if not isinstance(part, tuple):
            continue
        meta, raw_headers = part

        seq_match = SEQ_PATTERN.match(meta)
        if not seq_match:
            continue

        headers = email.message_from_bytes(raw_headers, policy=default_policy)
        from_header = headers["from"]
        addresses = getattr(from_header, "addresses", ()) if from_header else ()

        internal = imaplib.Internaldate2tuple(meta)
        date = (
            datetime.fromtimestamp(time.mktime(internal), tz=timezone.utc)
            if internal else None
        )

        messages.append({
            "seq": int(seq_match.group(1)),
            "subject": str(headers["subject"] or ""),
            "from": ", ".join(a.addr_spec for a in addresses),
            "date": date,
        })

    messages.sort(key=lambda m: m["seq"], reverse=True)
    return messages


class MailService:
    """Send RFPs to vendors and read their replies."""

    def __init__(self, config: MailConfig):
        self.config = config

    def _send_sync(self, msg: EmailMessage) -> None:
        cfg = self.config
        with smtplib.SMTP(cfg.smtp_host, cfg.smtp_port, timeout=30) as smtp:
            smtp.ehlo()
            if smtp.has_extn("starttls"):
                smtp.starttls()
                smtp.ehlo()
            if cfg.smtp_user:
                smtp.login(cfg.smtp_user, cfg.smtp_pass or "")
            smtp.send_message(msg)

    async def send(
        self,
        to: str,
        subject: str,
        text: Optional[str] = None,
        html: Optional[str] = None
    ) -> dict:
        """
        Send one email.

        Returns:
            {"messageId": ...}
        """
        if not self.config.smtp_host:
            raise MailTransportError("SMTP is not configured")

        msg = build_message(self.config.smtp_user, to, subject, text, html)
        try:
            await asyncio.to_thread(self._send_sync, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Send email error: {e}")
            raise MailTransportError(f"Failed to send email: {e}") from e

        logger.info(f"Sent email to {to} ({msg['Message-ID']})")
        return {"messageId": msg["Message-ID"]}

    def _fetch_sync(self, limit: int) -> list[dict]:
        cfg = self.config
        client = imaplib.IMAP4_SSL(cfg.imap_host, cfg.imap_port)
        try:
            client.login(cfg.imap_user or "", cfg.imap_pass or "")
            _, count = client.select("INBOX", readonly=True)
            exists = int(count[0])
            if exists == 0:
                return []

            start = max(exists - limit + 1, 1)
            _, data = client.fetch(f"{start}:*", f"(INTERNALDATE {HEADER_FIELDS})")
            return parse_fetch_response(data)
        finally:
            try:
                client.logout()
            except (imaplib.IMAP4.error, OSError):
                logger.debug("IMAP logout failed", exc_info=True)

    async def fetch_inbox(self, limit: int = 5) -> list[dict]:
        """Envelopes of the latest `limit` inbox messages, newest first."""
        if not self.config.imap_host:
            raise MailTransportError("IMAP is not configured")

        try:
            return await asyncio.to_thread(self._fetch_sync, max(limit, 1))
        except (imaplib.IMAP4.error, OSError, ValueError) as e:
            logger.error(f"Inbox fetch error: {e}")
            raise MailTransportError(f"Failed to load inbox: {e}") from e
