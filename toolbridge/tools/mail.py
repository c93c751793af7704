"""
Outbound email tool.

Sends plain-text email over SMTP using sender credentials taken from
the `tools.email` config section or the EMAIL_USER / EMAIL_PASSWORD
environment variables. The SMTP exchange is blocking and runs in a
worker thread.
"""

import asyncio
import logging
import os
import smtplib
from email.message import EmailMessage
from typing import Any, Dict, Optional, Tuple

from toolbridge.tools.base import Declaration, Tool, ToolExecutionError, require_args

logger = logging.getLogger(__name__)


class EmailTool(Tool):
    """
    Send an email to a single recipient.

    Tool input schema:
    {
        "to": "someone@example.com",
        "subject": "Hello",
        "body": "Message text"
    }
    """

    aliases = ("sendEmail",)

    def __init__(
        self,
        user: Optional[str] = None,
        password: Optional[str] = None,
        smtp_host: str = "smtp.gmail.com",
        smtp_port: int = 465,
        timeout: int = 30,
    ) -> None:
        self.user = user
        self.password = password
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.timeout = timeout

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "EmailTool":
        return cls(
            user=cfg.get("user"),
            password=cfg.get("password"),
            smtp_host=cfg.get("smtp_host", "smtp.gmail.com"),
            smtp_port=int(cfg.get("smtp_port", 465)),
            timeout=int(cfg.get("timeout", 30)),
        )

    def describe(self) -> Declaration:
        return {
            "name": "sendEmail",
            "description": "Sends an email to a specified recipient.",
            "parameters": {
                "type": "object",
                "properties": {
                    "to": {"type": "string", "description": "The email address of the recipient."},
                    "subject": {"type": "string", "description": "The subject of the email."},
                    "body": {"type": "string", "description": "The body content of the email."},
                },
                "required": ["to", "subject", "body"],
            },
        }

    def credentials(self) -> Tuple[str, str]:
        user = self.user or os.getenv("EMAIL_USER", "")
        password = self.password or os.getenv("EMAIL_PASSWORD", "")
        if not user or not password:
            raise ToolExecutionError(
                "Email credentials are not configured. Set EMAIL_USER and EMAIL_PASSWORD "
                "or tools.email.user / tools.email.password in config."
            )
        return user, password

    async def execute(self, args: Dict[str, Any]) -> str:
        require_args(args, "to", "subject", "body")
        user, password = self.credentials()

        message = EmailMessage()
        message["From"] = user
        message["To"] = args["to"]
        message["Subject"] = args["subject"]
        message.set_content(args["body"])

        try:
            await asyncio.to_thread(self._send, message, user, password)
        except (smtplib.SMTPException, OSError) as exc:
            raise ToolExecutionError(f"Failed to send email: {exc}") from exc
        logger.info("Email sent to %s", args["to"])
        return "Email sent successfully."

    def _send(self, message: EmailMessage, user: str, password: str) -> None:
        with smtplib.SMTP_SSL(self.smtp_host, self.smtp_port, timeout=self.timeout) as smtp:
            smtp.login(user, password)
            smtp.send_message(message)
