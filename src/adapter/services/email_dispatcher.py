"""
Email dispatchers

SMTP delivery for production, and a logging stand-in for local development
when no SMTP server is configured.
"""

import logging
import smtplib
from email.message import EmailMessage
from html import escape
from string import Template

from starlette.concurrency import run_in_threadpool

from libs.result import Error, Result, Return
from src.app.services.email_dispatcher import IEmailDispatcher
from src.domain.errors import ErrorCode

logger = logging.getLogger(__name__)

RESET_SUBJECT = "RedCap - Password Reset Request"

RESET_TEXT_TEMPLATE = Template(
    """Hello $name,

We received a request to reset your password for your RedCap account.
Open the link below to create a new password:

$url

If you didn't request this reset, please ignore this email. Your password
will remain unchanged.

This link will expire in 1 hour for security reasons.

Best regards,
The RedCap Team
"""
)

RESET_HTML_TEMPLATE = Template(
    """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
        .container { max-width: 600px; margin: 0 auto; padding: 20px; }
        .header { background: #dc2626; color: white; padding: 20px; text-align: center; }
        .content { background: #f9fafb; padding: 30px; }
        .button { background: #dc2626; color: white; padding: 12px 24px;
                  text-decoration: none; border-radius: 6px; display: inline-block; margin: 20px 0; }
        .footer { margin-top: 20px; padding: 20px; background: #f3f4f6;
                  text-align: center; font-size: 12px; color: #6b7280; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header"><h1>RedCap Courier</h1></div>
        <div class="content">
            <h2>Password Reset Request</h2>
            <p>Hello $name,</p>
            <p>We received a request to reset your password for your RedCap account.
            Click the button below to create a new password:</p>
            <p style="text-align: center;"><a href="$url" class="button">Reset Password</a></p>
            <p>If you didn't request this reset, please ignore this email.
            Your password will remain unchanged.</p>
            <p><strong>This link will expire in 1 hour for security reasons.</strong></p>
            <p>Best regards,<br>The RedCap Team</p>
        </div>
        <div class="footer">
            <p>This is an automated message, please do not reply to this email.</p>
        </div>
    </div>
</body>
</html>
"""
)


def build_reset_message(
    sender: str, to_address: str, reset_url: str, recipient_name: str
) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = to_address
    msg["Subject"] = RESET_SUBJECT
    msg.set_content(RESET_TEXT_TEMPLATE.substitute(name=recipient_name, url=reset_url))
    msg.add_alternative(
        RESET_HTML_TEMPLATE.substitute(
            name=escape(recipient_name), url=escape(reset_url, quote=True)
        ),
        subtype="html",
    )
    return msg


class SmtpEmailDispatcher(IEmailDispatcher):
    """Sends mail through an SMTP relay (STARTTLS + login)"""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: str,
        use_tls: bool = True,
        timeout: int = 20,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_tls = use_tls
        self.timeout = timeout

    def _send(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.send_message(msg)

    async def send_password_reset(
        self, to_address: str, reset_url: str, recipient_name: str
    ) -> Result[None]:
        if not self.host:
            return Return.err(Error(ErrorCode.DISPATCH_ERROR, "SMTP is not configured"))

        msg = build_reset_message(self.sender, to_address, reset_url, recipient_name)
        try:
            await run_in_threadpool(self._send, msg)
        except (smtplib.SMTPException, OSError) as e:
            # Never include the message body: it carries the reset token
            return Return.err(
                Error(ErrorCode.DISPATCH_ERROR, f"SMTP delivery failed: {type(e).__name__}")
            )

        logger.info("Password reset email sent via %s:%s", self.host, self.port)
        return Return.ok(None)


class LogEmailDispatcher(IEmailDispatcher):
    """Development only: writes the reset link to the log instead of mailing it"""

    async def send_password_reset(
        self, to_address: str, reset_url: str, recipient_name: str
    ) -> Result[None]:
        logger.warning("DEV reset link for %s: %s", to_address, reset_url)
        return Return.ok(None)


def build_email_dispatcher(config) -> IEmailDispatcher:
    """
    Pick the dispatcher for this environment.

    Without SMTP_HOST, development gets LogEmailDispatcher; production keeps
    the SMTP dispatcher, which then reports every send as failed.
    """
    if not config.SMTP_HOST and config.ENVIRONMENT != "production":
        logger.warning("SMTP_HOST not set; password reset links will be logged")
        return LogEmailDispatcher()

    return SmtpEmailDispatcher(
        host=config.SMTP_HOST,
        port=int(config.SMTP_PORT),
        username=config.SMTP_USERNAME,
        password=config.SMTP_PASSWORD,
        sender=config.SMTP_FROM,
        use_tls=config.SMTP_USE_TLS,
    )
