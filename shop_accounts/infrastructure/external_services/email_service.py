"""Email service for account notifications"""

import asyncio
import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional

from ...core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class EmailService:

    def __init__(self, config: Optional[Settings] = None):
        config = config or default_settings
        self.smtp_host = config.SMTP_HOST
        self.smtp_port = config.SMTP_PORT
        self.smtp_username = config.SMTP_USERNAME
        self.smtp_password = config.SMTP_PASSWORD
        self.smtp_use_tls = config.SMTP_USE_TLS
        self.from_email = config.FROM_EMAIL
        self.from_name = config.FROM_NAME
        self.frontend_url = config.FRONTEND_URL
        self.reset_ttl_minutes = config.PASSWORD_RESET_TOKEN_TTL_MINUTES

    async def send_email(self,
                         to_email: str,
                         subject: str,
                         html_content: str,
                         text_content: Optional[str] = None) -> bool:
        """Send email with HTML content; returns False when delivery failed"""
        try:
            logger.info("Sending email to %s: %s", to_email, subject)

            msg = MIMEMultipart('alternative')
            msg['Subject'] = subject
            msg['From'] = f"{self.from_name} <{self.from_email}>"
            msg['To'] = to_email

            if text_content:
                msg.attach(MIMEText(text_content, 'plain'))
            msg.attach(MIMEText(html_content, 'html'))

            await self._send_smtp_email(msg)

            logger.info("Email sent to %s", to_email)
            return True

        except (smtplib.SMTPException, OSError):
            logger.exception("Error sending email to %s", to_email)
            return False

    async def _send_smtp_email(self, msg: MIMEMultipart):
        """Send email via SMTP"""
        def send_sync():
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as server:
                if self.smtp_use_tls:
                    server.starttls()
                if self.smtp_username:
                    server.login(self.smtp_username, self.smtp_password)
                server.send_message(msg)

        # Run in thread pool to avoid blocking
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, send_sync)

    async def send_password_reset_email(self, to_email: str, first_name: str, reset_token: str) -> bool:
        """Send the reset code the user must type into the password change form"""
        change_url = f"{self.frontend_url}/password-change"
        subject = "Password reset"

        html_content = f"""
        <!DOCTYPE html>
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <h1>Password reset</h1>
            <p>Hello {first_name},</p>
            <p>We received a request to reset your password. Use this code:</p>
            <p style="font-size: 20px; font-weight: bold;">{reset_token}</p>
            <p>The code expires in {self.reset_ttl_minutes} minutes.</p>
            <p><a href="{change_url}">Change my password</a></p>
            <p>If you did not ask for a reset you can ignore this email.</p>
        </body>
        </html>
        """

        text_content = (
            f"Hello {first_name},\n\n"
            f"Your password reset code is: {reset_token}\n"
            f"It expires in {self.reset_ttl_minutes} minutes.\n"
            f"Change your password at {change_url}\n"
        )

        return await self.send_email(to_email, subject, html_content, text_content)

    async def send_inactive_account_email(self, to_email: str, first_name: str) -> bool:
        """Tell the user their account was removed for inactivity"""
        subject = "Your account has been deleted"
        register_url = f"{self.frontend_url}/register"

        html_content = f"""
        <!DOCTYPE html>
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <h1>Account deleted</h1>
            <p>Hello {first_name},</p>
            <p>Your account was deleted because it has been inactive for too long.</p>
            <p>You are welcome to <a href="{register_url}">register again</a> at any time.</p>
        </body>
        </html>
        """

        text_content = (
            f"Hello {first_name},\n\n"
            "Your account was deleted because it has been inactive for too long.\n"
            f"You can register again at {register_url}\n"
        )

        return await self.send_email(to_email, subject, html_content, text_content)
