"""
Applicant notifications.

Templated HTML emails keyed on the eligibility outcome. Delivery goes over
SMTP (SSL on port 465, STARTTLS otherwise); when SMTP credentials are not
configured the message is logged instead of sent.
"""
from __future__ import annotations

import asyncio
import html
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, Dict, Optional

from src.utils.config_loader import SmtpConfig

logger = logging.getLogger(__name__)

SUCCESS_SUBJECT = "Concept Paper Submission Successful"
INELIGIBLE_SUBJECT = "Concept Paper Submission Update"


def success_template(applicant_name: str) -> str:
    name = html.escape(applicant_name or "Applicant")
    return f"""
      <div style="font-family: sans-serif; padding: 20px; color: #333;">
        <h2>Concept Paper Submission Successful</h2>
        <p>Dear {name},</p>
        <p>Thank you for your submission. Your concept paper has been successfully received and is pending review.</p>
        <p>Our team will get back to you after the preliminary review process.</p>
        <p>Sincerely,</p>
        <p>The Belize Fund Team</p>
      </div>
    """


def ineligible_template(applicant_name: str, reason: str) -> str:
    name = html.escape(applicant_name or "Applicant")
    return f"""
      <div style="font-family: sans-serif; padding: 20px; color: #333;">
        <h2>Concept Paper Submission Update</h2>
        <p>Dear {name},</p>
        <p>Thank you for your interest. After a preliminary review, we found that your application does not meet the following eligibility criteria:</p>
        <p><strong>{html.escape(reason)}</strong></p>
        <p>For more details on our eligibility requirements, please visit our website.</p>
        <p>We encourage you to apply in the future if the eligibility criteria are met.</p>
        <p>Sincerely,</p>
        <p>The Belize Fund Team</p>
      </div>
    """


class EmailService:
    def __init__(self, config: SmtpConfig):
        self.config = config

    @property
    def sender(self) -> str:
        return f'"{self.config.from_name}" <{self.config.from_address or self.config.user}>'

    def build_message(self, to: str, subject: str, html_body: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to
        msg.attach(MIMEText(html_body, "html", "utf-8"))
        return msg

    def _deliver(self, msg: MIMEMultipart) -> None:
        cfg = self.config
        if cfg.use_ssl:
            with smtplib.SMTP_SSL(cfg.host, cfg.port, timeout=30) as server:
                server.login(cfg.user, cfg.password)
                server.send_message(msg)
        else:
            with smtplib.SMTP(cfg.host, cfg.port, timeout=30) as server:
                server.starttls()
                server.login(cfg.user, cfg.password)
                server.send_message(msg)

    async def send_templated_email(self, to: str, subject: str, html_body: str) -> Dict[str, Any]:
        if not to:
            return {"success": False, "status": "skipped", "reason": "missing_recipient"}
        if not self.config.enabled:
            logger.info(
                "[EMAIL STUB] Would send email to %s, subject=%r (configure EMAIL_HOST, EMAIL_USER, EMAIL_PASS to enable sending)",
                to, subject,
            )
            return {"success": True, "status": "logged"}

        msg = self.build_message(to, subject, html_body)
        logger.info(f"Attempting to send email to: {to} with subject: \"{subject}\"")
        await asyncio.to_thread(self._deliver, msg)
        logger.info("Email sent successfully to %s", to)
        return {"success": True, "status": "sent"}

    async def send_success_email(self, to: str, applicant_name: Optional[str] = None) -> Dict[str, Any]:
        return await self.send_templated_email(to, SUCCESS_SUBJECT, success_template(applicant_name or ""))

    async def send_ineligibility_email(self, to: str, reason: str, applicant_name: Optional[str] = None) -> Dict[str, Any]:
        return await self.send_templated_email(to, INELIGIBLE_SUBJECT, ineligible_template(applicant_name or "", reason))
