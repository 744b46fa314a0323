"""Helpers for sending notification emails via SendGrid."""

from __future__ import annotations

import html
import json
import logging
import re
from datetime import datetime
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from fleet_notifier.config import Settings, get_settings
from fleet_notifier.domain.entities import EmailTemplate
from fleet_notifier.infrastructure.database import SessionFactory, session_scope
from fleet_notifier.infrastructure.repositories import EmailTemplateRepository

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
COMPANY_NAME = "Fleetly Fleet Management"
_PLACEHOLDER_PATTERN = re.compile(r"{{\s*([a-zA-Z0-9_]+)\s*}}")


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                field = item.get("field")
                if message and field:
                    messages.append(f"{message} (field: {field})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _log_sendgrid_failure(source: Any, recipient: str) -> None:
    """Log a failed SendGrid call, from an exception or an error response."""

    status_code = getattr(source, "status_code", None)
    details = _extract_sendgrid_error_details(getattr(source, "body", None))

    if status_code and details:
        logger.error(
            "SendGrid request for %s failed with status %s: %s",
            recipient,
            status_code,
            details,
        )
    elif status_code:
        logger.error("SendGrid request for %s failed with status %s", recipient, status_code)
    elif details:
        logger.error("SendGrid request for %s failed: %s", recipient, details)
    elif isinstance(source, Exception):
        logger.error("Error sending email to %s via SendGrid: %s", recipient, source)
    else:
        logger.error("SendGrid request for %s failed", recipient)


def send_email(
    subject: str,
    html_content: str,
    recipient: str,
    *,
    plain_text: str | None = None,
    settings: Settings | None = None,
) -> bool:
    """Send an email using the configured SendGrid credentials."""

    settings = settings or get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email to %s", recipient)
        return False

    message = Mail(
        from_email=(settings.sendgrid_sender, settings.email_from_name),
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
        plain_text_content=plain_text,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # SendGrid raises python_http_client errors and network errors
        _log_sendgrid_failure(exc, recipient)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_sendgrid_failure(response, recipient)
        return False

    return True


def render_template(content: str, variables: dict[str, Any], *, escape: bool = False) -> str:
    """Replace ``{{name}}`` placeholders; unknown names render empty.

    With ``escape`` the substituted values are HTML-escaped.
    """

    def _replace(match: re.Match[str]) -> str:
        value = variables.get(match.group(1))
        text = "" if value is None else str(value)
        return html.escape(text) if escape else text

    return _PLACEHOLDER_PATTERN.sub(_replace, content)


def default_html_body(name: str, title: str, message: str, action_url: str | None) -> str:
    action = (
        f'<p style="text-align:center"><a href="{html.escape(action_url)}" '
        'style="background:#3b82f6;color:#fff;padding:12px 24px;'
        'text-decoration:none;border-radius:6px">Take Action</a></p>'
        if action_url
        else ""
    )
    return "".join(
        (
            f"<h1>{html.escape(title)}</h1>",
            f"<p>Hello {html.escape(name)},</p>",
            f"<p>{html.escape(message)}</p>",
            action,
            "<p>Best regards,<br>The Fleetly Team</p>",
            f"<p><small>This is an automated message from {COMPANY_NAME}. "
            f"&copy; {datetime.now().year} Fleetly.</small></p>",
        )
    )


def default_text_body(name: str, title: str, message: str, action_url: str | None) -> str:
    lines = [title, "", f"Hello {name},", "", message, ""]
    if action_url:
        lines.extend([f"Take Action: {action_url}", ""])
    lines.extend(
        [
            "Best regards,",
            "The Fleetly Team",
            "",
            f"This is an automated message from {COMPANY_NAME}",
        ]
    )
    return "\n".join(lines)


class NotificationEmailSender:
    """Email collaborator used by the notification engine.

    Templates are looked up per ``(type, language)`` with an English fallback;
    when none is stored a built-in layout is used.
    """

    def __init__(self, session_factory: SessionFactory, settings: Settings) -> None:
        self._session_factory = session_factory
        self._settings = settings

    def send_notification_email(
        self,
        to: str,
        name: str,
        notification_type: str,
        title: str,
        message: str,
        action_url: str | None = None,
        language: str | None = None,
    ) -> bool:
        """Render and send one notification email; return ``True`` on success."""

        template = self._find_template(notification_type, language or DEFAULT_LANGUAGE)
        if template is None:
            logger.debug(
                "No email template for type %s; using default layout", notification_type
            )
            subject = title
            html_content = default_html_body(name, title, message, action_url)
            text_content = default_text_body(name, title, message, action_url)
        else:
            variables = {
                "name": name,
                "title": title,
                "message": message,
                "action_url": action_url or "",
                "app_url": self._settings.app_url,
                "company_name": COMPANY_NAME,
                "current_year": datetime.now().year,
            }
            subject = render_template(template.subject, variables)
            html_content = render_template(template.html_content, variables, escape=True)
            text_content = render_template(template.text_content, variables)

        return send_email(
            subject,
            html_content,
            to,
            plain_text=text_content,
            settings=self._settings,
        )

    def _find_template(self, notification_type: str, language: str) -> EmailTemplate | None:
        with session_scope(self._session_factory) as session:
            repository = EmailTemplateRepository(session)
            template = repository.get_active(notification_type, language)
            if template is None and language != DEFAULT_LANGUAGE:
                template = repository.get_active(notification_type, DEFAULT_LANGUAGE)
            return template


__all__ = [
    "NotificationEmailSender",
    "default_html_body",
    "default_text_body",
    "render_template",
    "send_email",
]
