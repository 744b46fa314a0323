"""Send a test email to check the SendGrid configuration."""

from __future__ import annotations

import argparse
import logging
from datetime import datetime

from fleet_notifier.config import get_settings
from fleet_notifier.infrastructure.email import default_html_body, default_text_body, send_email


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send a test email through SendGrid.")
    parser.add_argument("recipient", help="Email address that receives the test message.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO)

    title = "Test Email from Fleetly"
    message = (
        "If you received this email, the email configuration is working correctly. "
        f"Timestamp: {datetime.now().isoformat()}"
    )
    sent = send_email(
        title,
        default_html_body(args.recipient, title, message, None),
        args.recipient,
        plain_text=default_text_body(args.recipient, title, message, None),
        settings=get_settings(),
    )
    if not sent:
        raise SystemExit("The test email could not be sent; check the logs for details.")
    print(f"Test email sent to {args.recipient}")


if __name__ == "__main__":
    main()
