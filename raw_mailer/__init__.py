"""Raw MIME email composer with pluggable SES/SMTP transports.

Features:
    - Fixed-format multipart/mixed assembly (HTML, text, base64 attachments)
    - Dispatch modes: normal, disabled, auto-BCC only
    - Amazon SES (aioboto3) and SMTP (aiosmtplib) transports
    - Jinja2 template rendering for email bodies
    - JWT claim model and mapping helpers

Example::

    from raw_mailer import Mailer, MailerConfig, ReadyToSendEmail
    from raw_mailer.transports import SESTransport

    mailer = Mailer(MailerConfig(transport=SESTransport(), default_sending_address="noreply@example.com"))
    await mailer.send_email(ReadyToSendEmail(destination_addresses=["x@example.com"], subject="Hi", html_message="<b>hi</b>"))
"""

from .config import MailerConfig, load_settings
from .errors import MailerConfigurationError
from .mailer import Mailer, is_valid_email
from .models import EmailAttachment, MailerMode, ReadyToSendEmail

__all__ = [
    "EmailAttachment",
    "Mailer",
    "MailerConfig",
    "MailerConfigurationError",
    "MailerMode",
    "ReadyToSendEmail",
    "is_valid_email",
    "load_settings",
]
