"""Exceptions raised by the raw mailer."""


class MailerConfigurationError(RuntimeError):
    """Raised when the mailer is missing a collaborator or a setting it needs."""

    def __init__(self, message: str = "Invalid mailer configuration"):
        super().__init__(message)
        self.code = "mailer_configuration"
