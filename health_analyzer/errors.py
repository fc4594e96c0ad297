"""Exception types raised by the data store and provider clients."""


class HealthAnalyzerError(Exception):
    """Base class for errors raised by this package."""


class WebhookPayloadError(HealthAnalyzerError):
    """The webhook envelope could not be parsed."""


class DataSourceError(HealthAnalyzerError):
    """A Supabase query, RPC or update failed."""


class WeatherProviderError(HealthAnalyzerError):
    """The weather provider answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        self.message = message
        super().__init__(f"weather provider returned {status_code}: {message or 'no message'}")


class SmsProviderError(HealthAnalyzerError):
    """The SMS provider answered with a non-2xx status."""

    def __init__(self, status_code: int, body: object = None):
        self.status_code = status_code
        self.body = body
        super().__init__(f"SMS provider returned {status_code}: {body}")
