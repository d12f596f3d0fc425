from __future__ import annotations


class ParamsParseError(Exception):
    """A request body declared as a parseable type could not be decoded.

    Carries the declared content type and the raw body text so the host can
    log what was received before turning the failure into an error response.
    """

    message_prefix = "Error occurred while parsing request parameters"

    def __init__(self, content_type: str, body: str, cause: BaseException) -> None:
        self.content_type = content_type
        self.body = body
        self.cause = cause
        super().__init__(f"{self.message_prefix}: {cause}")
