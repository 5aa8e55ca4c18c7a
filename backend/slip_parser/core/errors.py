"""Error kinds raised while handling a slip request.

Each error carries the HTTP status and the message that is safe to show
to the caller. Anything more specific (raw model output, upstream error
text) stays on the exception for server-side logging only.
"""

from __future__ import annotations


class SlipParserError(Exception):
    status_code: int = 500
    public_message: str = "OCR processing failed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.public_message
        super().__init__(self.detail)


class MissingInputError(SlipParserError):
    status_code = 400
    public_message = "Missing image"


class InvalidRequestError(SlipParserError):
    status_code = 400
    public_message = "Invalid request body"


class PayloadTooLargeError(SlipParserError):
    status_code = 413
    public_message = "Payload too large"


class ExtractionError(SlipParserError):
    """The model reply had no locatable or parseable JSON object."""

    status_code = 500
    public_message = "Invalid AI response format"

    def __init__(self, detail: str, *, raw_text: str = "") -> None:
        super().__init__(detail)
        self.raw_text = raw_text


class UpstreamInvocationError(SlipParserError):
    """The call to the model API itself failed."""

    status_code = 500
    public_message = "OCR processing failed"
