"""Fixed extraction prompt and image attachment for a transfer slip."""

from __future__ import annotations

from dataclasses import dataclass

SLIP_EXTRACT_PROMPT = """You are validating a Maldives bank transfer slip (BML or MIB).

Extract ONLY:

1. transactionId
2. toAccountNumber
3. confidenceScore — integer 0–100 reflecting how confident you are in the extracted data based on:
   - Image clarity
   - Text legibility
   - Whether required fields were clearly present and labeled
   - Any ambiguity or missing data

Rules:
- Only use "To" or "To Account" labeled fields for toAccountNumber
- If uncertain about a field, return null
- No guessing
- Return JSON only

{
  "transactionId": "",
  "toAccountNumber": "",
  "confidenceScore": 0,
  "rawText": ""
}"""

# Leading base64 characters of common image file signatures.
_MAGIC_PREFIXES = (
    ("/9j/", "image/jpeg"),
    ("iVBORw0KGgo", "image/png"),
    ("R0lGOD", "image/gif"),
    ("UklGR", "image/webp"),
)

DEFAULT_MEDIA_TYPE = "image/jpeg"


@dataclass(frozen=True)
class SlipPrompt:
    text: str
    image_url: str


def guess_media_type(raw_base64: str) -> str:
    for prefix, media_type in _MAGIC_PREFIXES:
        if raw_base64.startswith(prefix):
            return media_type
    return DEFAULT_MEDIA_TYPE


def to_image_url(base64_image: str) -> str:
    """Return *base64_image* as a data URI, wrapping raw base64 if needed."""
    payload = base64_image.strip()
    if payload.startswith("data:"):
        return payload
    return f"data:{guess_media_type(payload)};base64,{payload}"


def build_slip_prompt(base64_image: str) -> SlipPrompt:
    return SlipPrompt(text=SLIP_EXTRACT_PROMPT, image_url=to_image_url(base64_image))
