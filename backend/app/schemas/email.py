from __future__ import annotations
from pydantic import BaseModel


class OutboundMessage(BaseModel):
    """A fully rendered email, ready for the transport."""
    from_address: str
    to: str
    cc: str | None = None
    reply_to: str | None = None
    subject: str
    text: str
    html: str

    @classmethod
    def plain(cls, *, text: str, **fields) -> "OutboundMessage":
        # html is the text body with line breaks only, no other markup
        return cls(text=text, html=text.replace("\n", "<br>"), **fields)
