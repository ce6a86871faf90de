from __future__ import annotations

import base64
import io
import json
from typing import Optional

import qrcode

from .model import Session


def build_payload(session: Session) -> str:
    """JSON text embedded in the scannable code."""
    return json.dumps(session.to_dict(), separators=(",", ":"))


def parse_payload(raw: Optional[str]) -> dict:
    """Best-effort decode of a scanned payload; non-JSON text yields ``{}``."""
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def render_png(data: str) -> bytes:
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def to_data_url(png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")
