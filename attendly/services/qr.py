# attendly/services/qr.py
# QR codes for guest invitation links.

from __future__ import annotations

import base64
import io
import logging
from typing import Optional

import qrcode

from attendly.config import PUBLIC_BASE_URL

log = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "QR_CODE_PLACEHOLDER_"


def build_invite_url(invitation_id: str, base_url: Optional[str] = None) -> str:
    """Guest-facing link: {base}/invite/{id}."""
    base = (base_url if base_url is not None else PUBLIC_BASE_URL).rstrip("/")
    return f"{base}/invite/{invitation_id}"


def make_qr_data_url(data: str, box_size: int = 8, border: int = 2) -> str:
    """PNG QR code for `data` as a data URL (black on white)."""
    qr = qrcode.QRCode(
        version=None,  # pick the smallest version that fits
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def invitation_qr_code(invitation_id: str, base_url: Optional[str] = None) -> str:
    """
    QR token stored on the invitation at creation.
    Deterministic in (id, base_url). If encoding fails the invitation is still
    created, with a placeholder token instead of the image.
    """
    url = build_invite_url(invitation_id, base_url)
    try:
        return make_qr_data_url(url)
    except Exception:
        log.exception("qr: failed to encode %s", url)
        return f"{PLACEHOLDER_PREFIX}{invitation_id}"
