"""Student badge QR codes.

A badge encodes "{courseId}/{studentId}"; scanners post the decoded text
(or a photo of the badge) to record attendance.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import BinaryIO

import qrcode
from PIL import Image

from ..common.validators import require_id
from ..core.exceptions import ValidationError

BADGE_SEPARATOR = "/"


@dataclass(frozen=True)
class Badge:
    course_id: str
    student_id: str

    @property
    def payload(self) -> str:
        return encode_badge(self.course_id, self.student_id)


def encode_badge(course_id: str, student_id: str) -> str:
    return f"{require_id(course_id, 'Course id')}{BADGE_SEPARATOR}{require_id(student_id, 'Student id')}"


def decode_badge(payload: str) -> Badge:
    parts = (payload or "").strip().split(BADGE_SEPARATOR)
    if len(parts) != 2 or not all(p.strip() for p in parts):
        raise ValidationError("Badge code is not valid")
    return Badge(course_id=parts[0].strip(), student_id=parts[1].strip())


def make_badge_png(course_id: str, student_id: str) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(encode_badge(course_id, student_id))
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def decode_badge_image(stream: BinaryIO) -> Badge:
    # pyzbar binds the native zbar library on import
    from pyzbar.pyzbar import decode as pyzbar_decode

    try:
        img = Image.open(stream).convert("RGB")
    except (OSError, ValueError) as e:
        raise ValidationError(f"Could not read image: {e}")

    decoded = pyzbar_decode(img)
    if not decoded:
        raise ValidationError("No QR code found in image")
    return decode_badge(decoded[0].data.decode("utf-8"))
