from __future__ import annotations

import io

import pytest
from PIL import Image

from classroom_attendance.attendance.badges import (
    Badge,
    decode_badge,
    decode_badge_image,
    encode_badge,
    make_badge_png,
)
from classroom_attendance.core.exceptions import ValidationError


def test_badge_payload_format():
    assert encode_badge("course1", "student9") == "course1/student9"
    assert decode_badge(" course1/student9 \n") == Badge(course_id="course1", student_id="student9")
    assert Badge("c", "s").payload == "c/s"


@pytest.mark.parametrize("payload", ["", "course1", "course1/", "/student9", "a/b/c"])
def test_malformed_badge_is_rejected(payload):
    with pytest.raises(ValidationError):
        decode_badge(payload)


def test_encode_rejects_ids_with_separator():
    with pytest.raises(ValidationError):
        encode_badge("a/b", "s")


def test_badge_png_is_an_image():
    png = make_badge_png("course1", "student9")
    assert png.startswith(b"\x89PNG\r\n\x1a\n")


def test_badge_png_decodes_back_to_badge():
    pytest.importorskip("pyzbar.pyzbar", reason="zbar shared library not available")

    png = make_badge_png("course1", "student9")

    assert decode_badge_image(io.BytesIO(png)) == Badge(course_id="course1", student_id="student9")


def test_image_without_qr_code_is_rejected():
    pytest.importorskip("pyzbar.pyzbar", reason="zbar shared library not available")

    buf = io.BytesIO()
    Image.new("RGB", (64, 64), "white").save(buf, format="PNG")
    buf.seek(0)

    with pytest.raises(ValidationError):
        decode_badge_image(buf)


def test_unreadable_image_is_rejected():
    pytest.importorskip("pyzbar.pyzbar", reason="zbar shared library not available")

    with pytest.raises(ValidationError):
        decode_badge_image(io.BytesIO(b"not an image"))
