import re
from typing import Any, List

IMAGE_DATA_URI = re.compile(r"^data:image/(jpeg|jpg|png|gif|webp|svg\+xml);base64,", re.IGNORECASE)
AUDIO_DATA_URI = re.compile(r"^data:audio/(mp3|wav|ogg|m4a|aac|webm);base64,", re.IGNORECASE)
HTTP_URL = re.compile(r"^https?://", re.IGNORECASE)


def is_base64_image(value: Any) -> bool:
    return isinstance(value, str) and bool(IMAGE_DATA_URI.match(value))


def is_base64_audio_or_url(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    return bool(AUDIO_DATA_URI.match(value) or HTTP_URL.match(value))


def clean_photos(photos: Any) -> List[str]:
    if not isinstance(photos, list):
        return []
    return [p for p in photos if is_base64_image(p)]


def clean_media(media: Any) -> List[str]:
    if not isinstance(media, list):
        return []
    return [m for m in media if is_base64_audio_or_url(m)]


def is_valid_question(q: Any) -> bool:
    """Question text, at least two options and an in-range answer index"""
    if not isinstance(q, dict):
        return False
    text = q.get("question")
    options = q.get("options")
    answer = q.get("correctAnswer")
    return (
        isinstance(text, str)
        and text.strip() != ""
        and isinstance(options, list)
        and len(options) >= 2
        and isinstance(answer, int)
        and not isinstance(answer, bool)
        and 0 <= answer < len(options)
    )


def clean_questions(questions: Any) -> List[dict]:
    if not isinstance(questions, list):
        return []
    return [q for q in questions if is_valid_question(q)]
