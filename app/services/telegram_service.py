"""
Service Telegram - notifications best-effort des créations / modifications / suppressions
"""

import html
import logging
import re

import requests

from app.core.config import settings
from app.core.errors import NotifyError

logger = logging.getLogger(__name__)

# Limite Telegram : 4096 caractères par message, on garde de la marge pour l'en-tête
MAX_CONTENT_CHARS = 3500

TYPE_NAMES = {
    "text": "Text",
    "code": "Code",
    "poetry": "Poetry",
    "image": "Image",
    "file": "File",
}

BLOB_TYPES = ("image", "file")

TIMESTAMP_SUFFIX = re.compile(r"_\d+\.\w+$")
PASTED_PREFIX = re.compile(r"^(粘贴的(图片|文件)|pasted[ _](image|file))_?", re.IGNORECASE)


def get_content_type_name(content_type: str) -> str:
    return TYPE_NAMES.get(content_type, content_type)


def clean_display_title(content_type: str, title: str) -> str:
    """Retire l'horodatage et le préfixe "pasted image/file" des titres auto-générés"""
    if content_type not in BLOB_TYPES:
        return title
    title = TIMESTAMP_SUFFIX.sub("", title)
    return PASTED_PREFIX.sub("", title)


def _truncate(text: str) -> str:
    if len(text) <= MAX_CONTENT_CHARS:
        return text
    return text[:MAX_CONTENT_CHARS] + "…"


def format_content_message(content_type: str, title: str, content: str, is_edit: bool = False) -> str:
    header = "✏️ Content edited" if is_edit else "📝 New content"
    lines = [
        f"<b>{header}</b>",
        "",
        f"<b>Type:</b> {html.escape(get_content_type_name(content_type))}",
        f"<b>Title:</b> {html.escape(title)}",
        "",
    ]

    if content_type in BLOB_TYPES:
        label = "View image" if content_type == "image" else "Download file"
        lines.append(f'<a href="{html.escape(content, quote=True)}">{label}</a>')
    elif content_type == "code":
        lines.append(f"<pre>{html.escape(_truncate(content))}</pre>")
    else:
        lines.append(html.escape(_truncate(content)))

    if is_edit:
        lines.append("")
        lines.append("<i>(edited)</i>")
    return "\n".join(lines)


def format_delete_message(content_type: str, title: str) -> str:
    display_title = clean_display_title(content_type, title)
    return (
        "<b>🗑 Content deleted</b>\n\n"
        f"<b>Type:</b> {html.escape(get_content_type_name(content_type))}\n"
        f"<b>Title:</b> {html.escape(display_title)}\n\n"
        "<i>This content has been permanently deleted</i>"
    )


def _post_message(message: str) -> None:
    url = f"{settings.TELEGRAM_API_BASE}/bot{settings.TELEGRAM_BOT_TOKEN}/sendMessage"
    try:
        response = requests.post(
            url,
            json={
                "chat_id": settings.TELEGRAM_CHAT_ID,
                "text": message,
                "parse_mode": "HTML",
                "disable_web_page_preview": True,
            },
            timeout=settings.TELEGRAM_TIMEOUT,
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        raise NotifyError(str(e)) from e

    if not data.get("ok"):
        raise NotifyError(data.get("description", "Telegram API returned ok=false"))


def send_to_telegram(message: str) -> bool:
    """Envoie le message au chat configuré. Ne lève jamais d'exception."""
    if not settings.TELEGRAM_BOT_TOKEN or not settings.TELEGRAM_CHAT_ID:
        logger.warning("Telegram not configured, notification skipped")
        return False

    try:
        _post_message(message)
        return True
    except NotifyError as e:
        logger.error(f"Telegram notification failed: {e}")
    except Exception as e:
        logger.exception(f"Unexpected error while notifying Telegram: {e}")
    return False
