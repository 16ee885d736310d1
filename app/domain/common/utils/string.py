"""String Utilities Module
Helpers shared by request models, logging and observability.
"""

import re
import unicodedata

from kink import di


class StringUtils:
    """Collection of static string utility methods."""

    _NON_ALNUM_RE = re.compile(r'[^a-zA-Z0-9]+')

    # ---------- Normalization ----------
    @staticmethod
    def strip_accents(text: str) -> str:
        """Remove diacritical marks (accents) from characters in *text*."""
        normalized = unicodedata.normalize('NFD', text)
        return ''.join(ch for ch in normalized if unicodedata.category(ch) != 'Mn')

    # ---------- Case Conversion ----------
    @staticmethod
    def to_camel(text: str) -> str:
        """Convert *text* from snake_case / kebab-case to camelCase."""
        parts = re.split(r'[_\-]', text)
        return parts[0].lower() + ''.join(word.title() for word in parts[1:])

    # ---------- Validation ----------
    EMAIL_RE = re.compile(r'^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$')
    PHONE_RE = re.compile(r'^\+[0-9]{6,15}$')
    IDENTIFICATOR_RE = re.compile(r'^[0-9]{8}$')

    @staticmethod
    def is_email(text: str) -> bool:
        return bool(StringUtils.EMAIL_RE.match(text))

    @staticmethod
    def is_phone(text: str) -> bool:
        """International phone number with a leading ``+`` country prefix."""
        return bool(StringUtils.PHONE_RE.match(text))

    @staticmethod
    def is_identificator(text: str) -> bool:
        """National identity document number, exactly eight digits."""
        return bool(StringUtils.IDENTIFICATOR_RE.match(text))

    # ---------- Generation ----------
    @staticmethod
    def slugify(text: str, max_length: int | None = 80) -> str:
        """Generate URL slug from *text* limited to *max_length*."""
        text = StringUtils.strip_accents(text.lower())
        text = StringUtils._NON_ALNUM_RE.sub('-', text)
        text = re.sub(r'-{2,}', '-', text).strip('-')
        if max_length:
            text = text[:max_length].rstrip('-')
        return text

    @staticmethod
    def service_name() -> str:
        """Service name used in log labels and trace resources."""
        from app.core.config import Configuration  # noqa: PLC0415

        if Configuration in di:
            return StringUtils.slugify(di[Configuration].app_name)
        return 'agro-users'

