# topmark:header:start
#
#   project      : StampMark
#   file         : __init__.py
#   file_relpath : src/stampmark/i18n/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Localized display strings.

A static table maps a locale tag to a fixed `Messages` set. The locale is
chosen once from an explicit value (``--lang`` or the ``locale`` config key),
then ``STAMPMARK_LANG``, then the POSIX ``LC_ALL`` / ``LANG`` variables.
Any tag starting with ``zh`` selects Chinese; everything else falls back to
English.
"""

from __future__ import annotations

import os
from typing import Final, Mapping

from stampmark.constants import ENV_LANG
from stampmark.i18n.locales import EN, ZH, Messages

DEFAULT_LOCALE: Final[str] = "en"

MESSAGES: Final[Mapping[str, Messages]] = {
    "en": EN,
    "zh": ZH,
}


def normalize_locale(tag: str | None) -> str | None:
    """Map a locale tag such as ``zh_CN.UTF-8`` or ``en-US`` to a table key."""
    if not tag:
        return None
    base: str = tag.strip().lower().replace("-", "_").split(".")[0].split("_")[0]
    if base in MESSAGES:
        return base
    return None


def resolve_locale(explicit: str | None = None) -> str:
    """Return the table key for the active locale.

    Args:
        explicit (str | None): Locale requested by the caller; when given, the
            environment is not consulted and unknown tags fall back to English.

    Returns:
        str: A key of `MESSAGES`.
    """
    if explicit:
        return normalize_locale(explicit) or DEFAULT_LOCALE
    for candidate in (
        os.environ.get(ENV_LANG),
        os.environ.get("LC_ALL"),
        os.environ.get("LANG"),
    ):
        key: str | None = normalize_locale(candidate)
        if key is not None:
            return key
    return DEFAULT_LOCALE


def get_messages(locale: str | None = None) -> Messages:
    """Return the display strings for ``locale`` (resolved via `resolve_locale`)."""
    return MESSAGES[resolve_locale(locale)]


__all__ = [
    "DEFAULT_LOCALE",
    "MESSAGES",
    "Messages",
    "get_messages",
    "normalize_locale",
    "resolve_locale",
]
