"""Map application language codes onto TMDb locale tags."""
from __future__ import annotations

DEFAULT_LANGUAGE = "en"
DEFAULT_LOCALE = "en-US"

# Estonian has no usable TMDb translations, so it is served in English.
LANGUAGE_MAP: dict[str, str] = {
    "en": "en-US",
    "ru": "ru-RU",
    "et": "en-US",
}


def primary_subtag(code: str | None) -> str:
    """Return the lower-cased primary language subtag (`"ru-RU"` -> `"ru"`)."""
    if not isinstance(code, str):
        return ""
    return code.strip().split("-", 1)[0].strip().lower()


def resolve_locale(language_code: str | None = None) -> str:
    """
    Resolve an application language code to a TMDb locale tag.

    Accepts short (`"ru"`) or region-tagged (`"ru-RU"`, `"en-US"`) codes. Unknown,
    empty or malformed input resolves to `DEFAULT_LOCALE`; this never raises.
    """

    return LANGUAGE_MAP.get(primary_subtag(language_code), DEFAULT_LOCALE)


def is_default_locale(locale: str) -> bool:
    return locale == DEFAULT_LOCALE


def asset_language_filter(locale: str) -> str:
    """
    Build an `include_image_language` / `include_video_language` value.

    Accepts the locale's own language, the default language and untagged assets.
    """

    parts: list[str] = []
    for part in (primary_subtag(locale), primary_subtag(DEFAULT_LOCALE), "null"):
        if part and part not in parts:
            parts.append(part)
    return ",".join(parts)
