# i18n_sync/languages.py
from __future__ import annotations
from typing import Dict, Tuple

# code -> (englishName, localName)
LANGUAGES: Dict[str, Tuple[str, str]] = {
    "ar-SA": ("Arabic (Saudi Arabia)", "العربية (المملكة العربية السعودية)"),
    "bg-BG": ("Bulgarian", "Български"),
    "ca-ES": ("Catalan", "Català"),
    "cs-CZ": ("Czech", "Čeština"),
    "da-DK": ("Danish", "Dansk"),
    "de-AT": ("German (Austria)", "Deutsch (Österreich)"),
    "de-CH": ("German (Switzerland)", "Deutsch (Schweiz)"),
    "de-DE": ("German", "Deutsch"),
    "el-GR": ("Greek", "Ελληνικά"),
    "en-AU": ("English (Australia)", "English (Australia)"),
    "en-CA": ("English (Canada)", "English (Canada)"),
    "en-GB": ("English (United Kingdom)", "English (United Kingdom)"),
    "en-IE": ("English (Ireland)", "English (Ireland)"),
    "en-US": ("English (United States)", "English (United States)"),
    "es-ES": ("Spanish", "Español"),
    "es-MX": ("Spanish (Mexico)", "Español (México)"),
    "et-EE": ("Estonian", "Eesti"),
    "fi-FI": ("Finnish", "Suomi"),
    "fr-BE": ("French (Belgium)", "Français (Belgique)"),
    "fr-CA": ("French (Canada)", "Français (Canada)"),
    "fr-CH": ("French (Switzerland)", "Français (Suisse)"),
    "fr-FR": ("French", "Français"),
    "he-IL": ("Hebrew", "עברית"),
    "hi-IN": ("Hindi", "हिन्दी"),
    "hr-HR": ("Croatian", "Hrvatski"),
    "hu-HU": ("Hungarian", "Magyar"),
    "id-ID": ("Indonesian", "Bahasa Indonesia"),
    "is-IS": ("Icelandic", "Íslenska"),
    "it-IT": ("Italian", "Italiano"),
    "ja-JP": ("Japanese", "日本語"),
    "ko-KR": ("Korean", "한국어"),
    "lt-LT": ("Lithuanian", "Lietuvių"),
    "lv-LV": ("Latvian", "Latviešu"),
    "ms-MY": ("Malay", "Bahasa Melayu"),
    "nb-NO": ("Norwegian (Bokmål)", "Norsk bokmål"),
    "nl-BE": ("Dutch (Belgium)", "Nederlands (België)"),
    "nl-NL": ("Dutch", "Nederlands"),
    "pl-PL": ("Polish", "Polski"),
    "pt-BR": ("Portuguese (Brazil)", "Português (Brasil)"),
    "pt-PT": ("Portuguese (Portugal)", "Português (Portugal)"),
    "ro-RO": ("Romanian", "Română"),
    "ru-RU": ("Russian", "Русский"),
    "sk-SK": ("Slovak", "Slovenčina"),
    "sl-SI": ("Slovenian", "Slovenščina"),
    "sr-RS": ("Serbian", "Српски"),
    "sv-SE": ("Swedish", "Svenska"),
    "th-TH": ("Thai", "ไทย"),
    "tr-TR": ("Turkish", "Türkçe"),
    "uk-UA": ("Ukrainian", "Українська"),
    "vi-VN": ("Vietnamese", "Tiếng Việt"),
    "zh-CN": ("Chinese (Simplified)", "中文 (简体)"),
    "zh-HK": ("Chinese (Hong Kong)", "中文 (香港)"),
    "zh-TW": ("Chinese (Traditional)", "中文 (繁體)"),
}


def language_names(code: str) -> Tuple[str, str]:
    """Unknown codes get empty names."""
    return LANGUAGES.get(code, ("", ""))
