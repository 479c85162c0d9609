from translate_spine.translation.handler import TranslationHandler, build_registrations
from translate_spine.translation.locales import LocaleResolver

__all__ = ["LocaleResolver", "TranslationHandler", "build_registrations"]
