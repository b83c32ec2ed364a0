"""
Locale table for the few fixed strings the engine produces itself.

Everything else a learner reads (fail messages, hints, success messages,
canned terminal output) is authored content and passes through untouched.
"""

DEFAULT_LANGUAGE = "es"

MESSAGES: dict[str, dict[str, str]] = {
    "es": {
        "exercise_not_found": "Ejercicio no encontrado.",
        "validation_failed": "Hay errores en el código.",
        "terminal_exercise_not_found": 'Error: ejercicio "{exercise_id}" no encontrado',
        "terminal_help_header": "Comandos disponibles para este ejercicio:",
        "terminal_help_footer": "También: help, clear",
        "terminal_help_hint": 'Escribe "help" para ver los comandos disponibles.',
    },
    "en": {
        "exercise_not_found": "Exercise not found.",
        "validation_failed": "There are errors in your code.",
        "terminal_exercise_not_found": 'Error: exercise "{exercise_id}" not found',
        "terminal_help_header": "Available commands for this exercise:",
        "terminal_help_footer": "Also: help, clear",
        "terminal_help_hint": 'Type "help" to see the available commands.',
    },
}

SUPPORTED_LANGUAGES = frozenset(MESSAGES)


def resolve_language(lang: str | None, default: str = DEFAULT_LANGUAGE) -> str:
    """Return a supported language code, falling back to the default."""
    if lang and lang in MESSAGES:
        return lang
    return default if default in MESSAGES else DEFAULT_LANGUAGE


def translate(key: str, lang: str | None = None, **params: str) -> str:
    """Look up a fixed message, formatting any named parameters."""
    table = MESSAGES[resolve_language(lang)]
    return table[key].format(**params) if params else table[key]
