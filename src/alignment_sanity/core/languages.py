from pathlib import Path

_LANGUAGE_ALIASES = {
    "css": "css",
    "javascript": "javascript",
    "javascriptreact": "javascript",
    "js": "javascript",
    "json": "json",
    "jsonc": "jsonc",
    "less": "css",
    "py": "python",
    "python": "python",
    "scss": "css",
    "ts": "typescript",
    "tsx": "tsx",
    "typescript": "typescript",
    "typescriptreact": "tsx",
}

_EXTENSION_LANGUAGE_MAP = {
    ".cjs": "javascript",
    ".css": "css",
    ".js": "javascript",
    ".json": "json",
    ".jsonc": "jsonc",
    ".jsx": "javascript",
    ".less": "css",
    ".mjs": "javascript",
    ".py": "python",
    ".scss": "css",
    ".ts": "typescript",
    ".tsx": "tsx",
}

# Languages tokenized line by line with the structural delimiter classifier.
_LINE_SCANNED_LANGUAGES = frozenset({"json", "jsonc"})

_SUPPORTED_LANGUAGES = set(_EXTENSION_LANGUAGE_MAP.values())


def supported_languages() -> list[str]:
    return sorted(_SUPPORTED_LANGUAGES)


def normalize_language(language: str) -> str:
    normalized = language.strip().lower()
    resolved = _LANGUAGE_ALIASES.get(normalized, normalized)
    if resolved not in _SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language '{language}'. Supported: {supported_languages()}")
    return resolved


def detect_language_from_path(file_path: Path) -> str:
    suffix = file_path.suffix.lower()
    if suffix in _EXTENSION_LANGUAGE_MAP:
        return _EXTENSION_LANGUAGE_MAP[suffix]
    raise ValueError(f"Unsupported file extension: {suffix}")


def resolve_language(language: str | None, file_path: Path | None) -> str:
    if language:
        return normalize_language(language)
    if file_path:
        return detect_language_from_path(file_path)
    raise ValueError("Language must be provided when no file path is available.")


def is_line_scanned(language: str) -> bool:
    return language in _LINE_SCANNED_LANGUAGES


def is_supported_path(path: Path) -> bool:
    return path.suffix.lower() in _EXTENSION_LANGUAGE_MAP
