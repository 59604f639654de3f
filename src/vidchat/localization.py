"""Message templates for every supported UI language.

Templates use ``{name}`` placeholders.  Lookups never raise: an unknown
locale falls back to English, an unknown key renders as the key itself and
a missing parameter leaves its placeholder untouched.
"""

from __future__ import annotations

import logging
import string
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "es": "Español",
    "fr": "Français",
    "de": "Deutsch",
    "it": "Italiano",
    "pt": "Português",
    "ja": "日本語",
    "ko": "한국어",
    "zh": "中文",
    "ru": "Русский",
}

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "usage_header": "Usage: vidchat <video-url> --transcript <file> [options]",
        "usage_examples": "\nExamples:",
        "usage_example_1": "  vidchat https://www.youtube.com/watch?v=dQw4w9WgXcQ --transcript talk.json",
        "usage_note": "\nRun 'vidchat --help' for every option.",
        "video_info_title": "Title: {title}",
        "video_info_author": "Author: {author}",
        "video_info_duration": "Duration: {duration}",
        "chat_started_with_languages": "Chat started (UI: {uiLanguage}, transcript: {transcriptLanguage})",
        "chat_exit_instruction": "Type 'exit' or 'quit' to leave.",
        "chat_export_instruction": "Type '/export' to save the conversation.",
        "chat_lang_instruction": "Type '/lang' to change the interface language.",
        "chat_goodbye": "Goodbye!",
        "chat_thinking": "Thinking...",
        "error_general": "Error: {error}",
        "error_empty_response": "The assistant returned no messages.",
        "error_config": "Configuration error: {error}",
        "error_transcript": "Could not load transcript: {error}",
        "loading_transcript": "Loading transcript...",
        "summary_generating": "Summarizing video...",
        "summary_request": "Summarize this video in a short paragraph followed by its key points as a bulleted list.",
        "export_empty": "Nothing to export yet.",
        "export_format_prompt": "Export format [md/json] (default md): ",
        "export_format_invalid": "Unknown format '{format}'. Use md or json.",
        "export_filename_prompt": "File name (default {filename}): ",
        "export_success": "Conversation exported to {path}",
        "export_failed": "Export failed: {error}",
        "lang_current": "Current interface language: {language}",
        "lang_available": "Available: {languages}",
        "lang_prompt": "Language code (empty to keep): ",
        "lang_changed": "Interface language set to {language}.",
        "lang_unchanged": "Language unchanged.",
        "lang_invalid": "Unsupported language code '{code}'.",
        "export_title": "Conversation about \"{title}\"",
        "export_source": "Source: {url}",
        "export_exported_at": "Exported: {date}",
        "export_role_user": "You",
        "export_role_assistant": "Assistant",
    },
    "es": {
        "usage_header": "Uso: vidchat <url-del-video> --transcript <archivo> [opciones]",
        "usage_examples": "\nEjemplos:",
        "usage_example_1": "  vidchat https://www.youtube.com/watch?v=dQw4w9WgXcQ --transcript charla.json",
        "usage_note": "\nEjecuta 'vidchat --help' para ver todas las opciones.",
        "video_info_title": "Título: {title}",
        "video_info_author": "Autor: {author}",
        "video_info_duration": "Duración: {duration}",
        "chat_started_with_languages": "Chat iniciado (interfaz: {uiLanguage}, transcripción: {transcriptLanguage})",
        "chat_exit_instruction": "Escribe 'exit' o 'quit' para salir.",
        "chat_export_instruction": "Escribe '/export' para guardar la conversación.",
        "chat_lang_instruction": "Escribe '/lang' para cambiar el idioma de la interfaz.",
        "chat_goodbye": "¡Hasta luego!",
        "chat_thinking": "Pensando...",
        "error_general": "Error: {error}",
        "error_empty_response": "El asistente no devolvió ningún mensaje.",
        "error_config": "Error de configuración: {error}",
        "error_transcript": "No se pudo cargar la transcripción: {error}",
        "loading_transcript": "Cargando transcripción...",
        "summary_generating": "Resumiendo el video...",
        "summary_request": "Resume este video en un párrafo breve seguido de sus puntos clave en una lista.",
        "export_empty": "Todavía no hay nada que exportar.",
        "export_format_prompt": "Formato [md/json] (por defecto md): ",
        "export_format_invalid": "Formato desconocido '{format}'. Usa md o json.",
        "export_filename_prompt": "Nombre del archivo (por defecto {filename}): ",
        "export_success": "Conversación exportada a {path}",
        "export_failed": "La exportación falló: {error}",
        "lang_current": "Idioma actual de la interfaz: {language}",
        "lang_available": "Disponibles: {languages}",
        "lang_prompt": "Código de idioma (vacío para mantener): ",
        "lang_changed": "Idioma de la interfaz cambiado a {language}.",
        "lang_unchanged": "Idioma sin cambios.",
        "lang_invalid": "Código de idioma no soportado '{code}'.",
        "export_title": "Conversación sobre \"{title}\"",
        "export_source": "Fuente: {url}",
        "export_exported_at": "Exportado: {date}",
        "export_role_user": "Tú",
        "export_role_assistant": "Asistente",
    },
    "fr": {
        "usage_header": "Utilisation : vidchat <url-video> --transcript <fichier> [options]",
        "usage_examples": "\nExemples :",
        "usage_example_1": "  vidchat https://www.youtube.com/watch?v=dQw4w9WgXcQ --transcript conf.json",
        "usage_note": "\nLancez 'vidchat --help' pour toutes les options.",
        "video_info_title": "Titre : {title}",
        "video_info_author": "Auteur : {author}",
        "video_info_duration": "Durée : {duration}",
        "chat_started_with_languages": "Discussion démarrée (interface : {uiLanguage}, transcription : {transcriptLanguage})",
        "chat_exit_instruction": "Tapez 'exit' ou 'quit' pour quitter.",
        "chat_export_instruction": "Tapez '/export' pour enregistrer la conversation.",
        "chat_lang_instruction": "Tapez '/lang' pour changer la langue de l'interface.",
        "chat_goodbye": "Au revoir !",
        "chat_thinking": "Réflexion...",
        "error_general": "Erreur : {error}",
        "error_empty_response": "L'assistant n'a renvoyé aucun message.",
        "error_config": "Erreur de configuration : {error}",
        "error_transcript": "Impossible de charger la transcription : {error}",
        "loading_transcript": "Chargement de la transcription...",
        "summary_generating": "Résumé de la vidéo...",
        "summary_request": "Résume cette vidéo en un court paragraphe suivi de ses points clés sous forme de liste.",
        "export_empty": "Rien à exporter pour l'instant.",
        "export_format_prompt": "Format [md/json] (md par défaut) : ",
        "export_format_invalid": "Format inconnu '{format}'. Utilisez md ou json.",
        "export_filename_prompt": "Nom du fichier ({filename} par défaut) : ",
        "export_success": "Conversation exportée vers {path}",
        "export_failed": "L'export a échoué : {error}",
        "lang_current": "Langue actuelle de l'interface : {language}",
        "lang_available": "Disponibles : {languages}",
        "lang_prompt": "Code de langue (vide pour conserver) : ",
        "lang_changed": "Langue de l'interface : {language}.",
        "lang_unchanged": "Langue inchangée.",
        "lang_invalid": "Code de langue non pris en charge '{code}'.",
        "export_title": "Conversation sur « {title} »",
        "export_source": "Source : {url}",
        "export_exported_at": "Exporté : {date}",
        "export_role_user": "Vous",
        "export_role_assistant": "Assistant",
    },
    "de": {
        "usage_header": "Verwendung: vidchat <video-url> --transcript <datei> [optionen]",
        "usage_examples": "\nBeispiele:",
        "usage_example_1": "  vidchat https://www.youtube.com/watch?v=dQw4w9WgXcQ --transcript vortrag.json",
        "usage_note": "\nAlle Optionen mit 'vidchat --help'.",
        "video_info_title": "Titel: {title}",
        "video_info_author": "Autor: {author}",
        "video_info_duration": "Dauer: {duration}",
        "chat_started_with_languages": "Chat gestartet (Oberfläche: {uiLanguage}, Transkript: {transcriptLanguage})",
        "chat_exit_instruction": "Mit 'exit' oder 'quit' beenden.",
        "chat_export_instruction": "Mit '/export' das Gespräch speichern.",
        "chat_lang_instruction": "Mit '/lang' die Sprache der Oberfläche ändern.",
        "chat_goodbye": "Auf Wiedersehen!",
        "chat_thinking": "Denke nach...",
        "error_general": "Fehler: {error}",
        "error_empty_response": "Der Assistent hat keine Nachricht geliefert.",
        "error_config": "Konfigurationsfehler: {error}",
        "error_transcript": "Transkript konnte nicht geladen werden: {error}",
        "loading_transcript": "Transkript wird geladen...",
        "summary_generating": "Video wird zusammengefasst...",
        "summary_request": "Fasse dieses Video in einem kurzen Absatz zusammen, gefolgt von den wichtigsten Punkten als Liste.",
        "export_empty": "Noch nichts zu exportieren.",
        "export_format_prompt": "Format [md/json] (Standard md): ",
        "export_format_invalid": "Unbekanntes Format '{format}'. Bitte md oder json.",
        "export_filename_prompt": "Dateiname (Standard {filename}): ",
        "export_success": "Gespräch exportiert nach {path}",
        "export_failed": "Export fehlgeschlagen: {error}",
        "lang_current": "Aktuelle Sprache der Oberfläche: {language}",
        "lang_available": "Verfügbar: {languages}",
        "lang_prompt": "Sprachcode (leer lassen zum Beibehalten): ",
        "lang_changed": "Sprache der Oberfläche: {language}.",
        "lang_unchanged": "Sprache unverändert.",
        "lang_invalid": "Nicht unterstützter Sprachcode '{code}'.",
        "export_title": "Gespräch über „{title}“",
        "export_source": "Quelle: {url}",
        "export_exported_at": "Exportiert: {date}",
        "export_role_user": "Du",
        "export_role_assistant": "Assistent",
    },
}

SUPPORTED_LOCALES: tuple[str, ...] = tuple(MESSAGES)


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


_formatter = string.Formatter()


def normalize_locale(locale: str | None) -> str:
    """Reduce ``es-MX`` / ``es_MX`` / ``ES`` to ``es``; unknown locales become English."""
    if not locale:
        return DEFAULT_LOCALE
    code = locale.replace("_", "-").split("-", 1)[0].lower()
    return code if code in MESSAGES else DEFAULT_LOCALE


def get_message(key: str, locale: str | None = None, params: dict[str, Any] | None = None) -> str:
    table = MESSAGES[normalize_locale(locale)]
    template = table.get(key)
    if template is None:
        template = MESSAGES[DEFAULT_LOCALE].get(key)
    if template is None:
        logger.debug("Missing message key %r for locale %r", key, locale)
        return key
    if not params:
        return template
    try:
        return _formatter.vformat(template, (), _KeepMissing(params))
    except (ValueError, IndexError):
        logger.debug("Bad template for key %r", key, exc_info=True)
        return template


def get_language_name(code: str | None) -> str:
    if not code:
        return ""
    return LANGUAGE_NAMES.get(code.lower(), LANGUAGE_NAMES.get(code.split("-", 1)[0].lower(), code))
