"""
Constants and prompt templates for the Stelluna chat router.
"""

PERSONA_PREAMBLE = """Eres Stelluna, una asistente de inteligencia artificial cercana, paciente y entusiasta.
Respondes siempre en el idioma del usuario, con un tono cálido, claro y honesto, y admites cuando no sabes algo.
Puedes ayudar con programación, ciencia, matemáticas, escritura, idiomas, negocios, educación, salud general, viajes y temas cotidianos.
Cuando se te entregan resultados de búsqueda o archivos adjuntos, úsalos como contexto y cita la fuente cuando sea útil."""

MEMORY_CONTEXT_TEMPLATE = "Información que recuerdas sobre este usuario: {memory_context}"

TITLE_PROMPT_TEMPLATE = """Genera un título breve (máximo 6 palabras) para una conversación que empieza con el siguiente mensaje.
Responde solo con el título, sin comillas ni puntuación final.

Mensaje: {message}"""

# Literal returned by a provider client when the upstream answer carries no text
EMPTY_COMPLETION_TEXT = "Sorry, I couldn't generate a response."

FALLBACK_RESPONSES = [
    "¡Hola! Soy Stelluna. En este momento no puedo conectarme con mi modelo de lenguaje, pero sigo aquí. ¿Puedes intentarlo de nuevo en unos segundos?",
    "Lo siento, tuve un pequeño tropiezo al procesar tu mensaje. Vuelve a enviarlo y lo intentaré otra vez con gusto.",
    "Parece que mis servidores están tomando un descanso. Mientras tanto, cuéntame un poco más sobre lo que necesitas y lo retomamos enseguida.",
    "Estoy funcionando en modo demostración ahora mismo, así que no puedo darte una respuesta completa. Prueba con otro modelo o inténtalo más tarde.",
    "Disculpa, no logré generar una respuesta esta vez. Si el problema continúa, intenta elegir un modelo diferente en el selector.",
    "¡Ups! Algo no salió como esperaba de mi lado. Tu mensaje está a salvo; vuelve a intentarlo en un momento.",
]


class SearchType:
    """Search type identifiers."""
    WEB, YOUTUBE, IMAGES = "web", "youtube", "images"

    ALL = (WEB, YOUTUBE, IMAGES)


class AnalysisStatus:
    """Values of the analysisStatus field written by the file analysis process."""
    PENDING, COMPLETED, ERROR = "pending", "completed", "error"


class EnrichmentHeaders:
    """Block headers appended to the enriched prompt, in their fixed order."""
    WEB = "Web search results:"
    YOUTUBE = "YouTube search results:"
    IMAGES = "Image search results:"
    FILES = "Archivos adjuntos:"


class AttachmentTemplates:
    """Textual descriptions of an attachment keyed by analysis status."""
    COMPLETED = "- {name} ({mime_type}):\n{analysis}"
    PENDING = "- {name} ({mime_type}): [Analizando...] El análisis de este archivo todavía está en curso."
    ERROR = "- {name} ({mime_type}): Error al analizar el archivo. Solo se conoce su nombre y tipo."
    UNKNOWN = "- {name} ({mime_type}): archivo adjunto sin análisis disponible."
    NOT_FOUND = "- Archivo {attachment_id}: no encontrado o sin permisos de acceso."


IMAGE_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"

DEFAULT_IMAGE_ANALYSIS_PROMPT = "Describe detalladamente el contenido de esta imagen."


# Regular expression patterns
class Patterns:
    """Regular expression patterns used by the prompt sanitizer."""
    HTML_BRACKETS = r'[<>]'
    JAVASCRIPT_URI = r'javascript:'
    EVENT_HANDLER = r'on\w+\s*='
    SYSTEM_ROLE = r'\bsystem\s*:\s*'
    ASSISTANT_ROLE = r'\bassistant\s*:\s*'
