"""Fixed user-facing strings.

The webhook speaks Spanish to a Chilean sales team, so every message the
assistant produces on its own is Spanish too.
"""

WELCOME_MESSAGE = "👋 ¡Hola! Soy tu Asistente de Ventas. ¿En qué puedo ayudarte hoy?"
FALLBACK_MESSAGE = "Sin respuesta del asistente"
REPORT_READY_MESSAGE = "📊 Informe recibido. Puedes exportarlo a Excel o PDF."
NO_DATA_MESSAGE = "⚠️ No se encontró información para esa factura."
CONNECTION_ERROR_MESSAGE = "⚠️ Error al conectar con el asistente"

NO_DATA_PHRASE = "no hay datos disponibles"

UPLOAD_SELECT_FILE_MESSAGE = "Por favor selecciona un archivo Excel."
UPLOAD_SUCCESS_MESSAGE = "Archivo procesado correctamente."
UPLOAD_ERROR_MESSAGE = "⚠️ Error al subir el archivo."
