"""All magic values live here — no inline literals anywhere else."""

# Fixed relative paths
EXCLUDE_FILE = "exclude.txt"
MESSAGES_DIR = "messages"

# Backend selection
BACKEND_GROQ = "groq"
BACKEND_CLOUDFLARE = "cloudflare"
DEFAULT_BACKEND = BACKEND_GROQ
DEFAULT_LANGUAGE = "pt"

# Cloudflare Workers AI (inline base64 payload)
CF_DEFAULT_MODEL = "@cf/openai/whisper-large-v3-turbo"
CF_ENDPOINT = "https://api.cloudflare.com/client/v4/accounts/{account_id}/ai/run/{model}"
CF_DEFAULT_LANGUAGE = "en"
CF_VAD_FILTER = "false"
CF_TIMEOUT: float = 30.0

# Groq (OpenAI-compatible multipart upload)
GROQ_DEFAULT_MODEL = "whisper-large-v3"
GROQ_BASE_URL = "https://api.groq.com/openai/v1"
GROQ_RESPONSE_FORMAT = "json"
GROQ_TEMPERATURE: float = 0.0
GROQ_TIMEOUT: float = 60.0

# Audio retrieval
DOWNLOAD_TIMEOUT: float = 30.0
VOICE_FILENAME = "voice.ogg"
AUDIO_TEMP_PREFIX = "audio-%d-"

# Style guidance sent with every request that accepts a prompt.
WHISPER_PROMPT = (
    "Transcreva com precisão, preservando enunciados conforme falados. "
    "Corrija erros ortográficos comuns sem alterar a intenção original. "
    "Use pontuação e capitalização de forma natural para facilitar a leitura."
)

# Reply template: bold label, italic body
REPLY_TEMPLATE = "*Transcrição automática:*\n\n_{text}_"

# Diagnostics: response bodies are truncated before they reach the logs
LOG_BODY_LIMIT = 200

# Log messages
MSG_BOT_STARTING = "Starting transcription bot (backend: %s, language: %s)…"
MSG_EXCLUDE_MISSING = "Exclusion list %s not found — no senders excluded"
MSG_EXCLUDE_UNREADABLE = "Exclusion list %s unreadable (%s) — no senders excluded"
MSG_EXCLUDE_LOADED = "Loaded %d excluded sender(s) from %s"
MSG_IGNORED_GROUP = "Message from group %s, ignoring"
MSG_IGNORED_EXCLUDED = "Sender %s is excluded, skipping transcription"
MSG_IGNORED_NON_AUDIO = "Non-audio message from %s, ignoring"
MSG_AUDIO_DETECTED = "Audio message from %s, transcribing…"
MSG_AUDIO_SAVED = "Audio saved to %s (%d bytes)"
MSG_AUDIO_REMOVED = "Temporary audio file removed: %s"
MSG_RETRIEVAL_FAILED = "Audio retrieval failed for %s: %s"
MSG_TRANSCRIPTION_FAILED = "Transcription failed for %s: %s"
MSG_TRANSCRIPTION_OK = "Transcription completed for %s (%.1fs)"
MSG_DELIVERY_FAILED = "Reply delivery failed for %s (%d chars): %s"
MSG_SEND_OK = "✓ Reply sent to %s"
MSG_SEND_ERROR = "Telegram send_message failed: %s"
MSG_REPLY_TOO_LONG = "Reply to %s is %d chars, over the %d-char Telegram limit"
