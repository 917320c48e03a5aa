"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """yak application settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        transcription_provider: STT backend ("openai" for the hosted Whisper API).
        openai_api_key: Bearer token sent to the transcription service.
        accepted_extensions: Upload file extensions the API will forward.
        recorder_chunk_seconds: Interval at which the recorder emits audio chunks.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Transcription ---
    # Hosted speech-to-text service (OpenAI-compatible /audio/transcriptions)
    transcription_provider: str = "openai"
    openai_api_key: str = ""
    transcription_base_url: str = "https://api.openai.com/v1"
    transcription_model: str = "whisper-1"
    transcription_language: str = ""  # Empty = auto-detect; ISO 639-1 code e.g. "en"
    transcription_timeout: float = 300.0  # Seconds; long clips take a while

    # --- Uploads ---
    accepted_extensions: list[str] = [
        ".mp3",
        ".mp4",
        ".mpeg",
        ".mpga",
        ".m4a",
        ".wav",
        ".webm",
    ]
    max_upload_mb: int = 25  # Hosted Whisper rejects files above 25 MB

    # --- Recorder ---
    recorder_chunk_seconds: float = 5.0
    recorder_mime_type: str = "audio/webm"
    recorder_filename: str = "recording.webm"

    # --- Application ---
    app_host: str = "0.0.0.0"  # Bind address for the FastAPI server
    app_port: int = 8000
    log_level: str = "INFO"  # Python logging level
    api_base_url: str = "http://localhost:8000"  # Used by the Streamlit UI
    cors_origins: list[str] = [
        "http://localhost:8501",  # Streamlit
        "http://localhost:3000",  # Dev frontend
    ]


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
