import logging

from .settings import settings

ISO_FMT = "%Y-%m-%dT%H:%M:%S%z"

def configure_logging(level: int | str | None = None) -> None:
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
        datefmt=ISO_FMT,
    )


def redact_token(token: str | None) -> str:
    """Los preview tokens son credenciales: en logs solo va un prefijo corto."""
    if not token:
        return "<none>"
    keep = max(0, int(settings.PREVIEW_TOKEN_LOG_PREFIX))
    if len(token) <= keep:
        return "***"
    return f"{token[:keep]}***"
