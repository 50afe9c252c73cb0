import logging
import os

logger = logging.getLogger(__name__)


def _canon_prefix(val):
    """
    Normalize API prefix to always be exactly like '/api':
      - defaults to '/api' when unset/empty
      - ensures a single leading slash
      - removes any trailing slash (except for root)
    """
    val = (val or "/api").strip()
    if not val.startswith("/"):
        val = "/" + val
    if len(val) > 1 and val.endswith("/"):
        val = val[:-1]
    return val


def _env_int(env_var: str, default: int, *, minimum: int = 1) -> int:
    raw_value = os.getenv(env_var)
    if raw_value is None or not raw_value.strip():
        return default

    try:
        value = int(raw_value)
    except ValueError:
        logger.warning(
            "%s is not a valid integer (got %r); defaulting to %d",
            env_var,
            raw_value,
            default,
        )
        return default

    if value < minimum:
        logger.warning(
            "%s must be at least %d; defaulting to %d", env_var, minimum, default
        )
        return default

    return value


def _env_float(
    env_var: str, default: float, *, minimum: float = 0.0, maximum: float = 1.0
) -> float:
    raw_value = os.getenv(env_var)
    if raw_value is None or not raw_value.strip():
        return default

    try:
        value = float(raw_value)
    except ValueError:
        logger.warning(
            "%s is not a valid float (got %r); defaulting to %.2f",
            env_var,
            raw_value,
            default,
        )
        return default

    if not minimum <= value <= maximum:
        logger.warning(
            "%s must be between %.2f and %.2f; defaulting to %.2f",
            env_var,
            minimum,
            maximum,
            default,
        )
        return default

    return value


API_PREFIX = _canon_prefix(os.getenv("API_PREFIX"))
API_VERSION = "0.1.0"

# Elo parameters. Changing either one changes every future rating delta, so
# both are read once at import.
RATING_K_FACTOR = _env_int("RATING_K_FACTOR", 32)
DEFAULT_RATING = _env_int("DEFAULT_RATING", 1200, minimum=0)

MAX_SETS_PER_MATCH = _env_int("MAX_SETS_PER_MATCH", 5)

# Upper bound accepted by the rating preview endpoint.
MAX_PREVIEW_RATING = 100_000


def rate_limits_disabled() -> bool:
    return (os.getenv("DISABLE_RATE_LIMITS") or "").lower() == "true"
