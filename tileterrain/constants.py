"""Configuration constants and environment overrides."""

import os
import logging

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_int(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Ignoring {name}={raw!r}: not an integer")
        return None


# ── Randomness ───────────────────────────────────────────────────────────
# Set TILETERRAIN_SEED to make every compilation reproducible.
SEED = _env_int("TILETERRAIN_SEED")

# Set TILETERRAIN_NO_COSMETICS=1 to disable rotation, jitter and water nudge
NO_COSMETICS = os.environ.get("TILETERRAIN_NO_COSMETICS", "").strip().lower() in ("1", "true", "yes")

# ── Cosmetic magnitudes (grid units) ─────────────────────────────────────
# Jitter is the product of two centred uniforms times the factor, so the
# largest displacement is factor / 4.
JITTER_HORIZONTAL = 0.75
JITTER_VERTICAL = 0.5
WATER_NUDGE = 1 / 8

# ── Water ────────────────────────────────────────────────────────────────
# Water surfaces sit this far above the requested water height mask value.
WATER_SURFACE_LIFT = 3 / 8
WATER_COLOR = "#182190"

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)
