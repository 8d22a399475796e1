# sio_capture.config
from dataclasses import dataclass
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration centrale du service.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Sélectionne l'environnement PayPal (sandbox | live) une seule fois par process
- Expose un objet Settings immuable, construit au démarrage et injecté dans les composants
"""

PAYPAL_SANDBOX_BASE = "https://api.sandbox.paypal.com"
PAYPAL_LIVE_BASE = "https://api.paypal.com"
SIO_DEFAULT_BASE = "https://api.systeme.io/api"


def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")


def _env(name: str, default: str = "") -> str:
    return _clean_env(os.getenv(name) or default)


def _csv(name: str, default: str) -> tuple:
    return tuple(v.strip() for v in os.getenv(name, default).split(",") if v.strip())


@dataclass(frozen=True)
class Settings:
    """
    Configuration du process (lecture seule).
    - paypal_env: "sandbox" ou "live" (exclusifs)
    - paypal_client_id / paypal_client_secret: paire de l'environnement actif
    - sio_api_key, sio_course_id_starter, sio_course_id_mini: systeme.io
    """
    paypal_env: str = "live"
    paypal_client_id: str = ""
    paypal_client_secret: str = ""
    sio_api_key: str = ""
    sio_course_id_starter: str = ""
    sio_course_id_mini: str = ""
    sio_base_url: str = SIO_DEFAULT_BASE
    http_timeout_seconds: float = 20.0
    cors_origins: tuple = ("*",)
    capture_rate_limit: int = 10

    @property
    def is_sandbox(self) -> bool:
        return self.paypal_env == "sandbox"

    @property
    def paypal_base_url(self) -> str:
        return PAYPAL_SANDBOX_BASE if self.is_sandbox else PAYPAL_LIVE_BASE

    @property
    def paypal_mode_label(self) -> str:
        return "SANDBOX" if self.is_sandbox else "LIVE"


def load_settings() -> Settings:
    """
    Construit Settings depuis l'environnement.
    - PAYPAL_ENV inconnu => "live" (comportement par défaut de production)
    - Les identifiants PayPal sont choisis selon l'environnement actif
    """
    paypal_env = _env("PAYPAL_ENV", "live").lower()
    if paypal_env not in ("sandbox", "live"):
        paypal_env = "live"
    suffix = "SANDBOX" if paypal_env == "sandbox" else "LIVE"

    try:
        timeout = float(_env("HTTP_TIMEOUT_SECONDS", "20"))
    except ValueError:
        timeout = 20.0
    try:
        rate_limit = int(_env("CAPTURE_RATE_LIMIT", "10"))
    except ValueError:
        rate_limit = 10

    return Settings(
        paypal_env=paypal_env,
        paypal_client_id=_env(f"PAYPAL_CLIENT_ID_{suffix}"),
        paypal_client_secret=_env(f"PAYPAL_CLIENT_SECRET_{suffix}"),
        sio_api_key=_env("SIO_API_KEY"),
        sio_course_id_starter=_env("SIO_COURSE_ID_STARTER"),
        sio_course_id_mini=_env("SIO_COURSE_ID_MINI"),
        sio_base_url=(_env("SIO_BASE_URL") or SIO_DEFAULT_BASE).rstrip("/"),
        http_timeout_seconds=timeout,
        cors_origins=_csv("CORS_ORIGINS", "*"),
        capture_rate_limit=rate_limit,
    )
