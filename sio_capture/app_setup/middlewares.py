"""
Middlewares transverses de l’application.
- register_basic_middlewares: CORS et confiance en X-Forwarded-*.
- register_security_middleware: en-têtes de sécurité sur toutes les réponses (API JSON uniquement).
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

def register_basic_middlewares(app: FastAPI) -> None:
    """
    Ajoute les middlewares « de base »:
    - CORSMiddleware: autorise les origines définies (CORS_ORIGINS, "*" pendant la mise au point).
    - ProxyHeadersMiddleware: IP client réelle derrière le proxy (clé de rate limiting).
    """
    origins = list(app.state.settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Pas de cookies côté API: credentials uniquement avec une liste d'origines explicite
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

def register_security_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def security_headers(request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        # Cache interdit: réponses liées à un paiement
        if request.url.path != "/health":
            response.headers.setdefault("Cache-Control", "no-store")
        return response
