"""
ASGI entrypoint: expose `app` pour les process managers / déploiements.
- En production: uvicorn sio_capture.asgi:app (ou gunicorn + uvicorn workers).
- En local: python -m sio_capture (voir sio_capture.__main__: PORT, UVICORN_RELOAD, LOG_LEVEL).
"""
from sio_capture.app_setup.factory import create_app

app = create_app()
