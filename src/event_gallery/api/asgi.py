"""ASGI entrypoint: ``uvicorn event_gallery.api.asgi:app``."""

from event_gallery.api.app import create_app
from event_gallery.containers import build_container

# Built at import so the camera and Supabase client exist once per worker.
app = create_app(build_container())
