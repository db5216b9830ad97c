from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI, HTTPException, Request
from pydantic import ValidationError
from starlette.requests import ClientDisconnect
from owncast_ntfy.config import Settings
from owncast_ntfy.errors import IncompleteEvent, NotificationError, UnrecognizedEventType
from owncast_ntfy.models import OwncastEvent
from owncast_ntfy.services.ntfy import NtfyClient
from owncast_ntfy.translator import build_notification

log = logging.getLogger(__name__)


def create_app(settings: Settings, notifier: NtfyClient | None = None) -> FastAPI:
    notifier = notifier or NtfyClient.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await notifier.close()

    app = FastAPI(title="owncast-ntfy", lifespan=lifespan)
    app.state.settings = settings
    app.state.notifier = notifier

    @app.get("/healthz")
    async def healthz():
        return {"ok": True}

    @app.post("/")
    async def receive_webhook(req: Request):
        try:
            raw = await req.body()
        except ClientDisconnect:
            log.warning("Client disconnected before sending the full body")
            raise HTTPException(status_code=400, detail="Error reading request body")

        try:
            event = OwncastEvent.model_validate_json(raw)
        except ValidationError as e:
            log.warning("Rejected webhook payload: %s", e)
            raise HTTPException(status_code=400, detail="Error parsing JSON payload")

        log.info("Received webhook event: %s", event.type)
        try:
            notification = build_notification(event, settings)
        except UnrecognizedEventType as e:
            log.warning("Ignoring %s", e)
            raise HTTPException(status_code=501, detail="Unknown Owncast Message")
        except IncompleteEvent as e:
            log.warning("Cannot render %s event: %s", event.type, e)
            raise HTTPException(status_code=501, detail="Incomplete Owncast Message")

        try:
            await notifier.send(notification)
        except NotificationError as e:
            log.error("Error sending notification: %s", e)
            raise HTTPException(status_code=500, detail="Error sending notification")

        return {"received": True, "event": event.type}

    return app
