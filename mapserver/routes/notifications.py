import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from mapserver.dependencies import get_dispatcher, get_token_store
from mapserver.services.notifications import NotificationDispatcher, TokenStore

logger = logging.getLogger(__name__)

router = APIRouter()


class TokenRegistration(BaseModel):
    token: str = Field(min_length=1, max_length=512)


class TokenRegistrationResponse(BaseModel):
    registered: bool
    count: int


class TokenListResponse(BaseModel):
    tokens: list[str]


class NotificationRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1, max_length=4096)


class DeliveryResult(BaseModel):
    token: str
    status: str
    message: str | None = None


class NotificationResponse(BaseModel):
    sent: int
    failed: int
    results: list[DeliveryResult]


@router.post("/tokens", response_model=TokenRegistrationResponse)
async def register_token(
    registration: TokenRegistration,
    store: TokenStore = Depends(get_token_store),
):
    """Register a device push token (no-op if already registered)."""
    token = registration.token.strip()
    if not token:
        raise HTTPException(status_code=400, detail="Token must not be blank")

    registered = store.append(token)
    if registered:
        await run_in_threadpool(store.flush)
        logger.info("Registered new push token")

    return TokenRegistrationResponse(registered=registered, count=len(store.read()))


@router.get("/tokens", response_model=TokenListResponse)
async def list_tokens(store: TokenStore = Depends(get_token_store)):
    """List registered push tokens in registration order."""
    return TokenListResponse(tokens=store.read())


@router.post("/send", response_model=NotificationResponse)
async def send_notification(
    notification: NotificationRequest,
    store: TokenStore = Depends(get_token_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """Send a notification to every registered token."""
    statuses = await dispatcher.send(store.read(), notification.title, notification.body)
    failed = sum(1 for s in statuses if s.status != "ok")

    return NotificationResponse(
        sent=len(statuses) - failed,
        failed=failed,
        results=[
            DeliveryResult(token=s.token, status=s.status, message=s.message) for s in statuses
        ],
    )
