"""
Client side of order notifications, for dashboards and kiosks.

Nothing here touches Django: a client embeds it, feeds it the payloads read
from `GET /api/notifications/stream` (see `iter_notifications`) and drives one
`OrderNotification` per payload.

Each `OrderNotification` owns one cancellable countdown task. The countdown
auto-dismisses the notification when it reaches zero, unless it is pinned or an
accept/reject request is in flight. A failed request clears the in-flight flag,
resets the countdown to the full window and reports the error; the
notification stays open so the user can retry.
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

import httpx

logger = logging.getLogger(__name__)

DEFAULT_COUNTDOWN_SECONDS = 30
UNNAMED_ITEM = "Unnamed Item"
MISSING_ORDER_ID = "Cannot update order: missing order ID"

ACTIONS = {
    "accept": "accepted",
    "reject": "rejected",
}


def _decimal(value) -> Decimal:
    try:
        return Decimal(str(value)) if value is not None else Decimal("0")
    except InvalidOperation:
        return Decimal("0")


def _int_or_none(value) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class OrderItemSnapshot:
    name: str = UNNAMED_ITEM
    quantity: int = 1
    price: Decimal = Decimal("0")

    @classmethod
    def from_dict(cls, raw: dict) -> "OrderItemSnapshot":
        return cls(
            name=raw.get("name") or UNNAMED_ITEM,
            quantity=_int_or_none(raw.get("quantity")) or 1,
            price=_decimal(raw.get("price")),
        )

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class NotificationData:
    order_id: int | None = None
    table_name: str | None = None
    total_amount: Decimal = Decimal("0")
    status: str | None = None
    items: tuple[OrderItemSnapshot, ...] = ()

    @classmethod
    def from_dict(cls, raw: dict | None) -> "NotificationData":
        raw = raw or {}
        return cls(
            order_id=_int_or_none(raw.get("order_id")),
            table_name=raw.get("table_name"),
            total_amount=_decimal(raw.get("total_amount")),
            status=raw.get("status"),
            items=tuple(OrderItemSnapshot.from_dict(item) for item in raw.get("items") or ()),
        )


@dataclass(frozen=True)
class NotificationPayload:
    id: str
    type: str
    title: str = ""
    message: str = ""
    created_at: str | None = None
    read: bool = False
    data: NotificationData = field(default_factory=NotificationData)

    @classmethod
    def from_dict(cls, raw: dict) -> "NotificationPayload":
        return cls(
            id=str(raw.get("id", "")),
            type=raw.get("type", ""),
            title=raw.get("title", ""),
            message=raw.get("message", ""),
            created_at=raw.get("created_at") or raw.get("timestamp"),
            read=bool(raw.get("read", False)),
            data=NotificationData.from_dict(raw.get("data")),
        )


@dataclass
class CountdownState:
    """Per-notification countdown, changed only through its transition methods."""

    window: int = DEFAULT_COUNTDOWN_SECONDS
    countdown_remaining: int | None = None
    pinned: bool = False
    processing: bool = False
    dismissed: bool = False

    def __post_init__(self):
        if self.countdown_remaining is None:
            self.countdown_remaining = self.window

    @property
    def running(self) -> bool:
        return not (self.pinned or self.processing or self.dismissed)

    def tick(self) -> bool:
        """Count one second down; returns False when frozen. Reaching zero dismisses."""
        if not self.running:
            return False
        self.countdown_remaining = max(0, self.countdown_remaining - 1)
        if self.countdown_remaining == 0:
            self.dismissed = True
        return True

    def toggle_pin(self) -> bool:
        if not self.dismissed:
            self.pinned = not self.pinned
        return self.pinned

    def start_processing(self) -> bool:
        if self.processing or self.dismissed:
            return False
        self.processing = True
        return True

    def finish_processing(self, success: bool) -> None:
        self.processing = False
        if success:
            self.dismissed = True
        else:
            self.countdown_remaining = self.window

    def dismiss(self) -> bool:
        if self.processing:
            return False
        self.dismissed = True
        return True


class OrderNotification:
    def __init__(
        self,
        payload: NotificationPayload | dict,
        *,
        base_url: str,
        token: str,
        http_client: httpx.AsyncClient | None = None,
        countdown_seconds: int = DEFAULT_COUNTDOWN_SECONDS,
        tick_interval: float = 1.0,
        on_action: Callable[[int, str], None] | None = None,  # (order_id, new status)
        on_close: Callable[[NotificationPayload], None] | None = None,
        on_error: Callable[[str], None] | None = None,
    ):
        self.payload = payload if isinstance(payload, NotificationPayload) else NotificationPayload.from_dict(payload)
        self.state = CountdownState(window=countdown_seconds)
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.tick_interval = tick_interval
        self.on_action = on_action
        self.on_close = on_close
        self.on_error = on_error

        self._client = http_client
        self._owns_client = http_client is None
        self._task: asyncio.Task | None = None
        self._torn_down = False

    # --- countdown ---
    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._run_countdown())
        return self._task

    async def _run_countdown(self) -> None:
        while not self.state.dismissed:
            await asyncio.sleep(self.tick_interval)
            if self.state.tick() and self.state.dismissed:
                logger.debug("Notification %s expired", self.payload.id)
                self._closed()

    def toggle_pin(self) -> bool:
        return self.state.toggle_pin()

    def dismiss(self) -> bool:
        if self._torn_down or not self.state.dismiss():
            return False
        self._closed()
        return True

    def _closed(self) -> None:
        self._cancel_countdown()
        if self.on_close is not None:
            self.on_close(self.payload)

    def _cancel_countdown(self) -> None:
        if self._task is not None and self._task is not asyncio.current_task() and not self._task.done():
            self._task.cancel()

    # --- actions ---
    async def accept(self) -> bool:
        return await self._act("accept")

    async def reject(self) -> bool:
        return await self._act("reject")

    async def _act(self, action: str) -> bool:
        order_id = self.payload.data.order_id
        if order_id is None:
            self._error(MISSING_ORDER_ID)
            return False
        if not self.state.start_processing():
            return False

        try:
            response = await self._http().patch(
                f"{self.base_url}/api/orders/{order_id}/status",
                json={"status": ACTIONS[action]},
                headers={"Authorization": f"Bearer {self.token}"},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return self._failed(f"Failed to update order status: {e}")
        except BaseException:
            self.state.finish_processing(success=False)
            raise
        finally:
            if self._torn_down:
                await self._close_client()

        if self._torn_down:
            self.state.processing = False
            logger.debug("Ignoring %s result for torn-down notification %s", action, self.payload.id)
            return False

        if response.is_error:
            return self._failed(_error_message(response))

        self.state.finish_processing(success=True)
        if self.on_action is not None:
            self.on_action(order_id, ACTIONS[action])
        self._closed()
        return True

    def _failed(self, message: str) -> bool:
        self.state.finish_processing(success=False)
        if self._torn_down:
            return False
        self._error(message)
        return False

    def _error(self, message: str) -> None:
        logger.warning("Notification %s: %s", self.payload.id, message)
        if self.on_error is not None:
            self.on_error(message)

    # --- resources ---
    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=10.0)
        return self._client

    async def _close_client(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def aclose(self) -> None:
        """Tear down: stop the countdown; a request still in flight completes but its result is ignored."""
        self._torn_down = True
        self.state.dismissed = True
        self._cancel_countdown()
        if self._task is not None:
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        if not self.state.processing:
            await self._close_client()

    async def __aenter__(self):
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"Failed to update order status: {response.status_code}"


async def iter_notifications(http_client: httpx.AsyncClient, base_url: str, token: str) -> AsyncIterator[dict]:
    """
    Read the server-sent-events stream and yield each event as
    `{"event": name, "data": parsed_json}`; comments and keepalives are skipped.
    """
    url = f"{base_url.rstrip('/')}/api/notifications/stream"
    headers = {"Authorization": f"Bearer {token}", "Accept": "text/event-stream"}

    async with http_client.stream("GET", url, headers=headers, timeout=None) as response:
        response.raise_for_status()
        event, data_lines = "message", []
        async for line in response.aiter_lines():
            if not line:
                if data_lines:
                    yield {"event": event, "data": json.loads("\n".join(data_lines))}
                event, data_lines = "message", []
            elif line.startswith(":"):
                continue
            elif line.startswith("event:"):
                event = line[len("event:") :].strip()
            elif line.startswith("data:"):
                data_lines.append(line[len("data:") :].strip())
