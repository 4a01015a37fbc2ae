# portfolio_api/utils/contact_service.py

import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Optional, TypeVar

from portfolio_api.database.contact_store import ContactStore, PersistenceError
from portfolio_api.schemas.contacts import ContactCreate, ContactSubmission
from portfolio_api.utils.email_service import ContactEmailNotifier, DeliveryError

logger = logging.getLogger(__name__)

T = TypeVar("T")

NOTIFY_FIRST = "notify_first"
STORE_FIRST = "store_first"

DELIVERY_WARNING = "Your message was saved, but the email notification could not be delivered."


@dataclass
class SubmissionResult:
    record: ContactSubmission
    delivered: bool
    warning: Optional[str] = None


class ContactSubmissionService:
    """
    Runs one accepted contact submission through the notifier and the store.

    With ``notify_first`` a DeliveryError stops the submission before anything
    is stored. With ``store_first`` the record is kept and a failed delivery is
    reported as a warning on the result. Store errors always propagate as
    PersistenceError. Nothing is retried.
    """

    def __init__(self, notifier: ContactEmailNotifier, store: ContactStore,
                 delivery_order: str = NOTIFY_FIRST, store_timeout: float = 10.0):
        if delivery_order not in (NOTIFY_FIRST, STORE_FIRST):
            raise ValueError(f"Unknown delivery order: {delivery_order}")
        self.notifier = notifier
        self.store = store
        self.delivery_order = delivery_order
        self.store_timeout = store_timeout

    async def submit(self, data: ContactCreate) -> SubmissionResult:
        if self.delivery_order == STORE_FIRST:
            record = await self._call_store(self.store.create, data)
            try:
                await self.notifier.send(data)
            except DeliveryError as e:
                logger.warning(f"Contact {record.id} stored but not delivered: {e}")
                return SubmissionResult(record=record, delivered=False, warning=DELIVERY_WARNING)
            return SubmissionResult(record=record, delivered=True)

        await self.notifier.send(data)
        record = await self._call_store(self.store.create, data)
        return SubmissionResult(record=record, delivered=True)

    async def list_all(self) -> List[ContactSubmission]:
        return await self._call_store(self.store.list_all)

    async def _call_store(self, func: Callable[..., T], *args) -> T:
        try:
            # on timeout the worker thread is left to finish on its own
            loop = asyncio.get_running_loop()
            return await asyncio.wait_for(loop.run_in_executor(None, partial(func, *args)), timeout=self.store_timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Contact store call {func.__name__} timed out after {self.store_timeout}s")
            raise PersistenceError("The message store did not respond. Please try again later.") from e
        except PersistenceError:
            raise
        except Exception as e:
            logger.exception(f"Contact store call {func.__name__} failed")
            raise PersistenceError("Failed to save your message. Please try again later.") from e
