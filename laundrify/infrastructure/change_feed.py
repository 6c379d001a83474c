import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Optional

from aiokafka import AIOKafkaConsumer
from pydantic import ValidationError

from laundrify.application.interfaces import ChangeFeed, Subscription
from laundrify.domain.models import RealtimeEvent

logger = logging.getLogger(__name__)


def parse_event(raw: bytes) -> Optional[RealtimeEvent]:
    try:
        return RealtimeEvent.model_validate(json.loads(raw.decode()))
    except (ValueError, ValidationError) as e:
        logger.warning(f"Malformed change event skipped: {e}")
        return None


def matches(event: RealtimeEvent, table: str, event_type: str, filters: dict[str, Any]) -> bool:
    """Equality filter on the new row, e.g. ``{"laundry_id": "..."}``."""
    if event.table != table or event.event_type.upper() != event_type.upper():
        return False
    row = event.new or event.old
    return all(str(row.get(column)) == str(value) for column, value in filters.items())


class KafkaSubscription(Subscription):
    def __init__(self, consumer, task: asyncio.Task):
        self._consumer = consumer
        self._task = task
        self._closed = False

    @property
    def active(self) -> bool:
        """False once the consume loop has ended, e.g. after the broker connection dropped."""
        return not self._closed and not self._task.done()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error(f"Change feed consumer failed: {e}")
        finally:
            await self._consumer.stop()
            logger.info("Change feed consumer stopped")


class KafkaChangeFeed(ChangeFeed):
    """Row changes of the store, published to a topic by the database's CDC connector.

    Every subscription gets its own consumer without a group, starting at the
    latest offset: missed events are never replayed.
    """

    def __init__(self, bootstrap_servers: str, topic: str, consumer_factory=AIOKafkaConsumer):
        self._bootstrap_servers = bootstrap_servers
        self._topic = topic
        self._consumer_factory = consumer_factory

    async def subscribe(
        self,
        table: str,
        event_type: str,
        filters: dict[str, Any],
        callback: Callable[[RealtimeEvent], Awaitable[None]],
    ) -> Subscription:
        consumer = self._consumer_factory(
            self._topic,
            bootstrap_servers=self._bootstrap_servers,
            group_id=None,
            auto_offset_reset="latest",
        )
        await consumer.start()
        logger.info(f"Change feed consumer started on {self._topic} ({table}, {event_type}, {filters})")

        task = asyncio.create_task(self._consume(consumer, table, event_type, filters, callback))
        return KafkaSubscription(consumer, task)

    async def _consume(self, consumer, table, event_type, filters, callback) -> None:
        try:
            async for msg in consumer:
                event = parse_event(msg.value)
                if event is None or not matches(event, table, event_type, filters):
                    continue
                try:
                    await callback(event)
                except Exception as e:
                    logger.error(f"Error processing change event: {e}")

        except Exception as e:
            logger.error(f"Change feed consumer error: {e}")
