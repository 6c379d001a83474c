import asyncio
import logging

from laundrify.config import settings
from laundrify.database import AsyncSessionLocal
from laundrify.application.advance_order import AdvanceOrderUseCase
from laundrify.application.context import AppContext, Session
from laundrify.application.get_orders import GetOrderUseCase, ListOrdersUseCase
from laundrify.application.orders_board import OrdersBoard
from laundrify.infrastructure.alerts import LoggingAlertSink
from laundrify.infrastructure.change_feed import KafkaChangeFeed
from laundrify.infrastructure.http_clients import HTTPNotificationsClient
from laundrify.infrastructure.unit_of_work import UnitOfWork

logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

CHECK_INTERVAL = 15


def build_board(laundry_id: str) -> OrdersBoard:
    uow = UnitOfWork(AsyncSessionLocal)
    notifications = HTTPNotificationsClient(settings.FUNCTIONS_BASE_URL, settings.FUNCTIONS_API_KEY)
    return OrdersBoard(
        context=AppContext(session=Session(user_id="board-worker", laundry_id=laundry_id)),
        list_orders=ListOrdersUseCase(uow),
        get_order=GetOrderUseCase(uow),
        advance_order=AdvanceOrderUseCase(uow, notifications),
        feed=KafkaChangeFeed(settings.KAFKA_BOOTSTRAP_SERVERS, settings.ORDERS_CHANGES_TOPIC),
        alerts=LoggingAlertSink(),
    )


async def board_worker(laundry_id: str):
    """Headless live board: alerts on every newly paid order of one laundry"""
    logger.info(f"Board worker started for laundry {laundry_id}")
    board = build_board(laundry_id)

    while True:
        try:
            await board.focus()
            logger.info(f"{len(board.state.orders)} ongoing orders")
            await asyncio.sleep(CHECK_INTERVAL)

        except asyncio.CancelledError:
            await board.blur()
            raise
        except Exception as e:
            logger.error(f"Error in board worker: {e}", exc_info=True)
            # Reconnect from scratch: fresh fetch, new subscription
            await board.blur()
            await asyncio.sleep(10)


async def main():
    if not settings.BOARD_LAUNDRY_ID:
        raise SystemExit("BOARD_LAUNDRY_ID is not set")
    await board_worker(settings.BOARD_LAUNDRY_ID)


if __name__ == "__main__":
    asyncio.run(main())
