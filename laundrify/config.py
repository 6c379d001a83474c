import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Database
    POSTGRES_CONNECTION_STRING: str = os.getenv("POSTGRES_CONNECTION_STRING", "")

    # Payment gateway
    FLW_SECRET_HASH: str = os.getenv("FLW_SECRET_HASH", "")
    FLW_SECRET_KEY: str = os.getenv("FLW_SECRET_KEY", "")
    FLW_BASE_URL: str = os.getenv("FLW_BASE_URL", "https://api.flutterwave.com")
    PLATFORM_SPLIT_VALUE: float = float(os.getenv("PLATFORM_SPLIT_VALUE", "0.15"))

    # Serverless functions (customer notifications)
    FUNCTIONS_BASE_URL: str = os.getenv("FUNCTIONS_BASE_URL", "")
    FUNCTIONS_API_KEY: str = os.getenv("FUNCTIONS_API_KEY", "")

    # Change feed
    KAFKA_BOOTSTRAP_SERVERS: str = os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092")
    ORDERS_CHANGES_TOPIC: str = os.getenv("ORDERS_CHANGES_TOPIC", "laundrify.public.orders")

    # Live board worker
    BOARD_LAUNDRY_ID: str = os.getenv("BOARD_LAUNDRY_ID", "")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def DATABASE_URL(self) -> str:
        """Async URL for the application"""
        return self.POSTGRES_CONNECTION_STRING.replace("postgres://", "postgresql+asyncpg://")

    @property
    def SYNC_DATABASE_URL(self) -> str:
        """Sync URL for Alembic"""
        return self.POSTGRES_CONNECTION_STRING.replace("postgres://", "postgresql://")


settings = Settings()
