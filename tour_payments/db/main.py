from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from tour_payments.core.config import Config


async_engine = create_async_engine(
    Config.DATABASE_URL,
    echo=Config.DB_ECHO,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    async_engine, class_=AsyncSession, expire_on_commit=False
)


async def init_db() -> None:
    # models must be imported so their tables are registered on the metadata
    import tour_payments.api.bookings.models  # noqa: F401
    import tour_payments.api.checkout.models  # noqa: F401
    import tour_payments.api.payment_terms.models  # noqa: F401
    import tour_payments.api.payments.models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session_maker() as session:
        yield session
