"""
Dramatiq broker configuration.

Redis-based message broker for the notification queue. Tests run against an
in-memory StubBroker.
"""

import dramatiq
from dramatiq.brokers.redis import RedisBroker
from dramatiq.brokers.stub import StubBroker
from dramatiq.middleware import CurrentMessage
from loguru import logger

from deeddraw.config.settings import settings

if settings.environment == "test":
    broker = StubBroker()
    broker.emit_after("process_boot")
    logger.info("Dramatiq stub broker initialized (test environment)")
else:
    broker = RedisBroker(
        host=settings.redis_host,
        port=settings.redis_port,
        password=settings.redis_password if settings.redis_password else None,
        db=settings.redis_db,
    )
    logger.info(
        f"Dramatiq broker initialized: "
        f"redis://{settings.redis_host}:{settings.redis_port}/{settings.redis_db}"
    )

# CurrentMessage: gives actors access to message id for log correlation
broker.add_middleware(CurrentMessage())

dramatiq.set_broker(broker)
