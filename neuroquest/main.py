"""Main entry point: runs the passive drift loop over an in-memory store"""
import logging
import asyncio
from neuroquest.config import validate_config, LOG_LEVEL, DRIFT_INTERVAL_SECONDS
from neuroquest.exceptions import ConfigurationError
from neuroquest.models.quest import Quest
from neuroquest.services.container import create_container

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
)

logger = logging.getLogger(__name__)

DEMO_USER_ID = "demo-user"

DEMO_QUESTS = [
    {
        "id": "demo-walk",
        "user_id": DEMO_USER_ID,
        "title": "Take a 20 minute walk",
        "xp_reward": 20,
        "currency_reward": 15,
        "attribute_rewards": {"vitality": 5, "energy": 3},
        "recurring": True,
        "recurring_type": "daily",
    },
    {
        "id": "demo-deep-work",
        "user_id": DEMO_USER_ID,
        "title": "One hour of deep work",
        "xp_reward": 40,
        "currency_reward": 10,
        "attribute_rewards": {"focus": 6},
    },
]


async def main() -> None:
    """Main application entry point"""
    stop_event = asyncio.Event()
    try:
        # Validate configuration
        logger.info("Validating configuration...")
        try:
            validate_config()
        except ValueError as e:
            raise ConfigurationError(str(e), cause=e) from e

        container = create_container()
        await container.user_service.create_profile(DEMO_USER_ID)
        for definition in DEMO_QUESTS:
            await container.store.add_quest(Quest.from_dict(definition))
        logger.info(f"Loaded {len(DEMO_QUESTS)} demo quests for {DEMO_USER_ID}")

        logger.info("Drift loop is running. Press Ctrl+C to stop.")
        await container.drift_service.run(
            lambda: [DEMO_USER_ID],
            interval=DRIFT_INTERVAL_SECONDS,
            stop_event=stop_event,
        )

    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("Shutting down...")
        stop_event.set()
    finally:
        logger.info("Shutdown complete")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
