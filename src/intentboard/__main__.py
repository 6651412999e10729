"""Entry point for the intent board.

Usage:
    python -m intentboard
"""

import logging

from textual.logging import TextualHandler

from intentboard.app import IntentBoardApp
from intentboard.config import Config


def main() -> None:
    """Start the intent board."""
    try:
        config = Config.from_env()

        # Route records to the Textual console; stderr belongs to the UI.
        logging.basicConfig(
            level=getattr(logging, config.log_level),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=[TextualHandler()],
        )

        app = IntentBoardApp(config)
        app.run()
    except ValueError as e:
        logging.error(f"Configuration error: {e}")
        raise
    except KeyboardInterrupt:
        logging.info("Intent board interrupted by user")
    except Exception as e:
        logging.error(f"Fatal error: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
