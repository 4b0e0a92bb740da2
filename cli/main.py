"""Console entry point."""

import sys
import os

from common.logging_config import setup_logging
from cli.repl import repl_loop


def main() -> None:
    """Entry point for the couchrep console."""
    log_level = 'DEBUG' if '--debug' in sys.argv else os.getenv('LOG_LEVEL', 'WARNING')
    
    logger = setup_logging('cli', log_level=log_level)
    setup_logging('replicator', log_level=log_level)
    
    if '--debug' in sys.argv:
        logger.info("Debug logging enabled")
        sys.argv.remove('--debug')
    
    logger.info("Console starting...")
    try:
        repl_loop()
    except Exception as e:
        logger.error(f"Console error: {e}", exc_info=True)
        raise
    finally:
        logger.info("Console exiting")


if __name__ == "__main__":
    main()
