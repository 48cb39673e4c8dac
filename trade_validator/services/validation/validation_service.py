#!/usr/bin/env python3
"""
Trade Validation Service Entry Point

Standalone process hosting the validation core. A transport layer
(HTTP, messaging) is attached by the deployment; this entry point owns
the lifecycle: configuration, logging, signals and health reporting.

Signals:
- SIGINT / SIGTERM: reject new work and stop
- SIGUSR1: request shutdown (reject new work, keep running)
- SIGUSR2: cancel a requested shutdown
"""

import asyncio
import logging
import signal
import sys
import os
from pathlib import Path
from typing import Dict, Any, Optional

from trade_validator.configs import load_validators_config
from trade_validator.services.validation.admin import ValidationAdmin
from trade_validator.services.validation.bootstrap import create_validation_service


class ValidationServiceRunner:
    """Trade Validation Service - hosts the validation core in a process."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize the validation service."""
        self.config = config if config is not None else load_validators_config()
        self.service_name = (self.config.get('service') or {}).get('name', 'trade_validation_service')
        self.logger = logging.getLogger(self.service_name)

        # Service state
        self.running = False
        self.stop_requested = False
        self.stopped = False
        self.health_interval = 30
        self._ticks = 0

        try:
            self.validation_service = create_validation_service(self.config)
            self.admin = ValidationAdmin(self.validation_service)

            self.logger.info(f"{self.service_name} initialized successfully")

        except Exception as e:
            self.logger.error(f"Failed to initialize {self.service_name}: {e}")
            raise

    async def start(self):
        """Start the validation service."""
        try:
            self.logger.info(f"Starting {self.service_name}...")

            self._health_check()
            self.running = True

            self._install_signal_handlers()

            self.logger.info(f"{self.service_name} started successfully")

            await self._health_monitor()

        except Exception as e:
            self.logger.error(f"Error starting {self.service_name}: {e}")
            raise
        finally:
            self.stop()

    def _install_signal_handlers(self):
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)
        if hasattr(signal, 'SIGUSR1'):
            signal.signal(signal.SIGUSR1, self._shutdown_signal_handler)
            signal.signal(signal.SIGUSR2, self._shutdown_signal_handler)

    async def _health_monitor(self):
        """Monitor service health."""
        try:
            while self.running and not self.stop_requested:
                await asyncio.sleep(1)
                self._tick()
        except asyncio.CancelledError:
            self.logger.info("Health monitor cancelled")

    def _tick(self):
        self._ticks += 1
        if self._ticks % self.health_interval == 0:
            self._health_check()

    def _health_check(self):
        """Log current validation status."""
        status = self.admin.get_status()
        state = "SHUTDOWN REQUESTED" if status['shutdown_requested'] else "Accepting"
        self.logger.debug(
            f"Health check - state: {state}, rules: {len(status['rules'])}, "
            f"validated: {status['validated_count']}, rejected: {status['rejected_count']}"
        )

    def _signal_handler(self, signum, frame):
        """Handle termination signals."""
        self.logger.info(f"Received signal {signum}, shutting down...")
        self.validation_service.request_shutdown()
        self.stop_requested = True
        self.running = False

    def _shutdown_signal_handler(self, signum, frame):
        """Toggle the reversible shutdown flag."""
        if signum == getattr(signal, 'SIGUSR1', None):
            self.validation_service.request_shutdown()
        else:
            self.validation_service.cancel_shutdown()

    def stop(self):
        """Stop the service gracefully."""
        if self.stopped:
            return
        self.stopped = True
        self.logger.info(f"Stopping {self.service_name}...")
        self.running = False
        self.validation_service.request_shutdown()
        self.validation_service.close()
        self.logger.info(f"{self.service_name} stopped")


def setup_logging(config: Optional[Dict[str, Any]] = None):
    """Setup logging for the service."""
    logging_config = (config or {}).get('logging') or {}
    log_dir = Path(logging_config.get('directory') or "logs")
    log_dir.mkdir(exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, str(logging_config.get('level', 'INFO')).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_dir / "trade_validation_service.log")
        ]
    )


async def main():
    """Main entry point."""
    config = load_validators_config()
    setup_logging(config)

    logger = logging.getLogger("trade_validation_service.main")
    logger.info("Starting Trade Validation Service...")

    try:
        runner = ValidationServiceRunner(config)
        await runner.start()

    except KeyboardInterrupt:
        logger.info("Shutdown requested")
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)
    finally:
        logger.info("Trade Validation Service shutdown complete")


def run():
    """Console script entry point."""
    os.environ.setdefault("SERVICE_NAME", "trade_validation_service")
    asyncio.run(main())


if __name__ == "__main__":
    run()
