"""
Cancellation for CLI runs. SIGINT/SIGTERM set a flag that the orchestrator
polls between stages (pass `should_cancel=request_shutdown`); a second signal
falls through to the default handler.
"""
import logging
import signal
from typing import Any

logger = logging.getLogger(__name__)

_shutdown_requested = False


def request_shutdown() -> bool:
    """True once a shutdown signal has arrived."""
    return _shutdown_requested


def reset_shutdown() -> None:
    global _shutdown_requested
    _shutdown_requested = False


def _set_shutdown_requested(signum: int | None = None, _frame: Any = None) -> None:
    global _shutdown_requested
    if _shutdown_requested and signum is not None:
        signal.signal(signum, signal.SIG_DFL)
        signal.raise_signal(signum)
        return
    _shutdown_requested = True
    logger.warning("Shutdown requested; the run stops before its next stage")


def setup_graceful_shutdown() -> None:
    """Register SIGTERM/SIGINT handlers so an in-flight run aborts at its next stage."""
    reset_shutdown()
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            signal.signal(sig, _set_shutdown_requested)
        except (AttributeError, ValueError):
            pass  # not the main thread
