"""Global logging and error handling utilities"""
import logging
import sys
import traceback

# Detect debug mode - True if running from source, False if packaged
DEBUG_MODE = not getattr(sys, 'frozen', False)

_main_window = None

logger = logging.getLogger('Eschersketch')

def set_main_window(window):
    """Set the main window reference for showing popups"""
    global _main_window
    _main_window = window

def loggerRaise(e: Exception, user_message: str = None, title: str = "Error"):
    """Handle exceptions with optional popup in release mode

    Args:
        e: The exception to handle
        user_message: User-friendly message to show in popup (optional)
        title: Title for the popup dialog

    In DEBUG_MODE:
        - Logs the message and raises the exception (full traceback)

    In RELEASE_MODE:
        - Shows popup with user message or exception string
        - Logs the full traceback
        - Then raises the exception
    """
    if DEBUG_MODE:
        if user_message:
            logger.warning(f"{title}: {user_message}")
        raise e

    # Log the full traceback
    tb = traceback.format_exc()
    logger.error(f"{title}: {tb}")

    message = user_message if user_message else str(e)
    if _main_window is not None:
        from PyQt5.QtWidgets import QMessageBox
        QMessageBox.critical(_main_window, title, message)
    else:
        # Fallback if no main window set (headless)
        print(f"ERROR POPUP (no window): {title} - {message}", file=sys.stderr)

    # Re-raise so the caller's state handling still runs
    raise e
