"""Message handlers and the default dispatch table."""

from __future__ import annotations

from . import login, scan_nfc, set_pid
from .context import HandlerContext
from .registry import Handler, HandlerRegistry

__all__ = ["Handler", "HandlerContext", "HandlerRegistry", "create_default_registry"]


def create_default_registry() -> HandlerRegistry:
    """Return a registry holding the SET_PID, SCAN_NFC and LOGIN handlers."""

    registry = HandlerRegistry()
    registry.add(set_pid.MESSAGE_TYPE, set_pid.handle_set_pid)
    registry.add(scan_nfc.MESSAGE_TYPE, scan_nfc.handle_scan_nfc)
    registry.add(login.MESSAGE_TYPE, login.handle_login)
    return registry
