"""Activation / uninstall of the header notice record."""
import logging

from apps.header_notice.services.notice_settings import DEFAULTS, OPTION_KEY

logger = logging.getLogger(__name__)


def activate(store) -> bool:
    """Write the default record if none exists. Returns True when it was created."""
    if store.get(OPTION_KEY) is not None:
        return False
    store.set(OPTION_KEY, DEFAULTS.to_options())
    logger.info("header_notice: activated with defaults")
    return True


def uninstall(store) -> None:
    """Reset every field to its default."""
    store.set(OPTION_KEY, DEFAULTS.to_options())
    logger.info("header_notice: reset to defaults on uninstall")
