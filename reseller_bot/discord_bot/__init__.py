"""Discord integration for ResellerBot.

``ResellerBot`` is the gateway client; ``InteractionRouter`` receives its
ready, interaction and channel-created events and forwards interactions to
the command registry.
"""

from .client import ResellerBot  # noqa: F401
from .interaction_router import InteractionRouter  # noqa: F401

__all__ = ["InteractionRouter", "ResellerBot"]
