from .logging import setup_logging
from .permissions import can_connect, can_manage_voice

__all__ = ["setup_logging", "can_connect", "can_manage_voice"]
