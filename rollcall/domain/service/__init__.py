"""Domain services."""

from .base import Service
from .cache import CacheInvalidator, flush_on_save
from .directory import DirectoryClient
from .identity_resolver import IdentityResolver
from .identity_service import IdentitySaveHooks, IdentityService, SaveResult
from .invitation_service import InvitationService
from .mailer import MailerRegistry, Message, MessageFactory, build_mailer_registry
from .session import SessionManager, SessionToken

__all__ = [
    "CacheInvalidator",
    "DirectoryClient",
    "IdentityResolver",
    "IdentitySaveHooks",
    "IdentityService",
    "InvitationService",
    "MailerRegistry",
    "Message",
    "MessageFactory",
    "SaveResult",
    "Service",
    "SessionManager",
    "SessionToken",
    "build_mailer_registry",
    "flush_on_save",
]
