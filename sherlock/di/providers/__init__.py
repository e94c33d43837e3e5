from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .pipeline_provider import PipelineProvider
from .identity_provider import IdentityProvider
from .events_provider import EventsProvider


__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "PipelineProvider",
    "IdentityProvider",
    "EventsProvider",
]
