# Local application imports
from .base_container import BaseContainer
from .providers import (
    DatabaseProvider,
    EventsProvider,
    IdentityProvider,
    PipelineProvider,
    RepositoryProvider,
)


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.

    Registration order is important:
    1. Database connections (DatabaseProvider)
    2. Repositories (RepositoryProvider) - depends on database
    3. Pipeline singletons (PipelineProvider) - depends on repositories
    4. Use cases (IdentityProvider, EventsProvider) - depend on repositories and pipeline
    """

    def __init__(self) -> None:
        super().__init__()
        self.setup()

    def setup(self) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: database → repositories → pipeline → use cases
        """
        DatabaseProvider.register(self)
        RepositoryProvider.register(self)
        PipelineProvider.register(self)
        IdentityProvider.register(self)
        EventsProvider.register(self)


# Global container instance (singleton pattern)
_container: DIContainer | None = None


def get_container() -> DIContainer:
    """
    Get the global DI container instance (singleton pattern)

    Returns:
        DIContainer instance with all dependencies registered
    """
    global _container
    if _container is None:
        _container = DIContainer()
    return _container
