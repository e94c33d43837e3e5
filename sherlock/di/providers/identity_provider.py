from typing import TYPE_CHECKING

from google.adk.agents import LlmAgent

from ...core.config import get_settings
from ...domain.repositories.identity_repository import IdentityRepository
from ...application.services.visual_context_bus import VisualContextBus
from ...application.use_cases.identity.get_identity import GetIdentityUseCase
from ...application.use_cases.identity.list_identities import ListIdentitiesUseCase
from ...application.use_cases.identity.update_identity import UpdateIdentityUseCase
from ...application.use_cases.identity.import_identities import ImportIdentitiesUseCase
from ...agents.visual_tools import VisualContextTools, create_visual_tools
from ...agents.voice_agent import create_voice_agent
from ...infrastructure.external.headshot_embedder import HeadshotEmbedder

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class IdentityProvider:
    """Identity use case provider - registers identity use cases and the voice agent tools"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        settings = get_settings()

        try:
            container.get(HeadshotEmbedder)
        except ValueError:
            container.register_singleton(
                HeadshotEmbedder,
                HeadshotEmbedder(
                    embedding_dimension=settings.embedding_dimension,
                    model_name=settings.embedding_model,
                ),
            )

        container.register_factory(
            GetIdentityUseCase,
            lambda: GetIdentityUseCase(identity_repository=container.get(IdentityRepository)),
        )

        container.register_factory(
            ListIdentitiesUseCase,
            lambda: ListIdentitiesUseCase(identity_repository=container.get(IdentityRepository)),
        )

        container.register_factory(
            UpdateIdentityUseCase,
            lambda: UpdateIdentityUseCase(identity_repository=container.get(IdentityRepository)),
        )

        container.register_factory(
            ImportIdentitiesUseCase,
            lambda: ImportIdentitiesUseCase(
                identity_repository=container.get(IdentityRepository),
                embedder=container.get(HeadshotEmbedder),
            ),
        )

        container.register_factory(
            VisualContextTools,
            lambda: VisualContextTools(
                bus=container.get(VisualContextBus),
                update_identity_use_case=container.get(UpdateIdentityUseCase),
            ),
        )

        container.register_factory(
            LlmAgent,
            lambda: create_voice_agent(
                tools=create_visual_tools(container.get(VisualContextTools)),
                model=settings.voice_agent_model,
            ),
        )
