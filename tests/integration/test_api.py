"""
Integration tests for the HTTP API.
Uses TestClient with a mocked container (no real DB); startup/shutdown services are patched out.
"""
import base64
from contextlib import ExitStack
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import cv2
import numpy as np
import pytest

pytestmark = pytest.mark.integration
from fastapi.testclient import TestClient
from google.adk.agents import LlmAgent

from sherlock.agents.exceptions import ValidationError
from sherlock.agents.visual_tools import VisualContextTools, create_visual_tools
from sherlock.agents.voice_agent import create_voice_agent
from sherlock.application.dto.event_dto import EventResponse
from sherlock.application.dto.identity_dto import IdentityImportResponse, IdentityResponse
from sherlock.application.dto.session_dto import SessionResponse
from sherlock.application.services.observation_pipeline import ObservationPipeline
from sherlock.application.services.visual_context_bus import VisualContextBus
from sherlock.application.use_cases.event.record_note import RecordNoteUseCase
from sherlock.application.use_cases.identity.get_identity import GetIdentityUseCase
from sherlock.application.use_cases.identity.import_identities import ImportIdentitiesUseCase
from sherlock.application.use_cases.identity.update_identity import UpdateIdentityUseCase
from sherlock.application.use_cases.session.session_use_cases import EndSessionUseCase, GetActiveSessionUseCase
from sherlock.domain.models.visual_context import VisualContextSnapshot
from sherlock.domain.repositories.media_storage import MediaStorage

CONTROLLERS = [
    "identity_controller",
    "events_controller",
    "session_controller",
    "observation_controller",
    "voice_agent_controller",
    "media_controller",
]


@pytest.fixture
def bus():
    return VisualContextBus()


@pytest.fixture
def pipeline():
    mock = MagicMock(spec=ObservationPipeline)
    mock.is_running = True
    mock.in_flight = 0
    mock.submit_frame.return_value = MagicMock()
    return mock


@pytest.fixture
def registrations(bus, pipeline):
    return {
        GetIdentityUseCase: AsyncMock(spec=GetIdentityUseCase),
        UpdateIdentityUseCase: AsyncMock(spec=UpdateIdentityUseCase),
        ImportIdentitiesUseCase: AsyncMock(spec=ImportIdentitiesUseCase),
        RecordNoteUseCase: AsyncMock(spec=RecordNoteUseCase),
        GetActiveSessionUseCase: AsyncMock(spec=GetActiveSessionUseCase),
        EndSessionUseCase: AsyncMock(spec=EndSessionUseCase),
        MediaStorage: AsyncMock(spec=MediaStorage),
        VisualContextBus: bus,
        ObservationPipeline: pipeline,
    }


@pytest.fixture
def client(registrations):
    """Create test client with mocked container."""
    from sherlock.main import app

    container = MagicMock()
    container.get.side_effect = lambda key: registrations.get(key)

    with ExitStack() as stack:
        for name in CONTROLLERS:
            stack.enter_context(patch(f"sherlock.api.v1.{name}.get_container", return_value=container))
        stack.enter_context(patch("sherlock.main.get_container", return_value=container))
        stack.enter_context(patch("sherlock.main.start_services", new=AsyncMock()))
        stack.enter_context(patch("sherlock.main.stop_services", new=AsyncMock()))
        with TestClient(app) as c:
            yield c


class TestIdentitiesAPI:
    def test_get_identity(self, client, registrations):
        registrations[GetIdentityUseCase].execute.return_value = IdentityResponse(id="id-1", name="Ada", has_embedding=True)
        response = client.get("/api/v1/identities/id-1")
        assert response.status_code == 200
        assert response.json()["name"] == "Ada"

    def test_get_identity_not_found(self, client, registrations):
        registrations[GetIdentityUseCase].execute.return_value = None
        assert client.get("/api/v1/identities/missing").status_code == 404

    def test_update_identity(self, client, registrations):
        registrations[UpdateIdentityUseCase].execute.return_value = IdentityResponse(
            id="id-1", name="Grace", relationship_status="Colleague"
        )
        response = client.patch("/api/v1/identities/id-1", json={"name": "Grace", "relationship_status": "Colleague"})
        assert response.status_code == 200
        assert response.json()["relationship_status"] == "Colleague"

    def test_update_identity_unknown(self, client, registrations):
        registrations[UpdateIdentityUseCase].execute.side_effect = LookupError("nope")
        assert client.patch("/api/v1/identities/x", json={"name": "Grace"}).status_code == 404

    def test_update_identity_blank_name_rejected(self, client):
        assert client.patch("/api/v1/identities/x", json={"name": "  "}).status_code == 422

    def test_import_csv(self, client, registrations):
        registrations[ImportIdentitiesUseCase].execute.return_value = IdentityImportResponse(
            processed=2, created=1, skipped=1
        )
        response = client.post(
            "/api/v1/identities/import",
            files={"file": ("people.csv", b"name,headshot_media_url\nAda,http://x/a.jpg\nBob,\n", "text/csv")},
        )
        assert response.status_code == 200
        assert response.json()["created"] == 1
        content = registrations[ImportIdentitiesUseCase].execute.call_args.args[0]
        assert content.startswith("name,headshot_media_url")

    def test_import_csv_without_name_column(self, client, registrations):
        registrations[ImportIdentitiesUseCase].execute.side_effect = ValidationError(
            "no name", user_message="CSV must contain a 'name' column"
        )
        response = client.post("/api/v1/identities/import", files={"file": ("p.csv", b"email\nx\n", "text/csv")})
        assert response.status_code == 400
        assert response.json()["detail"] == "CSV must contain a 'name' column"


class TestEventsAndSessionsAPI:
    def test_record_note(self, client, registrations):
        registrations[RecordNoteUseCase].execute.return_value = EventResponse(
            id="event-1", session_id="s-1", type="NOTES", content="Met at the conference"
        )
        response = client.post("/api/v1/events/notes", json={"content": "Met at the conference"})
        assert response.status_code == 201
        assert response.json()["type"] == "NOTES"

    def test_record_note_rejects_visual_observation(self, client):
        response = client.post("/api/v1/events/notes", json={"content": "x", "type": "VISUAL_OBSERVATION"})
        assert response.status_code == 422

    def test_active_session(self, client, registrations):
        registrations[GetActiveSessionUseCase].execute.return_value = SessionResponse(
            id="s-1", started_at=datetime(2025, 1, 1, tzinfo=timezone.utc)
        )
        response = client.get("/api/v1/sessions/active")
        assert response.status_code == 200
        assert response.json()["id"] == "s-1"

    def test_end_without_active_session(self, client, registrations):
        registrations[EndSessionUseCase].execute.return_value = None
        assert client.post("/api/v1/sessions/active/end").status_code == 404


class TestObservationsAPI:
    def test_submit_frame(self, client, pipeline):
        image = np.zeros((64, 64, 3), dtype=np.uint8)
        ok, buffer = cv2.imencode(".jpg", image)
        assert ok
        response = client.post("/api/v1/observations", json={
            "faces": [{"box": [10, 10, 20, 20], "embedding": [0.1, 0.2]}],
            "frame_jpeg_base64": base64.b64encode(buffer.tobytes()).decode(),
        })
        assert response.status_code == 202
        assert response.json()["accepted"] is True
        faces, frame = pipeline.submit_frame.call_args.args
        assert faces[0].embedding == [0.1, 0.2]
        assert frame.shape == (64, 64, 3)

    def test_invalid_frame_rejected(self, client):
        response = client.post("/api/v1/observations", json={
            "faces": [{"box": [10, 10, 20, 20], "embedding": [0.1]}],
            "frame_jpeg_base64": "!!!not-base64!!!",
        })
        assert response.status_code == 400

    def test_throttled_frame_not_accepted(self, client, pipeline):
        pipeline.submit_frame.return_value = None
        response = client.post("/api/v1/observations", json={"faces": [{"box": [0, 0, 5, 5], "embedding": [1.0]}]})
        assert response.status_code == 202
        assert response.json()["accepted"] is False


class TestVoiceAgentAPI:
    def test_visual_context_empty(self, client):
        response = client.get("/api/v1/voice-agent/visual-context")
        assert response.json()["found"] is False

    def test_get_visual_context_tool(self, client, registrations, bus):
        bus.update(VisualContextSnapshot(found=True, id="id-1", name="Ada", relationship_status="Friend"))
        registrations[VisualContextTools] = VisualContextTools(bus, registrations[UpdateIdentityUseCase])

        response = client.get("/api/v1/voice-agent/tools/get_visual_context")

        assert response.status_code == 200
        assert '"name": "Ada"' in response.json()["result"]

    def test_update_identity_tool(self, client, registrations, bus):
        registrations[VisualContextTools] = VisualContextTools(bus, registrations[UpdateIdentityUseCase])
        registrations[UpdateIdentityUseCase].execute.return_value = IdentityResponse(id="id-1", name="Grace")

        response = client.post("/api/v1/voice-agent/tools/update_identity", json={"identityId": "id-1", "name": "Grace"})

        assert response.json() == {"result": "Identity updated successfully."}

    def test_manifest_lists_agent_tools(self, client, registrations, bus):
        tools = VisualContextTools(bus, registrations[UpdateIdentityUseCase])
        registrations[LlmAgent] = create_voice_agent(create_visual_tools(tools), model="gemini-2.0-flash")

        response = client.get("/api/v1/voice-agent/manifest")

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "sherlock_voice_agent"
        assert body["model"] == "gemini-2.0-flash"
        assert [t["name"] for t in body["tools"]] == ["get_visual_context", "update_identity"]
        assert "update_identity" in body["instruction"]


class TestMediaAPI:
    def test_headshot_served(self, client, registrations):
        registrations[MediaStorage].download.return_value = b"\xff\xd8jpeg"
        response = client.get("/api/v1/media/headshots/id-1-1700000000000.jpg")
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/jpeg"
        assert response.content == b"\xff\xd8jpeg"

    def test_headshot_missing(self, client, registrations):
        registrations[MediaStorage].download.return_value = None
        assert client.get("/api/v1/media/headshots/none.jpg").status_code == 404

    def test_non_jpeg_rejected(self, client):
        assert client.get("/api/v1/media/headshots/evil.txt").status_code == 400
