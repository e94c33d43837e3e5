"""Google ADK agent definition for the voice assistant's visual memory."""
from typing import List

from google.adk.agents import LlmAgent
from google.adk.tools import FunctionTool

VOICE_AGENT_NAME = "sherlock_voice_agent"

VOICE_AGENT_INSTRUCTION = """
You are a voice assistant that remembers the people the user meets.

You receive "System Update" messages whenever the camera recognizes someone.
- Call get_visual_context to find out who is in view right now.
- When the conversation reveals the name or relationship of the person in view,
  call update_identity with their identityId. Do this silently.
- Never ask the user who someone is. Infer it from the conversation.
- If nobody is in view, do not guess.

Keep spoken answers short and natural.
"""


def create_voice_agent(tools: List[FunctionTool], model: str) -> LlmAgent:
    """
    Create the ADK agent that carries the visual memory tools.

    Args:
        tools: FunctionTools from create_visual_tools()
        model: Model name the agent runs on

    Returns:
        LlmAgent: Agent instance exposing get_visual_context / update_identity
    """
    return LlmAgent(
        name=VOICE_AGENT_NAME,
        description="Voice assistant that recognizes people and keeps their identities up to date.",
        instruction=VOICE_AGENT_INSTRUCTION,
        tools=tools,
        model=model,
    )
