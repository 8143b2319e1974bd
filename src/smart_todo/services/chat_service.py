"""Chat service - one conversation turn with the assistant.

A turn persists the user's message, asks the assistant with a prompt built
from the current projects, extracts suggested todos from the reply and
persists the reply with them. If the assistant call fails, the user's message
stays saved and a failure reply is returned but never written.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

from smart_todo.adapters.sqlite.utils import generate_uuid
from smart_todo.exceptions import (
    AssistantNotConfiguredError,
    UpstreamFailureError,
    ValidationError,
)
from smart_todo.models import ChatReply, Message, Note, Project, Todo
from smart_todo.services.assistant_client import AssistantClient
from smart_todo.services.config_service import get_config_service
from smart_todo.services.gateway import StoreGateway
from smart_todo.utils.logger import get_logger
from smart_todo.utils.suggestion_parser import extract_suggestions

# Prompt context limits per project
MAX_PROMPT_NOTES = 3
MAX_PROMPT_TODOS = 5
NOTE_PREVIEW_LENGTH = 100


def build_system_prompt(
    projects: list[Project], todos: list[Todo], notes: list[Note]
) -> str:
    """Describe the user's projects for the assistant and ask for bullet suggestions."""
    summaries = []
    for project in projects:
        project_todos = [t for t in todos if t.project_id == project.id]
        pending = [t for t in project_todos if not t.completed]
        completed_count = len(project_todos) - len(pending)
        project_notes = [n for n in notes if n.project_id == project.id]

        lines = [f"- **{project.name}**: {project.description or 'No description'}"]
        lines.append(
            f"  - Status: {len(pending)} pending todos, {completed_count} completed"
        )

        if project_notes:
            lines.append("  - Recent notes:")
            for note in project_notes[:MAX_PROMPT_NOTES]:
                content = note.content
                if len(content) > NOTE_PREVIEW_LENGTH:
                    content = content[:NOTE_PREVIEW_LENGTH] + "..."
                lines.append(f"    - [{note.created_at.date().isoformat()}]: {content}")

        if pending:
            lines.append("  - Current todos:")
            for todo in pending[:MAX_PROMPT_TODOS]:
                lines.append(f"    - {todo.text}")

        summaries.append("\n".join(lines))

    project_section = "\n\n".join(summaries) or (
        "No projects yet. Help the user get started by suggesting they "
        "create their first project."
    )

    return f"""You are a helpful productivity assistant that helps manage projects and todos. You have access to the user's current projects and their progress.

CURRENT PROJECTS AND STATUS:
{project_section}

YOUR CAPABILITIES:
1. Suggest actionable todo items based on project context and recent notes
2. Help prioritize tasks and provide productivity advice
3. Answer questions about project status and progress
4. Provide encouragement and support

WHEN SUGGESTING TODOS:
- Make them specific and actionable
- Consider the project context and recent progress
- Format each suggestion on a new line starting with "• "
- If a suggestion is for a specific project, mention the project name

IMPORTANT: When you suggest todos, format them clearly so the user can easily add them to their list. Be concise but helpful."""


def _new_message(role: str, content: str, **extra) -> Message:
    return Message(
        id=generate_uuid(),
        role=role,
        content=content,
        timestamp=datetime.now(UTC),
        **extra,
    )


class ChatService:
    """Runs conversation turns against the store and the assistant."""

    def __init__(self, gateway: StoreGateway, client: AssistantClient, timeout: float):
        """Initialize the chat service.

        Args:
            gateway: Open store gateway
            client: Assistant API client
            timeout: Upper bound in seconds for one assistant call
        """
        self.gateway = gateway
        self.client = client
        self.timeout = timeout
        self.logger = get_logger("chat")

    async def send(self, content: str) -> ChatReply:
        """Send one user message and return the assistant's reply.

        Raises:
            ValidationError: If ``content`` is empty
        """
        if content is None or not content.strip():
            raise ValidationError("Message cannot be empty")

        user_message = _new_message("user", content.strip())
        await self.gateway.save_message(user_message)

        projects = await self.gateway.list_projects()
        try:
            text = await self._ask(user_message.content, projects)
        except UpstreamFailureError as e:
            self.logger.warning("assistant call failed: %s", e)
            failure = _new_message("assistant", f"Error: {e.message}")
            return ChatReply(user_message=user_message, reply=failure, failed=True)

        suggestions = extract_suggestions(text, projects)
        reply = _new_message("assistant", text, suggested_todos=suggestions or None)
        await self.gateway.save_message(reply)
        self.logger.info("assistant replied with %d suggestion(s)", len(suggestions))
        return ChatReply(user_message=user_message, reply=reply)

    async def _ask(self, content: str, projects: list[Project]) -> str:
        settings = await self.gateway.get_settings()
        if settings is None or not settings.api_key:
            raise AssistantNotConfiguredError()

        todos = await self.gateway.list_todos()
        notes = await self.gateway.list_notes()
        system = build_system_prompt(projects, todos, notes)

        try:
            return await asyncio.wait_for(
                self.client.complete(settings.api_key, system, content),
                timeout=self.timeout,
            )
        except TimeoutError as e:
            raise UpstreamFailureError(
                f"Assistant did not answer within {self.timeout:g}s"
            ) from e

    async def history(self) -> list[Message]:
        """All saved messages, oldest first."""
        return await self.gateway.list_messages()

    async def accept_suggestion(
        self, message_id: str, index: int, project_id: str | None = None
    ) -> Todo:
        """Turn a suggestion into an ``ai`` todo and mark it added.

        Args:
            message_id: Assistant message holding the suggestion
            index: Zero-based suggestion index within the message
            project_id: Target project, overriding the matched one

        Raises:
            NotFoundError: If the message or project does not exist
            ValidationError: If the index is invalid, the suggestion was already
                added, or no project could be determined
        """
        message = await self.gateway.get_message(message_id)
        suggestions = list(message.suggested_todos or [])
        if not 0 <= index < len(suggestions):
            raise ValidationError(
                f"Message {message_id} has no suggestion #{index + 1}"
            )

        suggestion = suggestions[index]
        if suggestion.added:
            raise ValidationError(f"Suggestion already added: {suggestion.text}")

        target = project_id or suggestion.project_id
        if not target:
            raise ValidationError(
                "Suggestion is not linked to a project; choose one with --project"
            )

        suggestions[index] = suggestion.model_copy(update={"added": True})
        return await self.gateway.add_suggested_todo(
            target,
            suggestion.text,
            message.model_copy(update={"suggested_todos": suggestions}),
        )


def get_chat_service(gateway: StoreGateway) -> ChatService:
    """Factory function to get a ChatService using the configured assistant."""
    assistant = get_config_service().config.assistant
    return ChatService(gateway, AssistantClient(assistant), timeout=assistant.timeout)
