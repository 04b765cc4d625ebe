"""Prompt construction for project generation."""

from langchain_core.messages import BaseMessage
from langchain_core.prompts.chat import ChatPromptTemplate

from project_generator.components.types import GenerationRequest

SYSTEM_PROMPT = "You are an expert full-stack developer. Generate complete, production-ready project structures."

USER_PROMPT = """Create a complete {project_type} project with the following:

Description: {description}

Generate a complete file structure as JSON where:
- Keys are file paths relative to the project root, using forward slashes (e.g., "src/app/page.tsx", "package.json")
- Values are the complete file contents

Include:
- All necessary source files
- A dependency manifest (package.json, requirements.txt, ...) with all dependencies
- Configuration files (tsconfig, etc.)
- Components, API routes, utilities
- Styling (Tailwind or CSS)
- Any authentication, database, or other features mentioned

Make it modern, using Next.js 14+ App Router if it's a web app.
Return ONLY valid JSON, no markdown or explanations."""


def format_messages(request: GenerationRequest, supports_system_prompt: bool = True) -> list[BaseMessage]:
    """Format the generation prompt for a request.

    Args:
        request: The project type and description to embed
        supports_system_prompt: Whether the model supports system prompts

    Returns:
        List of formatted messages for the model
    """
    if supports_system_prompt:
        chat_prompt = ChatPromptTemplate.from_messages([("system", SYSTEM_PROMPT), ("user", USER_PROMPT)])
    else:
        combined_prompt = f"<instructions>{SYSTEM_PROMPT}</instructions>\n\n<question>{USER_PROMPT}</question>"
        chat_prompt = ChatPromptTemplate.from_messages([("user", combined_prompt)])

    return chat_prompt.format_messages(project_type=request.project_type, description=request.description)
