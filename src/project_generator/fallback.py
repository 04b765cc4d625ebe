"""Basic project structure used when the model response cannot be parsed."""

import html
import json

from project_generator.components.types import FileMap
from project_generator.constants import DEFAULT_PROJECT_NAME

SCRIPTS = {
    "dev": "next dev",
    "build": "next build",
    "start": "next start",
}

DEPENDENCIES = {
    "next": "14.2.0",
    "react": "^18.3.0",
    "react-dom": "^18.3.0",
}

PAGE_TEMPLATE = """export default function Home() {{
  return (
    <main>
      <h1>{project_type}</h1>
      <p>{description}</p>
    </main>
  )
}}
"""


def _escape_jsx_text(text: str) -> str:
    # Braces open JSX expressions, so they are escaped along with markup
    return html.escape(text).replace("{", "&#123;").replace("}", "&#125;")


def build_fallback(project_type: str, description: str) -> FileMap:
    """Build the minimal Next.js project written when parsing fails.

    Always returns the same two files: ``package.json`` and ``app/page.tsx``.
    """
    page = PAGE_TEMPLATE.format(
        project_type=_escape_jsx_text(project_type),
        description=_escape_jsx_text(description),
    )
    manifest = {
        "name": DEFAULT_PROJECT_NAME,
        "version": "1.0.0",
        "description": description,
        "private": True,
        "scripts": SCRIPTS,
        "dependencies": DEPENDENCIES,
    }
    return {
        "package.json": json.dumps(manifest, indent=2) + "\n",
        "app/page.tsx": page,
    }
