"""Global configuration — loaded from environment variables."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class AgentdocsSettings(BaseSettings):
    agents_dir: Path = Path(".opencode/agent")
    file_glob: str = "*.md"
    recursive: bool = False
    log_level: str = "WARNING"

    # Lint settings
    strict: bool = False  # warnings fail the run
    max_description_length: int = 1024
    known_tools: list[str] = Field(default_factory=lambda: [
        "bash", "edit", "write", "read", "grep", "glob", "list",
        "patch", "todowrite", "todoread", "webfetch", "task",
    ])

    # Assumed when frontmatter is silent
    default_mode: str = "all"
    default_permission: str = "allow"

    # Export
    schema_url: str = "https://opencode.ai/config.json"

    model_config = {"env_prefix": "AGENTDOCS_"}


settings = AgentdocsSettings()
