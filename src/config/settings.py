"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use QUICKMARK_ prefix (e.g., QUICKMARK_IMAGE_MAX_WIDTH=60%).

Settings can also be loaded from a .env file in the project root.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use QUICKMARK_ prefix.

    Examples:
        QUICKMARK_IMAGE_MAX_WIDTH=100%
        QUICKMARK_HEADING_RULE=false
        QUICKMARK_STORE_PATH=/tmp/quickmark.json
    """

    model_config = SettingsConfigDict(
        env_prefix="QUICKMARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Rendering configuration
    image_max_width: str = Field(
        default="80%",
        description="CSS max-width applied to every rendered image",
    )

    heading_rule: bool = Field(
        default=True,
        description="Emit a horizontal rule after level-1 headings",
    )

    # CLI configuration
    source_pattern: str = Field(
        default="**/*.md",
        description="Glob (relative to inputdir) selecting markdown sources",
    )

    output_suffix: str = Field(
        default=".html",
        description="Suffix given to rendered output files",
    )

    # Document store configuration
    store_path: str = Field(
        default=str(Path.home() / ".quickmark" / "store.json"),
        description="JSON file backing the persistent document store",
    )

    store_key: str = Field(
        default="files",
        description="Fixed key under which the document list is persisted",
    )

    new_file_template: str = Field(
        default="# {name}\nContent...",
        description="Content given to new documents created without content",
    )

    def outputName_make(self, source: Path) -> str:
        """
        Generate the output filename for a markdown source.

        Args:
            source: Path of the markdown source file

        Returns:
            Filename with the source suffix replaced by output_suffix

        Example:
            >>> settings = AppSettings()
            >>> settings.outputName_make(Path("notes/today.md"))
            'today.html'
        """
        return f"{source.stem}{self.output_suffix}"

    def newContent_make(self, name: str) -> str:
        """Content for a freshly created document called ``name``"""
        return self.new_file_template.format(name=name)


# Singleton instance - import this in your code
appsettings = AppSettings()
