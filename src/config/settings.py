"""
Conversion settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use INKLINE_ prefix (e.g., INKLINE_GFM=false).

Settings can also be loaded from a .env file in the project root.
"""

from typing import Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class InlineSettings(BaseSettings):
    """
    Inline conversion configuration via environment variables.

    Environment variables use INKLINE_ prefix.

    Examples:
        INKLINE_GFM=false
        INKLINE_BREAKS=true
        INKLINE_SANITIZE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="INKLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Rule selection
    gfm: bool = Field(
        default=True,
        description="GitHub flavoured rules: strikethrough, bare URLs, extra escapes",
    )

    breaks: bool = Field(
        default=False,
        description="Treat every newline as a line break (only with gfm)",
    )

    pedantic: bool = Field(
        default=False,
        description="Strict emphasis/strong grammar (only without gfm)",
    )

    footnotes: bool = Field(
        default=False,
        description="Recognise [^id] footnote references",
    )

    # Text hooks
    sanitize: bool = Field(
        default=False,
        description="HTML-escape raw tags instead of passing them through",
    )

    smartypants: bool = Field(
        default=True,
        description="Curly quotes, em dashes and ellipses in plain text runs",
    )

    # Diagnostics
    verbosity: int = Field(
        default=0,
        ge=0,
        description="Logging verbosity (0 silent, 1 normal, 2 verbose, 3 trace)",
    )

    def flags_key(self) -> Tuple[bool, bool, bool, bool]:
        """
        Return the flags that select a rule set.

        Two settings objects with the same key share one cached rule set.

        Example:
            >>> InlineSettings(gfm=False, pedantic=True).flags_key()
            (False, False, True, False)
        """
        return (self.gfm, self.breaks, self.pedantic, self.footnotes)


# Singleton instance - import this in your code
appsettings = InlineSettings()
