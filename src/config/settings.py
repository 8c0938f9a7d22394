"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use ESCMARK_ prefix (e.g., ESCMARK_STRICT_MODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use ESCMARK_ prefix.

    Examples:
        ESCMARK_STRICT_MODE=true
        ESCMARK_DEFAULT_PROFILE=ansi
        ESCMARK_OUTPUT_ENCODING=cp437
    """

    model_config = SettingsConfigDict(
        env_prefix="ESCMARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Lexer configuration
    strict_mode: bool = Field(
        default=False,
        description="Strict mode: raise on characters no markup rule matches instead of skipping them",
    )

    # Renderer configuration
    close_at_eof: bool = Field(
        default=False,
        description="Close headers and inline formatting still open at end of input",
    )

    default_profile: str = Field(
        default="escp",
        description="Device profile used when none is requested",
    )

    profiles_dir: Optional[str] = Field(
        default=None,
        description="Directory holding additional <name>.yaml device profiles",
    )

    # Encoding configuration
    input_encoding: str = Field(
        default="utf-8",
        description="Encoding used to read markdown source files",
    )

    output_encoding: str = Field(
        default="utf-8",
        description="Encoding of literal text inside the control-code stream",
    )

    encoding_errors: str = Field(
        default="replace",
        description="Codec error handler for characters the output encoding cannot represent",
    )

    # Batch configuration
    input_pattern: str = Field(
        default="**/*.md",
        description="Glob (relative to inputdir) selecting sources for batch conversion",
    )

    output_suffix: str = Field(
        default=".prn",
        description="Suffix replacing the source extension of converted files",
    )

    def profileDirs_resolve(self, profiles_dir: Optional[str] = None) -> list[Path]:
        """
        Directories to search for device profiles, in lookup order.

        Args:
            profiles_dir: Directory overriding the configured profiles_dir

        Returns:
            The override (or configured profiles_dir) if any, followed by the
            profiles/ directory bundled with the package

        Example:
            >>> settings = AppSettings(profiles_dir="/etc/escmark")
            >>> settings.profileDirs_resolve()[0]
            PosixPath('/etc/escmark')
        """
        configured = profiles_dir if profiles_dir is not None else self.profiles_dir
        dirs = [Path(configured)] if configured else []
        dirs.append(bundledProfilesDir_get())
        return dirs


def bundledProfilesDir_get() -> Path:
    """Location of the profiles shipped with the package"""
    return Path(__file__).parent.parent / "profiles"


# Singleton instance - import this in your code
appsettings = AppSettings()
