"""
Device profile loader for escmark.

A profile names the control codes a particular output device understands.
Each profile is a YAML file <name>.yaml:

    name: ansi
    description: Terminal preview using ANSI SGR sequences
    codes:
      bold_on: "\\e[1m"
      bold_off: "\\e[22m"

Codes a profile does not mention keep their ESC/P values. Profiles are
looked up in the configured profiles directory first, then in the
profiles/ directory shipped with the package.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from ..config import appsettings
from .codes import ControlCodes


class ProfileError(Exception):
    """Raised when profile loading or validation fails"""
    pass


class Profile:
    """
    Represents an output device profile.

    A profile consists of:
      - Metadata (name, description)
      - A codes mapping overriding ControlCodes fields
    """

    def __init__(self, profile_name: str, profiles_dir: Optional[str] = None):
        """
        Load a profile by name.

        Args:
            profile_name: Name of the profile (e.g., "escp", "ansi")
            profiles_dir: Directory to search before the bundled profiles
                          (default: settings.profiles_dir)

        Raises:
            ProfileError: If the profile file doesn't exist or is invalid
        """
        self.name = profile_name
        self.config_path = profilePath_find(profile_name, profiles_dir)

        if self.config_path is None:
            raise ProfileError(
                f"Profile '{profile_name}' not found. "
                f"Available: {', '.join(profiles_listAvailable(profiles_dir)) or 'none'}"
            )

        self.config = self._config_load()
        self.codes = self._codes_build()

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse the profile YAML"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ProfileError(f"Failed to parse {self.config_path.name}: {e}")
        except OSError as e:
            raise ProfileError(f"Failed to load {self.config_path.name}: {e}")

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ProfileError(f"Profile '{self.name}' must be a mapping")
        return config

    def _codes_build(self) -> ControlCodes:
        """Overlay the profile's codes mapping on the ESC/P defaults"""
        overrides = self.config.get('codes') or {}
        if not isinstance(overrides, dict):
            raise ProfileError(f"Profile '{self.name}': 'codes' must be a mapping")

        known = set(ControlCodes.fieldNames_get())
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ProfileError(f"Profile '{self.name}': unknown codes {', '.join(unknown)}")

        codes: Dict[str, bytes] = {}
        for key, value in overrides.items():
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise ProfileError(f"Profile '{self.name}': code '{key}' must be a string")
            try:
                codes[key] = value.encode('latin-1')
            except UnicodeEncodeError:
                raise ProfileError(f"Profile '{self.name}': code '{key}' is not a byte string")

        return ControlCodes(**codes)

    def codes_get(self) -> ControlCodes:
        """Control codes for this device"""
        return self.codes

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value from the profile YAML.

        Supports nested keys with dot notation:
          profile.config_get('codes.bold_on')

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        value: Any = self.config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def description_get(self) -> str:
        return self.config_get('description', '')

    def __repr__(self) -> str:
        return f"Profile(name='{self.name}', path='{self.config_path}')"


def profilePath_find(profile_name: str, profiles_dir: Optional[str] = None) -> Optional[Path]:
    """
    Locate <profile_name>.yaml in the search directories.

    Returns:
        Path of the first match, or None
    """
    for directory in appsettings.profileDirs_resolve(profiles_dir):
        candidate = directory / f"{profile_name}.yaml"
        if candidate.is_file():
            return candidate
    return None


def profiles_listAvailable(profiles_dir: Optional[str] = None) -> list[str]:
    """
    List all available profile names.

    Args:
        profiles_dir: Extra directory searched alongside the bundled profiles

    Returns:
        Sorted, de-duplicated profile names
    """
    names: set[str] = set()
    for directory in appsettings.profileDirs_resolve(profiles_dir):
        if directory.is_dir():
            names.update(item.stem for item in directory.glob('*.yaml'))
    return sorted(names)
