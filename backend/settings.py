"""
Profiler settings - load/save user configuration as JSON.

Settings are owned by the host (web app or console harness), not by the
scoring core. The core only ever sees the result template string.

Keys on disk are camelCase so existing plugin settings
files and templates keep working:
    resultTemplate, fileNamingConvention, defaultSaveLocation,
    showRibbonIcon, createResultFile
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_RESULT_TEMPLATE = (
    "# PERMA Profiler Results\n"
    "\n"
    "Date: {{date}}\n"
    "\n"
    "## Scores\n"
    "\n"
    "Positive Emotion: {{score_P}}\n"
    "Engagement: {{score_E}}\n"
    "Relationships: {{score_R}}\n"
    "Meaning: {{score_M}}\n"
    "Accomplishment: {{score_A}}\n"
    "\n"
    "## Interpretations\n"
    "\n"
    "{{interpretations}}"
)

# snake_case attribute -> camelCase key on disk
KEY_MAP = {
    'result_template': 'resultTemplate',
    'file_naming_convention': 'fileNamingConvention',
    'default_save_location': 'defaultSaveLocation',
    'show_ribbon_icon': 'showRibbonIcon',
    'create_result_file': 'createResultFile',
}


@dataclass
class ProfilerSettings:
    """
    User settings.

    Attributes:
        result_template: Template consumed by the Template Renderer
        file_naming_convention: Result filename, '{{date}}' is substituted
        default_save_location: Folder under the results root
        show_ribbon_icon: Show the quick-launch control in the UI
        create_result_file: Write the result to a file; when False the
                            result is only displayed
    """
    result_template: str = DEFAULT_RESULT_TEMPLATE
    file_naming_convention: str = "PERMA-Results-{{date}}"
    default_save_location: str = "/"
    show_ribbon_icon: bool = True
    create_result_file: bool = True

    def to_json(self) -> dict:
        """Serialize with on-disk (camelCase) keys"""
        return {KEY_MAP[name]: value for name, value in asdict(self).items()}

    @classmethod
    def from_json(cls, data: dict) -> "ProfilerSettings":
        """
        Merge stored values over defaults.

        Unknown keys are ignored (logged). A value whose type does not
        match the default's type is rejected.

        Raises:
            TypeError: If data is not a dict
            ValueError: If a known key has the wrong value type
        """
        if not isinstance(data, dict):
            raise TypeError(f"settings must be a JSON object, got {type(data).__name__}")

        reverse = {camel: snake for snake, camel in KEY_MAP.items()}
        defaults = cls()
        values = {}

        for key, value in data.items():
            name = reverse.get(key)
            if name is None:
                logger.warning(f"Ignoring unknown setting: {key}")
                continue

            expected = type(getattr(defaults, name))
            if not isinstance(value, expected):
                raise ValueError(
                    f"Setting '{key}' must be {expected.__name__}, got {type(value).__name__}"
                )
            values[name] = value

        return cls(**values)


def load_settings(path) -> ProfilerSettings:
    """
    Load settings from JSON, falling back to defaults when absent.

    Args:
        path: Settings file path

    Returns:
        ProfilerSettings: Stored values merged over defaults

    Raises:
        ValueError: If the file is not valid JSON or has bad values
    """
    settings_file = Path(path)

    if not settings_file.exists():
        logger.info(f"No settings file at {settings_file}, using defaults")
        return ProfilerSettings()

    with open(settings_file, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Settings file is not valid JSON: {settings_file}: {e}") from e

    settings = ProfilerSettings.from_json(data)
    logger.info(f"Settings loaded from {settings_file}")
    return settings


def save_settings(settings: ProfilerSettings, path) -> str:
    """
    Save settings to JSON.

    Returns:
        str: Absolute path to saved file

    Raises:
        OSError: If file cannot be written
    """
    settings_file = Path(path)
    settings_file.parent.mkdir(parents=True, exist_ok=True)

    with open(settings_file, 'w', encoding='utf-8') as f:
        json.dump(settings.to_json(), f, indent=2, ensure_ascii=False)

    abs_path = str(settings_file.absolute())
    logger.info(f"Settings saved to {abs_path}")
    return abs_path
