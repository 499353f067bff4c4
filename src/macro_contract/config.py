"""
Runtime Configuration Store.

Settings are read from the `[tool.macro_contract]` table of the nearest
`pyproject.toml` and may be overridden from the command line.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

TOOL_SECTION = "macro_contract"


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the macro engine.
  """

  strict_mode: bool = Field(
    False,
    description="If True, an attribute macro that leaves its item unchanged is an error. If False, pass through.",
  )
  script_paths: List[Path] = Field(default_factory=list, description="External directories to scan for macro scripts.")
  script_settings: Dict[str, Any] = Field(default_factory=dict, description="Free-form settings for macro scripts.")

  def parse_script_settings(self, schema: Type[T]) -> T:
    """
    Validates the raw script settings dictionary against a specific Pydantic model.

    Args:
        schema (Type[T]): The Pydantic model class defining expected settings.

    Returns:
        T: An instance of the schema model populated with runtime values.

    Raises:
        ValueError: If the settings do not satisfy the schema.
    """
    try:
      return schema.model_validate(self.script_settings)
    except ValidationError as e:
      raise ValueError(f"Script configuration validation failed: {e}")

  @classmethod
  def load(
    cls,
    strict_mode: Optional[bool] = None,
    script_settings: Optional[Dict[str, Any]] = None,
    script_paths: Optional[List[Path]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        strict_mode (Optional[bool]): Override for strict mode setting.
        script_settings (Optional[Dict]): Additional CLI script settings.
        script_paths (Optional[List[Path]]): Extra script directories from the CLI.
            These are appended to the ones found in TOML.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)

    if strict_mode is not None:
      final_strict = strict_mode
    else:
      final_strict = bool(toml_config.get("strict_mode", False))

    toml_settings = toml_config.get("script_settings", {})
    final_settings = {**toml_settings, **(script_settings or {})}

    raw_paths = toml_config.get("script_paths", [])
    if toml_dir:
      final_paths = [(toml_dir / Path(p)).resolve() for p in raw_paths]
    else:
      final_paths = [Path(p).resolve() for p in raw_paths]
    final_paths.extend(Path(p).resolve() for p in script_paths or [])

    return cls(
      strict_mode=final_strict,
      script_settings=final_settings,
      script_paths=final_paths,
    )


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable %s: %s", toml_path, e)
        return {}, None

      return data.get("tool", {}).get(TOOL_SECTION, {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Types are inferred (int, float, bool, or string).

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed dictionary.
  """
  if not items:
    return {}

  config: Dict[str, Any] = {}
  for item in items:
    if "=" not in item:
      logger.warning("Ignoring invalid config format: '%s'. Expected 'key=value'.", item)
      continue

    key, val_str = item.split("=", 1)
    key = key.strip()
    val_str = val_str.strip()

    final_val: Any = val_str

    if val_str.lower() == "true":
      final_val = True
    elif val_str.lower() == "false":
      final_val = False
    else:
      try:
        if "." in val_str or "e" in val_str:
          final_val = float(val_str)
        else:
          final_val = int(val_str)
      except ValueError:
        pass

    config[key] = final_val

  return config
