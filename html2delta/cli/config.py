"""YAML options file loading and validation.

This module handles loading and saving converter options from YAML files.
Every field is optional; missing fields take the ConverterOptions defaults.

Options file structure:
    parser: lxml
    collapse_whitespace: true
    drop_left_align: false
    skip_tags: [script, style, head, title, template, noscript]
    embed_video_tags: [video, iframe]
"""

import os
from typing import Any, Dict

import yaml

from html2delta.converter.models import ConverterOptions

from .errors import ConfigError, FilesystemError


class ConfigLoader:
    """Handles options file loading, validation, and saving."""

    # BeautifulSoup tree builders that produce HTML trees
    SUPPORTED_PARSERS = {'lxml', 'html.parser', 'html5lib'}

    BOOLEAN_FIELDS = ('collapse_whitespace', 'drop_left_align')
    TAG_LIST_FIELDS = ('skip_tags', 'embed_video_tags')

    @classmethod
    def load(cls, config_path: str) -> ConverterOptions:
        """Load and parse options from a YAML file.

        Args:
            config_path: Path to the YAML options file

        Returns:
            ConverterOptions object with parsed options

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If the options file is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(
                config_path,
                'read',
                'Options file not found'
            )
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        # An empty file means all defaults
        if config_dict is None:
            return ConverterOptions()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Options must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, options: ConverterOptions) -> None:
        """Save options to a YAML file.

        Args:
            config_path: Path to the YAML options file
            options: ConverterOptions object to save

        Raises:
            FilesystemError: If file cannot be written
        """
        config_dict = {
            'parser': options.parser,
            'collapse_whitespace': options.collapse_whitespace,
            'drop_left_align': options.drop_left_align,
            'skip_tags': sorted(options.skip_tags),
            'embed_video_tags': sorted(options.embed_video_tags),
        }

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise FilesystemError(
                    config_dir,
                    'create_directory',
                    str(e)
                )

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(
                config_path,
                'write',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'write',
                str(e)
            )

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> ConverterOptions:
        """Parse and validate an options dictionary.

        Args:
            config_dict: Raw options dictionary from YAML

        Returns:
            Validated ConverterOptions object

        Raises:
            ConfigError: If an option is invalid
        """
        known_fields = {'parser'} | set(cls.BOOLEAN_FIELDS) | set(cls.TAG_LIST_FIELDS)
        unknown_fields = set(config_dict.keys()) - known_fields
        if unknown_fields:
            raise ConfigError(
                f"Unknown fields: {', '.join(sorted(str(f) for f in unknown_fields))}"
            )

        values: Dict[str, Any] = {}

        if 'parser' in config_dict:
            parser = config_dict['parser']
            if not isinstance(parser, str) or parser not in cls.SUPPORTED_PARSERS:
                raise ConfigError(
                    f"Unsupported parser {parser!r}, expected one of: "
                    f"{', '.join(sorted(cls.SUPPORTED_PARSERS))}",
                    'parser'
                )
            values['parser'] = parser

        for name in cls.BOOLEAN_FIELDS:
            if name in config_dict:
                value = config_dict[name]
                if not isinstance(value, bool):
                    raise ConfigError(
                        f"Field '{name}' must be true or false, got {value!r}",
                        name
                    )
                values[name] = value

        for name in cls.TAG_LIST_FIELDS:
            if name in config_dict:
                raw = config_dict[name]
                if raw is None:
                    raw = []
                if not isinstance(raw, list):
                    raise ConfigError(
                        f"Field '{name}' must be a list of tag names",
                        name
                    )
                tags = [str(tag).strip().lower() for tag in raw]
                if any(not tag for tag in tags):
                    raise ConfigError(
                        f"Field '{name}' cannot contain empty tag names",
                        name
                    )
                values[name] = frozenset(tags)

        return ConverterOptions(**values)
