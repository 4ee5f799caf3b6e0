"""
Run Settings

Validated configuration for a single copynotice run, assembled from an
optional YAML file and the command line.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from copynotice.core.exceptions import ConfigError
from copynotice.core.models import (
    DirectoryPair, DEFAULT_PREFIX, MAX_PREFIX_LENGTH, MAX_EXTENSION_LENGTH,
    ILLEGAL_PATH_CHARS, ILLEGAL_EXTENSION_CHARS
)
from copynotice.logging import get_logger
from copynotice.utils.config_loader import parse_bool

logger = get_logger(__name__)

_SEPARATORS = ("/", "\\")


@dataclass
class RunSettings:
    """Everything the run needs, already validated by validate()"""
    directories: List[DirectoryPair] = field(default_factory=list)
    extensions: List[str] = field(default_factory=list)
    notice: bytes = b""
    prefix: bytes = DEFAULT_PREFIX
    recurse: bool = False
    replace: bool = False
    verbose: bool = False

    def validate(self) -> "RunSettings":
        """
        Check every field.

        Returns:
            self, so construction and validation can be chained

        Raises:
            ConfigError: On the first invalid field
        """
        if not self.directories:
            raise ConfigError("No directories specified. Use --dir SRC DST.")
        if not self.extensions:
            raise ConfigError("No target extensions specified. Use --ext EXT.")
        if not self.notice:
            raise ConfigError("No notice specified. Use --note or --notef.")
        for pair in self.directories:
            validate_directory_pair(pair)
        for extension in self.extensions:
            validate_extension(extension)
        validate_prefix(self.prefix)
        return self


def validate_directory_pair(pair: DirectoryPair) -> None:
    if pair.source.endswith(_SEPARATORS):
        raise ConfigError(f"Directory \"{pair.source}\" (src): do not use a trailing slash.")
    if not pair.destination:
        raise ConfigError("Directory destination (dst) cannot be empty.")
    if pair.destination.endswith(_SEPARATORS):
        raise ConfigError(f"Directory \"{pair.destination}\" (dst): do not use a trailing slash.")
    for path in (pair.source, pair.destination):
        if any(ch in ILLEGAL_PATH_CHARS for ch in path):
            raise ConfigError(f"Directory \"{path}\" contains an illegal character.")


def validate_extension(extension: str) -> None:
    if not extension:
        raise ConfigError("Extension cannot be blank.")
    if len(extension) > MAX_EXTENSION_LENGTH:
        raise ConfigError(f"Extension \"{extension}\" is too long (max {MAX_EXTENSION_LENGTH} characters).")
    if any(ch in ILLEGAL_EXTENSION_CHARS for ch in extension):
        raise ConfigError(f"Extension \"{extension}\" contains an illegal character.")


def validate_prefix(prefix: bytes) -> None:
    if not prefix:
        raise ConfigError("Comment prefix must not be blank.")
    if len(prefix) > MAX_PREFIX_LENGTH:
        raise ConfigError(f"Comment prefix cannot exceed {MAX_PREFIX_LENGTH} bytes.")


def encode_text(value: Any, name: str) -> bytes:
    if isinstance(value, bytes):
        return value
    if not isinstance(value, str):
        raise ConfigError(f"'{name}' must be a string, got {type(value).__name__}")
    return value.encode("utf-8")


def read_notice_file(path: str) -> bytes:
    """Raw notice bytes; CRLF line breaks are kept as they are on disk."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ConfigError(f"Could not read notice file \"{path}\": {e}") from e


def parse_directory(entry: Any) -> DirectoryPair:
    """Accepts {source, destination} mappings and [src, dst] pairs."""
    if isinstance(entry, DirectoryPair):
        return entry
    if isinstance(entry, dict):
        if "destination" not in entry:
            raise ConfigError(f"Directory entry {entry!r} lacks 'destination'")
        source, destination = entry.get("source") or "", entry["destination"]
    elif isinstance(entry, (list, tuple)) and len(entry) == 2:
        source, destination = entry
    else:
        raise ConfigError(f"Invalid directory entry: {entry!r}")
    if not isinstance(source, str) or not isinstance(destination, str):
        raise ConfigError(f"Directory entry {entry!r} must hold strings")
    return DirectoryPair(source=source, destination=destination)


def _as_list(value: Any, name: str) -> list:
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        return [value]
    if not isinstance(value, list):
        raise ConfigError(f"'{name}' must be a list")
    return value


def _flag(value: Any, name: str) -> bool:
    if isinstance(value, str):
        return parse_bool(name, value)
    return bool(value)


def _resolve_notice(note: Optional[str], note_file: Optional[str], origin: str) -> Optional[bytes]:
    if note is not None and note_file is not None:
        raise ConfigError(f"Notice string already supplied ({origin} sets both notice and notice file).")
    if note is not None:
        return encode_text(note, "notice")
    if note_file is not None:
        return read_notice_file(note_file)
    return None


def build_settings(file_config: Optional[Dict[str, Any]] = None,
                   cli: Optional[Dict[str, Any]] = None) -> RunSettings:
    """
    Merge a YAML config mapping with command-line values and validate.

    Lists (directories, extensions) from the command line extend those from
    the file; scalar values from the command line override them. Boolean
    flags are switched on by either source.

    Args:
        file_config: Mapping loaded by ConfigLoader (may be empty)
        cli: Mapping with keys directories, extensions, note, notef,
             syntax, recurse, replace, verbose

    Raises:
        ConfigError: If the merged configuration is invalid
    """
    file_config = file_config or {}
    cli = cli or {}

    directories = [parse_directory(entry) for entry in _as_list(file_config.get("directories"), "directories")]
    directories += [parse_directory(entry) for entry in cli.get("directories") or []]

    extensions = [str(ext) for ext in _as_list(file_config.get("extensions"), "extensions")]
    extensions += list(cli.get("extensions") or [])

    notice = _resolve_notice(cli.get("note"), cli.get("notef"), "command line")
    if notice is None:
        notice = _resolve_notice(file_config.get("notice"), file_config.get("notice_file"), "configuration file")

    prefix = DEFAULT_PREFIX
    if cli.get("syntax") is not None:
        prefix = encode_text(cli["syntax"], "syntax")
    elif file_config.get("prefix") is not None:
        prefix = encode_text(file_config["prefix"], "prefix")

    settings = RunSettings(
        directories=directories,
        extensions=extensions,
        notice=notice or b"",
        prefix=prefix,
        recurse=_flag(file_config.get("recurse"), "recurse") or bool(cli.get("recurse")),
        replace=_flag(file_config.get("replace"), "replace") or bool(cli.get("replace")),
        verbose=_flag(file_config.get("verbose"), "verbose") or bool(cli.get("verbose")),
    )
    settings.validate()

    logger.debug(
        "Settings built",
        extra={'extra_fields': {
            'directories': len(settings.directories),
            'extensions': settings.extensions,
            'recurse': settings.recurse,
            'replace': settings.replace
        }}
    )
    return settings
