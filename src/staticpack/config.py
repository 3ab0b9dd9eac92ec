"""Configuration management for staticpack.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from staticpack.resolver import Mode

CONFIG_FILENAME = "staticpack.toml"


@dataclass
class GenerateConfig:
    """Artifact generation configuration."""

    input: Path | None = None
    output: Path | None = None
    tag: str | None = None
    workers: int = 1


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 3000
    max_age: int = 31536000


@dataclass
class AssetsConfig:
    """Runtime asset resolution configuration."""

    mode: Mode = Mode.COMPILED
    base_dir: Path | None = None
    artifact: str | None = None
    tags: list[str] = field(default_factory=list)


@dataclass
class Config:
    """Application configuration."""

    generate: GenerateConfig
    server: ServerConfig
    assets: AssetsConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for staticpack.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(
            generate=GenerateConfig(),
            server=ServerConfig(),
            assets=AssetsConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        config_dir = path.parent

        return cls(
            generate=cls._parse_generate(data.get("generate"), config_dir),
            server=cls._parse_server(data.get("server")),
            assets=cls._parse_assets(data.get("assets"), config_dir),
            config_path=path,
        )

    @classmethod
    def _parse_generate(cls, data: object, config_dir: Path) -> GenerateConfig:
        """Parse generate configuration section.

        Args:
            data: Raw generate section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            GenerateConfig instance
        """
        if data is None:
            return GenerateConfig()

        if not isinstance(data, dict):
            raise ValueError("generate section must be a dictionary")

        input_dir = _optional_str(data, "input", "generate.input")
        output = _optional_str(data, "output", "generate.output")
        tag = _optional_str(data, "tag", "generate.tag")

        workers = data.get("workers", 1)
        if not isinstance(workers, int) or isinstance(workers, bool) or workers < 1:
            raise ValueError("generate.workers must be a positive integer")

        return GenerateConfig(
            input=config_dir / input_dir if input_dir is not None else None,
            output=config_dir / output if output is not None else None,
            tag=tag,
            workers=workers,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section."""
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 3000)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        max_age = data.get("max_age", 31536000)
        if not isinstance(max_age, int) or isinstance(max_age, bool) or max_age < 0:
            raise ValueError("server.max_age must be a non-negative integer")

        return ServerConfig(host=host, port=port, max_age=max_age)

    @classmethod
    def _parse_assets(cls, data: object, config_dir: Path) -> AssetsConfig:
        """Parse assets configuration section.

        The artifact setting is resolved against config_dir only when it looks
        like a file path; dotted module names are kept as they are.
        """
        if data is None:
            return AssetsConfig()

        if not isinstance(data, dict):
            raise ValueError("assets section must be a dictionary")

        mode_raw = data.get("mode", Mode.COMPILED.value)
        try:
            mode = Mode(mode_raw)
        except ValueError:
            choices = ", ".join(m.value for m in Mode)
            raise ValueError(f"assets.mode must be one of: {choices}") from None

        base_dir = _optional_str(data, "base_dir", "assets.base_dir")

        artifact = _optional_str(data, "artifact", "assets.artifact")
        if artifact is not None and artifact.endswith(".py"):
            artifact = str(config_dir / artifact)

        tags_raw = data.get("tags", [])
        if not isinstance(tags_raw, list):
            raise ValueError("assets.tags must be a list")
        tags: list[str] = []
        for item in tags_raw:
            if not isinstance(item, str):
                raise ValueError("assets.tags items must be strings")
            tags.append(item)

        return AssetsConfig(
            mode=mode,
            base_dir=config_dir / base_dir if base_dir is not None else None,
            artifact=artifact,
            tags=tags,
        )

    def with_overrides(
        self,
        *,
        input_dir: Path | None = None,
        output: Path | None = None,
        tag: str | None = None,
        workers: int | None = None,
        host: str | None = None,
        port: int | None = None,
        mode: Mode | None = None,
        base_dir: Path | None = None,
        artifact: str | None = None,
        tags: list[str] | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Returns:
            New Config instance with overrides applied
        """
        generate = replace(
            self.generate,
            input=input_dir if input_dir is not None else self.generate.input,
            output=output if output is not None else self.generate.output,
            tag=tag if tag is not None else self.generate.tag,
            workers=workers if workers is not None else self.generate.workers,
        )

        server = replace(
            self.server,
            host=host if host is not None else self.server.host,
            port=port if port is not None else self.server.port,
        )

        assets = replace(
            self.assets,
            mode=mode if mode is not None else self.assets.mode,
            base_dir=base_dir if base_dir is not None else self.assets.base_dir,
            artifact=artifact if artifact is not None else self.assets.artifact,
            tags=tags if tags is not None else self.assets.tags,
        )

        return replace(self, generate=generate, server=server, assets=assets)


def _optional_str(data: dict, key: str, name: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    return value
