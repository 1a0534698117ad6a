"""
Server configuration management.

This module handles loading and accessing server configuration from multiple sources
with a clear priority order:

    1. Environment variables (highest priority) - for containerized deployments
    2. Config file (config/server.ini) - for static deployments
    3. Built-in defaults (lowest priority) - sensible fallbacks

Configuration is loaded once at module import time and cached. The ServerConfig
dataclass provides typed access to all settings.

Usage:
    from checkout_ledger.config import config

    print(config.server.port)
    print(config.chain.strict_append)

Environment Variable Mapping:
    LEDGER_HOST           -> server.host
    LEDGER_PORT           -> server.port
    LEDGER_PRODUCTION     -> security.production
    LEDGER_CORS_ORIGINS   -> security.cors_origins
    LEDGER_LOG_LEVEL      -> logging.level
    LEDGER_STRICT_APPEND  -> chain.strict_append
"""

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Project root directory (contains src/, config/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Config file paths
CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "server.ini"
CONFIG_EXAMPLE = CONFIG_DIR / "server.example.ini"


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================


@dataclass
class ServerSettings:
    """Network server configuration."""

    host: str = "0.0.0.0"  # nosec B104 - intentional for server binding
    port: int = 3000


@dataclass
class SecuritySettings:
    """Security-related configuration."""

    production: bool = False
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False
    cors_allow_methods: list[str] = field(default_factory=lambda: ["GET", "POST"])
    cors_allow_headers: list[str] = field(default_factory=lambda: ["*"])
    docs_enabled: Literal["auto", "enabled", "disabled"] = "auto"


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["simple", "detailed"] = "detailed"


@dataclass
class ChainSettings:
    """Checkout chain behaviour."""

    # Respond 409 to a rejected append instead of echoing the payload.
    strict_append: bool = False
    # Log every block of the chain when the server starts.
    log_on_startup: bool = True


@dataclass
class ServerConfig:
    """
    Complete server configuration.

    Aggregates all settings sections. Access via the module-level `config` singleton.
    """

    server: ServerSettings = field(default_factory=ServerSettings)
    security: SecuritySettings = field(default_factory=SecuritySettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    chain: ChainSettings = field(default_factory=ChainSettings)

    @property
    def is_production(self) -> bool:
        """Convenience property for production mode check."""
        return self.security.production

    @property
    def docs_should_be_enabled(self) -> bool:
        """Determine if API docs should be enabled based on settings."""
        if self.security.docs_enabled == "enabled":
            return True
        if self.security.docs_enabled == "disabled":
            return False
        # "auto" - follow production setting
        return not self.is_production


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def _parse_bool(value: str) -> bool:
    """Parse a string value to boolean."""
    return value.lower() in ("true", "yes", "1", "on", "enabled")


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string to list, stripping whitespace."""
    if not value or value.strip() == "":
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _load_from_ini(parser: configparser.ConfigParser, cfg: ServerConfig) -> None:
    """Load configuration from parsed INI file into ServerConfig."""
    # Server section
    if parser.has_section("server"):
        if parser.has_option("server", "host"):
            cfg.server.host = parser.get("server", "host")
        if parser.has_option("server", "port"):
            cfg.server.port = parser.getint("server", "port")

    # Security section
    if parser.has_section("security"):
        if parser.has_option("security", "production"):
            cfg.security.production = _parse_bool(parser.get("security", "production"))
        if parser.has_option("security", "cors_origins"):
            cfg.security.cors_origins = _parse_list(parser.get("security", "cors_origins"))
        if parser.has_option("security", "cors_allow_credentials"):
            cfg.security.cors_allow_credentials = _parse_bool(
                parser.get("security", "cors_allow_credentials")
            )
        if parser.has_option("security", "cors_allow_methods"):
            cfg.security.cors_allow_methods = _parse_list(
                parser.get("security", "cors_allow_methods")
            )
        if parser.has_option("security", "cors_allow_headers"):
            cfg.security.cors_allow_headers = _parse_list(
                parser.get("security", "cors_allow_headers")
            )
        if parser.has_option("security", "docs_enabled"):
            val = parser.get("security", "docs_enabled").lower()
            if val in ("auto", "enabled", "disabled"):
                cfg.security.docs_enabled = val  # type: ignore[assignment]

    # Logging section
    if parser.has_section("logging"):
        if parser.has_option("logging", "level"):
            cfg.logging.level = parser.get("logging", "level").upper()
        if parser.has_option("logging", "format"):
            val = parser.get("logging", "format").lower()
            if val in ("simple", "detailed"):
                cfg.logging.format = val  # type: ignore[assignment]

    # Chain section
    if parser.has_section("chain"):
        if parser.has_option("chain", "strict_append"):
            cfg.chain.strict_append = _parse_bool(parser.get("chain", "strict_append"))
        if parser.has_option("chain", "log_on_startup"):
            cfg.chain.log_on_startup = _parse_bool(parser.get("chain", "log_on_startup"))


def _apply_env_overrides(cfg: ServerConfig) -> None:
    """Apply environment variable overrides to configuration."""
    # Server settings
    if env_host := os.getenv("LEDGER_HOST"):
        cfg.server.host = env_host
    if env_port := os.getenv("LEDGER_PORT"):
        cfg.server.port = int(env_port)

    # Security settings
    if env_production := os.getenv("LEDGER_PRODUCTION"):
        cfg.security.production = _parse_bool(env_production)
    if env_cors := os.getenv("LEDGER_CORS_ORIGINS"):
        cfg.security.cors_origins = _parse_list(env_cors)

    # Logging settings
    if env_log := os.getenv("LEDGER_LOG_LEVEL"):
        cfg.logging.level = env_log.upper()

    # Chain settings
    if env_strict := os.getenv("LEDGER_STRICT_APPEND"):
        cfg.chain.strict_append = _parse_bool(env_strict)


def load_config() -> ServerConfig:
    """
    Load configuration from all sources with proper priority.

    Priority (highest wins):
        1. Environment variables
        2. config/server.ini
        3. config/server.example.ini (fallback for development)
        4. Built-in defaults

    Returns:
        ServerConfig: Fully populated configuration object.
    """
    cfg = ServerConfig()

    config_file = None
    if CONFIG_FILE.exists():
        config_file = CONFIG_FILE
    elif CONFIG_EXAMPLE.exists():
        # Use example as fallback for development
        config_file = CONFIG_EXAMPLE

    if config_file:
        parser = configparser.ConfigParser()
        parser.read(config_file)
        _load_from_ini(parser, cfg)

    # Apply environment variable overrides (highest priority)
    _apply_env_overrides(cfg)

    return cfg


def reload_config() -> "ServerConfig":
    """
    Reload configuration from disk and environment.

    This updates the module-level `config` singleton. It does not affect an
    application that has already been built.
    """
    global config
    config = load_config()
    return config


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

# Load configuration once at module import time
config = load_config()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_config_status() -> dict:
    """
    Get configuration status for diagnostics.

    Returns a dictionary with configuration source information.
    """
    return {
        "config_file_exists": CONFIG_FILE.exists(),
        "config_file_path": str(CONFIG_FILE),
        "using_example": not CONFIG_FILE.exists() and CONFIG_EXAMPLE.exists(),
        "production_mode": config.is_production,
        "docs_enabled": config.docs_should_be_enabled,
        "strict_append": config.chain.strict_append,
    }


def print_config_summary() -> None:
    """Print a summary of current configuration to stdout."""
    status = get_config_status()
    print("\n" + "=" * 60)
    print("CHECKOUT LEDGER CONFIGURATION")
    print("=" * 60)
    print(f"Config file: {status['config_file_path']}")
    print(f"File exists: {status['config_file_exists']}")
    if status["using_example"]:
        print("WARNING: Using example config (copy to server.ini for production)")
    print("-" * 60)
    print(f"Server:        {config.server.host}:{config.server.port}")
    print(f"Production:    {config.is_production}")
    print(f"CORS origins:  {config.security.cors_origins}")
    print(f"Docs enabled:  {config.docs_should_be_enabled}")
    print(f"Log level:     {config.logging.level}")
    print(f"Strict append: {config.chain.strict_append}")
    print("=" * 60 + "\n")
