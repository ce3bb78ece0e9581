"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from web_test_automation.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.executor.click_timeout_ms)
    10000
"""

import os
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class BrowserSettings(BaseModel):
    """
    Browser automation settings.
    
    Attributes:
        headless: Run browser in headless mode
        browser_type: Playwright browser engine to launch
        channel: Optional branded browser channel (chrome, msedge)
        viewport_width: Browser viewport width in pixels
        viewport_height: Browser viewport height in pixels
        launch_args: Extra command-line switches passed to the browser
        slow_mo: Slow down operations by this amount (ms) - useful for debugging
    """
    headless: bool = True
    browser_type: Literal["chromium", "firefox", "webkit"] = "chromium"
    channel: Optional[str] = None
    viewport_width: int = Field(default=1920, ge=320, le=3840)
    viewport_height: int = Field(default=1080, ge=240, le=2160)
    launch_args: List[str] = Field(
        default_factory=lambda: [
            "--disable-web-security",
            "--disable-features=VizDisplayCompositor",
        ]
    )
    slow_mo: int = Field(default=0, ge=0, le=5000)


class LLMSettings(BaseModel):
    """
    Settings for the model that turns prompts into scenarios.
    
    Attributes:
        model: Model name/identifier
        api_key: API key (falls back to OPENAI_API_KEY)
        base_url: OpenAI-compatible API root (no /v1 suffix)
        temperature: Sampling temperature
        max_tokens: Maximum tokens in response
        timeout: Request timeout in seconds
        min_call_interval_s: Minimum spacing between successive model calls
        cache_size: Number of parsed prompts kept in memory
    """
    model: str = "gpt-3.5-turbo"
    api_key: Optional[SecretStr] = None
    base_url: str = "https://api.openai.com"
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1000, ge=1, le=128000)
    timeout: int = Field(default=60, ge=5, le=300)
    min_call_interval_s: float = Field(default=2.0, ge=0.0, le=60.0)
    cache_size: int = Field(default=50, ge=0, le=10000)

    def resolve_api_key(self) -> Optional[str]:
        """Return the configured key, or OPENAI_API_KEY from the environment."""
        if self.api_key is not None:
            return self.api_key.get_secret_value()
        return os.environ.get("OPENAI_API_KEY")


class ExecutorSettings(BaseModel):
    """
    Timeouts, retries and settle delays used by the action executor.
    
    All durations are in milliseconds.
    """
    navigation_timeout_ms: int = Field(default=30000, ge=0)
    navigation_attempts: int = Field(default=3, ge=1, le=10)
    navigation_retry_delay_ms: int = Field(default=2000, ge=0)
    navigation_settle_ms: int = Field(default=1000, ge=0)
    
    click_timeout_ms: int = Field(default=10000, ge=0)
    click_attempts: int = Field(default=3, ge=1, le=10)
    click_retry_delay_ms: int = Field(default=1000, ge=0)
    click_settle_ms: int = Field(default=1000, ge=0)
    
    # Clicks whose target mentions one of these words get a longer settle
    navigation_keywords: List[str] = Field(
        default_factory=lambda: ["product", "dashboard", "menu", "nav"]
    )
    navigation_click_settle_ms: int = Field(default=2000, ge=0)
    post_click_idle_timeout_ms: int = Field(default=5000, ge=0)
    
    # False falls back to Playwright's case-insensitive substring text match
    exact_text_match: bool = True
    diagnostics_limit: int = Field(default=5, ge=0, le=50)


class RunnerSettings(BaseModel):
    """
    Scenario runner settings.
    
    Attributes:
        inter_action_delay_ms: Pause between two actions of the same scenario
    """
    inter_action_delay_ms: int = Field(default=1500, ge=0, le=60000)


class ReportSettings(BaseModel):
    """
    Test report settings.
    
    Attributes:
        output_path: Where the JSON report is written
    """
    output_path: str = "test-report.json"


class LoggingSettings(BaseModel):
    """
    Logging configuration.
    
    Attributes:
        level: Log level
        file: Log file path (None for console only)
        json_format: Use JSON format for the log file
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = None
    json_format: bool = False


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.
    
    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Environment variables (prefixed with WEB_TEST_AUTOMATION__)
    3. Config file (YAML, applied by ConfigLoader)
    4. Default values
    
    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(browser=BrowserSettings(headless=False))  # Override
    """
    
    model_config = SettingsConfigDict(
        env_prefix="WEB_TEST_AUTOMATION__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
    
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    executor: ExecutorSettings = Field(default_factory=ExecutorSettings)
    runner: RunnerSettings = Field(default_factory=RunnerSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    
    debug: bool = False
    
    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.
        
        Args:
            overrides: Dictionary of values to override
            
        Returns:
            New Settings instance with overrides applied
        """
        current = self.model_dump()
        
        def deep_merge(base: dict, updates: dict) -> dict:
            for key, value in updates.items():
                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value)
                else:
                    base[key] = value
            return base
        
        merged = deep_merge(current, overrides)
        return Settings(**merged)
