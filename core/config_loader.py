import yaml
import os
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from core.filter.rule_filter import DEFAULT_GENERIC_TECH_VOCABULARY


class LlmConfig(BaseModel):
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    model: str = "mistral-medium"
    max_retries: int = 3
    retry_delay_seconds: float = 1.0  # grows linearly with each attempt
    request_timeout_seconds: Optional[float] = None


class PipelineConfig(BaseModel):
    """Batch scoring and deep analysis limits."""
    batch_size: int = Field(default=100, ge=1)
    max_parallel_batches: int = Field(default=3, ge=1)
    deep_analysis_cap: int = Field(default=50, ge=1)  # top-N scored candidates sent to deep analysis
    neutral_score: float = 50.0  # assigned when a batch cannot be scored


class FilterConfig(BaseModel):
    """Rule-based pre-filter slack and vocabulary."""
    generic_tech_vocabulary: List[str] = Field(default_factory=lambda: list(DEFAULT_GENERIC_TECH_VOCABULARY))
    min_experience_slack: float = 1.0
    max_experience_slack: float = 2.0
    salary_slack: float = 0.2


class SessionConfig(BaseModel):
    ttl_minutes: int = 60
    sweep_interval_seconds: int = 600


class UploadConfig(BaseModel):
    max_file_size_bytes: int = 50 * 1024 * 1024


class WebConfig(BaseModel):
    """Web server configuration."""
    host: str = "0.0.0.0"
    port: int = 8080


class AppConfig(BaseModel):
    llm: LlmConfig = Field(default_factory=LlmConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    filter: FilterConfig = Field(default_factory=FilterConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    web: WebConfig = Field(default_factory=WebConfig)


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    if not isinstance(data.get(name), dict):
        data[name] = {}
    return data[name]


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to the raw config dict."""
    env_base_url = os.environ.get("LLM_BASE_URL")
    if env_base_url:
        _section(data, 'llm')['base_url'] = env_base_url

    env_api_key = (
        os.environ.get("LLM_API_KEY")
        or os.environ.get("MISTRAL_API_KEY")
        or os.environ.get("OPENAI_API_KEY")
    )
    if env_api_key:
        _section(data, 'llm')['api_key'] = env_api_key

    env_model = os.environ.get("LLM_MODEL")
    if env_model:
        _section(data, 'llm')['model'] = env_model

    if os.environ.get("CACHE_TTL_MINUTES"):
        _section(data, 'session')['ttl_minutes'] = int(os.environ["CACHE_TTL_MINUTES"])

    if os.environ.get("MAX_FILE_SIZE"):
        _section(data, 'upload')['max_file_size_bytes'] = int(os.environ["MAX_FILE_SIZE"])

    if os.environ.get("WEB_HOST"):
        _section(data, 'web')['host'] = os.environ["WEB_HOST"]

    if os.environ.get("WEB_PORT"):
        _section(data, 'web')['port'] = int(os.environ["WEB_PORT"])

    return data


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from another dir), try the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    return AppConfig(**_apply_env_overrides(data))
