from dataclasses import dataclass

from core.cache.session_cache import SessionStore
from core.config_loader import AppConfig, FilterConfig, LlmConfig
from core.filter.rule_filter import FilterPolicy
from core.llm.interfaces import LLMProvider
from core.llm.openai_service import OpenAIService
from core.query.parser import RoleQueryParser
from core.ranker.deep_analyzer import DeepAnalyzer
from core.scorer.batch_scorer import BatchScorer
from etl.orchestrator import CandidateETLService
from pipeline.runner import SelectionPipeline


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Built once per process; the web app keeps it on ``app.state`` and the
    CLI builds its own.
    """
    config: AppConfig
    ai_service: LLMProvider
    etl_service: CandidateETLService
    session_store: SessionStore
    pipeline: SelectionPipeline

    @classmethod
    def build(cls, config: AppConfig, ai_service: LLMProvider = None) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            ai_service: Completion provider to use instead of one built from ``config.llm``

        Returns:
            Fully wired AppContext instance
        """
        ai_service = ai_service or cls._build_ai_service(config.llm)

        pipeline = SelectionPipeline(
            query_parser=RoleQueryParser(ai_service),
            batch_scorer=BatchScorer(
                ai_service,
                batch_size=config.pipeline.batch_size,
                max_parallel=config.pipeline.max_parallel_batches,
                neutral_score=config.pipeline.neutral_score,
            ),
            deep_analyzer=DeepAnalyzer(ai_service, cap=config.pipeline.deep_analysis_cap),
            filter_policy=cls._build_filter_policy(config.filter),
        )

        session_store = SessionStore(
            ttl_minutes=config.session.ttl_minutes,
            sweep_interval_seconds=config.session.sweep_interval_seconds,
        )

        return cls(
            config=config,
            ai_service=ai_service,
            etl_service=CandidateETLService(),
            session_store=session_store,
            pipeline=pipeline,
        )

    @staticmethod
    def _build_ai_service(llm_config: LlmConfig) -> OpenAIService:
        """Build OpenAI-compatible completion service from LLM configuration."""
        return OpenAIService(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            model=llm_config.model,
            max_retries=llm_config.max_retries,
            retry_delay_seconds=llm_config.retry_delay_seconds,
            request_timeout_seconds=llm_config.request_timeout_seconds,
        )

    @staticmethod
    def _build_filter_policy(filter_config: FilterConfig) -> FilterPolicy:
        return FilterPolicy(
            generic_tech_vocabulary=tuple(filter_config.generic_tech_vocabulary),
            min_experience_slack=filter_config.min_experience_slack,
            max_experience_slack=filter_config.max_experience_slack,
            salary_slack=filter_config.salary_slack,
        )
