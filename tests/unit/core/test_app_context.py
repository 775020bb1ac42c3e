"""
Unit tests for AppContext wiring.
"""
from core.app_context import AppContext
from core.config_loader import AppConfig, FilterConfig, PipelineConfig, SessionConfig
from core.llm.openai_service import OpenAIService
from tests.mocks.llm_mocks import ScriptedLLMProvider


def test_build_wires_config_into_components():
    config = AppConfig(
        pipeline=PipelineConfig(batch_size=10, max_parallel_batches=2, deep_analysis_cap=5, neutral_score=40),
        filter=FilterConfig(generic_tech_vocabulary=["elixir"], salary_slack=0.5),
        session=SessionConfig(ttl_minutes=7),
    )
    llm = ScriptedLLMProvider()

    ctx = AppContext.build(config, ai_service=llm)

    assert ctx.ai_service is llm
    assert ctx.pipeline.batch_scorer.batch_size == 10
    assert ctx.pipeline.batch_scorer.max_parallel == 2
    assert ctx.pipeline.batch_scorer.neutral_score == 40
    assert ctx.pipeline.deep_analyzer.cap == 5
    assert ctx.pipeline.filter_policy.generic_tech_vocabulary == ("elixir",)
    assert ctx.pipeline.filter_policy.salary_slack == 0.5
    assert ctx.session_store.ttl_minutes == 7


def test_build_creates_openai_service_from_llm_config():
    config = AppConfig()
    config.llm.api_key = "test"
    config.llm.model = "mistral-small"

    ctx = AppContext.build(config)

    assert isinstance(ctx.ai_service, OpenAIService)
    assert ctx.ai_service.model == "mistral-small"
    assert ctx.pipeline.query_parser.llm is ctx.ai_service
