"""Selection pipeline runner.

Turns a normalized candidate pool and a free-text hiring query into ranked
selections, reporting progress through an injected callback. Used by both
main.py and the web application.
"""

import logging
import time
from typing import List, Optional

from core.exceptions import CompletionServiceError, QueryParseError, TalentSiftError
from core.filter.rule_filter import FilterCriteria, FilterPolicy, apply_rule_based_filter
from core.query.models import ParsedQuery, RoleRequirement
from core.query.parser import RoleQueryParser
from core.ranker.deep_analyzer import DeepAnalyzer
from core.ranker.models import FinalSelection
from core.scorer.batch_scorer import BatchScorer
from etl.candidates.models import NormalizedCandidate
from pipeline.progress import (
    ANALYZING_START,
    COMPLETION_START,
    PARSING_END,
    SCORING_START,
    ProcessingProgress,
    ProgressCallback,
    ProgressLevel,
    ProgressStage,
    RoleBand,
)

logger = logging.getLogger(__name__)


def _noop(event: ProcessingProgress) -> None:
    pass


class SelectionPipeline:
    """parsing -> (filtering -> scoring -> analyzing) per role -> complete.

    Roles run strictly in order. A role with no matching candidates or a
    failed deep analysis is reported and skipped; a query that cannot be
    parsed ends the run with an error event.
    """

    def __init__(
        self,
        query_parser: RoleQueryParser,
        batch_scorer: BatchScorer,
        deep_analyzer: DeepAnalyzer,
        filter_policy: Optional[FilterPolicy] = None,
    ):
        self.query_parser = query_parser
        self.batch_scorer = batch_scorer
        self.deep_analyzer = deep_analyzer
        self.filter_policy = filter_policy or FilterPolicy()

    def run(
        self,
        candidates: List[NormalizedCandidate],
        query: str,
        send_progress: Optional[ProgressCallback] = None,
    ) -> List[FinalSelection]:
        send = send_progress or _noop
        run_start = time.time()

        logger.info("=" * 60)
        logger.info(f"STARTING SELECTION RUN ({len(candidates)} candidates)")
        logger.info("=" * 60)

        try:
            send(ProcessingProgress(
                stage=ProgressStage.PARSING,
                message="Understanding your requirements...",
                percentage=0,
            ))
            try:
                parsed = self.query_parser.parse(query)
            except (QueryParseError, CompletionServiceError) as e:
                logger.error(f"Could not parse query: {e}")
                send(ProcessingProgress(
                    stage=ProgressStage.ERROR,
                    level=ProgressLevel.ERROR,
                    message=f"Could not understand the hiring request: {e}",
                    percentage=0,
                ))
                return []

            send(ProcessingProgress(
                stage=ProgressStage.PARSING,
                message=self._describe_roles(parsed),
                percentage=PARSING_END,
            ))

            selections: List[FinalSelection] = []
            for index, role in enumerate(parsed.roles):
                band = RoleBand.for_role(index, len(parsed.roles))
                selections.extend(self._run_role(candidates, role, band, send))

        except Exception as e:
            logger.error(f"Selection run failed: {e}", exc_info=True)
            send(ProcessingProgress(
                stage=ProgressStage.ERROR,
                level=ProgressLevel.ERROR,
                message=f"Processing failed: {e}",
                percentage=0,
            ))
            return []

        send(ProcessingProgress(
            stage=ProgressStage.COMPLETE,
            message=f"Found {len(selections)} perfect candidates!",
            percentage=100,
            results=[s.to_dict() for s in selections],
        ))

        logger.info("=" * 60)
        logger.info(f"SELECTION RUN COMPLETE: {len(selections)} selections in {time.time() - run_start:.2f}s")
        logger.info("=" * 60)
        return selections

    @staticmethod
    def _describe_roles(parsed: ParsedQuery) -> str:
        titles = ', '.join(f"{r.count} {r.title}" for r in parsed.roles)
        return f"Looking for {parsed.total_positions} position(s): {titles}"

    def _run_role(
        self,
        candidates: List[NormalizedCandidate],
        role: RoleRequirement,
        band: RoleBand,
        send: ProgressCallback,
    ) -> List[FinalSelection]:
        logger.info(f"=== ROLE: {role.title} (count={role.count}) ===")

        send(ProcessingProgress(
            stage=ProgressStage.FILTERING,
            role=role.title,
            message=f"Pre-filtering candidates for {role.title}...",
            percentage=band.at(0),
            total_candidates=len(candidates),
        ))
        filtered = apply_rule_based_filter(candidates, FilterCriteria.from_role(role), self.filter_policy)
        logger.info(f"Filter kept {len(filtered)}/{len(candidates)} candidates for {role.title}")

        if not filtered:
            send(ProcessingProgress(
                stage=ProgressStage.ERROR,
                level=ProgressLevel.WARNING,
                role=role.title,
                message=f"No candidates match the requirements for {role.title}. Try broadening your criteria.",
                percentage=band.at(1),
                candidates_processed=0,
                total_candidates=len(candidates),
            ))
            return []

        send(ProcessingProgress(
            stage=ProgressStage.FILTERING,
            role=role.title,
            message=f"Filtered to {len(filtered)} candidates for {role.title}",
            percentage=band.at(SCORING_START),
            candidates_processed=len(filtered),
            total_candidates=len(candidates),
        ))

        def on_batch(batch_number: int, total_batches: int) -> None:
            send(ProcessingProgress(
                stage=ProgressStage.SCORING,
                role=role.title,
                message=f"Scoring batch {batch_number} of {total_batches} for {role.title}...",
                percentage=band.scoring(batch_number, total_batches),
                current_batch=batch_number,
                total_batches=total_batches,
                total_candidates=len(filtered),
            ))

        scored = self.batch_scorer.score(filtered, role, on_progress=on_batch)

        send(ProcessingProgress(
            stage=ProgressStage.ANALYZING,
            role=role.title,
            message=f"Performing deep analysis for {role.title}...",
            percentage=band.at(ANALYZING_START),
            candidates_processed=min(len(scored), self.deep_analyzer.cap),
            total_candidates=len(scored),
        ))
        try:
            selections = self.deep_analyzer.analyze(scored, role, role.count)
        except Exception as e:
            logger.error(f"Deep analysis failed for {role.title}: {e}", exc_info=not isinstance(e, TalentSiftError))
            send(ProcessingProgress(
                stage=ProgressStage.ERROR,
                level=ProgressLevel.ERROR,
                role=role.title,
                message=f"Deep analysis failed for {role.title}: {e}",
                percentage=band.at(1),
            ))
            return []

        send(ProcessingProgress(
            stage=ProgressStage.ANALYZING,
            role=role.title,
            message=f"Selected {len(selections)} of {role.count} requested for {role.title}",
            percentage=band.at(COMPLETION_START),
            candidates_processed=len(selections),
        ))
        return selections
