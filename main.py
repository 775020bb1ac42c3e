import sys
import json
import time
import logging
import argparse

from core.app_context import AppContext
from core.config_loader import load_config
from core.exceptions import TalentSiftError
from pipeline.progress import ProcessingProgress, ProgressLevel
from web.backend.services.export_service import selections_to_csv

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def log_progress(event: ProcessingProgress) -> None:
    """Print a progress event as a log line."""
    level = logging.INFO
    if event.level == ProgressLevel.WARNING:
        level = logging.WARNING
    elif event.level == ProgressLevel.ERROR:
        level = logging.ERROR
    logger.log(level, f"[{event.stage.value:>9}] {event.percentage:5.1f}% {event.message}")


def run_offline(ctx: AppContext, file_path: str, query: str, export_path: str = None) -> int:
    """Run the whole selection over a local candidate file."""
    logger.info(f"Loading candidates from {file_path}")
    try:
        with open(file_path, 'rb') as f:
            content = f.read()
    except FileNotFoundError:
        logger.error(f"Candidate file not found: {file_path}")
        return 1

    try:
        result = ctx.etl_service.ingest(content)
    except TalentSiftError as e:
        logger.error(f"Could not load candidates: {e}")
        return 1

    start = time.time()
    selections = ctx.pipeline.run(result.candidates, query, log_progress)
    logger.info(f"=== Run completed in {time.time() - start:.2f}s ===")

    rows = [s.to_dict() for s in selections]
    if export_path:
        with open(export_path, 'w', newline='', encoding='utf-8') as f:
            f.write(selections_to_csv(rows))
        logger.info(f"Exported {len(rows)} selection(s) to {export_path}")
    else:
        for selection in selections:
            print(json.dumps({
                'rank': selection.rank,
                'role': selection.role,
                'name': selection.candidate.name,
                'email': selection.candidate.email,
                'matchPercentage': selection.match_percentage,
                'reasoning': selection.detailed_reasoning,
            }, ensure_ascii=False))
    return 0


def serve(config) -> int:
    import uvicorn
    from web.backend.app import create_app

    logger.info(f"Starting TalentSift Web Server on {config.web.host}:{config.web.port}")
    uvicorn.run(
        create_app(AppContext.build(config)),
        host=config.web.host,
        port=config.web.port,
        log_level="info"
    )
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="TalentSift candidate selection")
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config file')
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('serve', help='Run the web API')

    run_parser = subparsers.add_parser('run', help='Run a selection over a local JSON file')
    run_parser.add_argument('--file', required=True, help='Candidate JSON file')
    run_parser.add_argument('--query', required=True, help='Free-text hiring request')
    run_parser.add_argument('--export', default=None, help='Write selections to this CSV file')

    args = parser.parse_args(argv)
    config = load_config(args.config)

    if args.command == 'serve':
        return serve(config)

    return run_offline(AppContext.build(config), args.file, args.query, args.export)


if __name__ == "__main__":
    sys.exit(main())
