"""Pipeline execution modules for TalentSift."""

from .progress import ProcessingProgress, ProgressLevel, ProgressStage
from .runner import SelectionPipeline

__all__ = ['SelectionPipeline', 'ProcessingProgress', 'ProgressLevel', 'ProgressStage']
