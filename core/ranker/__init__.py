"""Ranking Module - deep analysis and final selections."""
from core.ranker.deep_analyzer import DeepAnalyzer
from core.ranker.models import FinalSelection

__all__ = ['DeepAnalyzer', 'FinalSelection']
