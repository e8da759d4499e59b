"""
Core — Workbook model, extraction and artifacts.
"""

from .workbook import (
    Mode,
    Classification,
    Fragment,
    Scene,
    Workbook,
    ImportSpec,
    load_workbook,
)
from .extraction import Extraction, ExtractedFragment, extract
from .artifacts import Artifact, manifest_json

__all__ = [
    'Mode',
    'Classification',
    'Fragment',
    'Scene',
    'Workbook',
    'ImportSpec',
    'load_workbook',
    'Extraction',
    'ExtractedFragment',
    'extract',
    'Artifact',
    'manifest_json',
]
