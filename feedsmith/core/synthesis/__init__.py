"""Selector synthesis from clicked elements."""

from feedsmith.core.synthesis.session import (
    ContentSelectorSession,
    Idle,
    Listening,
    Selected,
    SelectorSession,
)
from feedsmith.core.synthesis.synthesizer import RESERVED_CLASS_PREFIX, SelectorSynthesizer

__all__ = [
    'ContentSelectorSession',
    'Idle',
    'Listening',
    'RESERVED_CLASS_PREFIX',
    'Selected',
    'SelectorSession',
    'SelectorSynthesizer',
]
