#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Question Extractor Factory
Centralized extractor selection based on QUESTION_EXTRACTOR_MODE configuration.

This module provides a single entry point for selecting and using question
extractors, so callers never depend on a particular text layout.
"""

from typing import Callable, List

from config.base import QUESTION_EXTRACTOR_MODES
from pdfquiz.domain import Question

Extractor = Callable[..., List[Question]]

EXTRACTOR_MODES = QUESTION_EXTRACTOR_MODES


def get_extractor(mode: str = "regex") -> Extractor:
    """
    Get the extractor function based on the specified mode.

    Args:
        mode: Extractor mode ("regex" or "strict"). Defaults to "regex".

    Returns:
        Extractor function with signature: extract(text, minimum=10) -> list[Question]

    Raises:
        ValueError: If an invalid extractor mode is specified.
    """
    if mode == "strict":
        from pdfquiz.services.extractor import extract_complete_questions as extract
    elif mode == "regex":
        from pdfquiz.services.extractor import extract_questions as extract
    else:
        raise ValueError(
            f"Invalid question extractor mode: {mode}. Must be one of {', '.join(EXTRACTOR_MODES)}."
        )

    return extract


def extract(text: str, mode: str = "regex", minimum: int = 10) -> List[Question]:
    """
    Extract questions from raw text using the specified extractor mode.

    Raises:
        ValueError: If an invalid extractor mode is specified.
        ValidationError: If fewer than ``minimum`` questions are found.
    """
    extractor = get_extractor(mode)
    return extractor(text, minimum=minimum)


__all__ = ["EXTRACTOR_MODES", "get_extractor", "extract"]
